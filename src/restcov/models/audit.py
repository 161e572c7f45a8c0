"""Models for Kubernetes-style audit log records.

Only the fields the matcher reads are declared; everything else in a record
is kept as extra data and ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_AUDIT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class ObjectReference(BaseModel):
    """The resource a request targets."""

    model_config = _AUDIT_CONFIG

    resource: str = ""
    namespace: str = ""
    name: str = ""


class AuditEvent(BaseModel):
    """One observed request."""

    model_config = _AUDIT_CONFIG

    verb: str = ""
    request_uri: str = Field(alias="requestURI")
    object_ref: ObjectReference | None = None
    request_object: Any = None
