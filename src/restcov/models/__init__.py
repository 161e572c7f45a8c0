from __future__ import annotations

from restcov.models.audit import AuditEvent, ObjectReference
from restcov.models.config import AppSettings
from restcov.models.coverage import CoverageReport, Endpoint, ParamsHitsDetails

__all__ = [
    # audit
    "AuditEvent",
    "ObjectReference",
    # config
    "AppSettings",
    # coverage
    "CoverageReport",
    "Endpoint",
    "ParamsHitsDetails",
]
