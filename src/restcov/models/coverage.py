"""Coverage report models.

Serialized field names are camelCase (``uniqueHits``, ``expectedUniqueHits``,
``paramsHitsDetails`` ...) so dumped reports stay readable by tools that
consume earlier reports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from collections.abc import Iterator

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParamsHitsDetails(BaseModel):
    """Per-parameter hit counts, keyed by query name or dotted body path."""

    model_config = _CAMEL

    query: dict[str, int] = Field(default_factory=dict)
    body: dict[str, int] = Field(default_factory=dict)


class Endpoint(BaseModel):
    """Expected and observed parameters for one ``(path, method)`` pair."""

    model_config = _CAMEL

    path: str
    method: str
    params_hits_details: ParamsHitsDetails = Field(default_factory=ParamsHitsDetails)
    unique_hits: int = 0
    expected_unique_hits: int = 1
    percent: float = 0.0
    method_called: bool = False

    body_root: str | None = Field(default=None, exclude=True)
    """Name of the declared body parameter; observed bodies are flattened under it."""

    _invocation_credited: bool = PrivateAttr(default=False)

    @property
    def query(self) -> dict[str, int]:
        return self.params_hits_details.query

    @property
    def body(self) -> dict[str, int]:
        return self.params_hits_details.body


class CoverageReport(BaseModel):
    """Top-level report: ``endpoints[path][method]`` plus aggregate totals."""

    model_config = _CAMEL

    unique_hits: int = 0
    expected_unique_hits: int = 0
    percent: float = 0.0
    endpoints: dict[str, dict[str, Endpoint]] = Field(default_factory=dict)

    def endpoint(self, path: str, method: str) -> Endpoint | None:
        """Return the endpoint for *path* / *method*, or ``None``."""
        return self.endpoints.get(path, {}).get(method)

    def iter_endpoints(self) -> Iterator[Endpoint]:
        for methods in self.endpoints.values():
            yield from methods.values()

    def mark_finalized(self) -> None:
        """Flag every called endpoint as already credited for its invocation.

        Used for reports read back from disk, whose ``uniqueHits`` already
        include the invocation credit.
        """
        for ep in self.iter_endpoints():
            if ep.method_called:
                ep._invocation_credited = True
