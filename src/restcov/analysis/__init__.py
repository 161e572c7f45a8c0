from __future__ import annotations

from restcov.analysis.analyzer import analyze_schema, resolve_ref_fields
from restcov.analysis.schema import Parameter, SwaggerDocument

__all__ = [
    "Parameter",
    "SwaggerDocument",
    "analyze_schema",
    "resolve_ref_fields",
]
