from __future__ import annotations

from restcov.matching.body import (
    JsonArray,
    JsonNode,
    JsonObject,
    JsonScalar,
    NodeKind,
    flatten_body,
    to_json_node,
)
from restcov.matching.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticLevel,
    Diagnostics,
    logging_sink,
)
from restcov.matching.matcher import match_body_params, match_query_params, match_request
from restcov.matching.paths import VERB_METHODS, http_method, swagger_path

__all__ = [
    # body
    "JsonArray",
    "JsonNode",
    "JsonObject",
    "JsonScalar",
    "NodeKind",
    "flatten_body",
    "to_json_node",
    # diagnostics
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticLevel",
    "Diagnostics",
    "logging_sink",
    # matcher
    "match_body_params",
    "match_query_params",
    "match_request",
    # paths
    "VERB_METHODS",
    "http_method",
    "swagger_path",
]
