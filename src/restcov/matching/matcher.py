"""Fold observed requests into a :class:`CoverageReport`.

Every function here mutates hit counts of an existing endpoint only; keys
are fixed by the analyzer, so an observed parameter the schema does not
declare is recorded as a diagnostic rather than added.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlsplit

from restcov.errors import AuditLogError, RequestBodyError
from restcov.matching.body import JsonArray, NodeKind, flatten_body, to_json_node
from restcov.matching.diagnostics import DiagnosticCode, Diagnostics
from restcov.matching.paths import http_method, swagger_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from restcov.models.audit import AuditEvent
    from restcov.models.coverage import CoverageReport, Endpoint


def _label(endpoint: Endpoint) -> str:
    return f"{endpoint.method.upper()} {endpoint.path}"


def _hit(counts: dict[str, int], key: str, endpoint: Endpoint) -> None:
    if counts[key] < 1:
        endpoint.unique_hits += 1
    counts[key] += 1


def match_query_params(names: Iterable[str], endpoint: Endpoint, diagnostics: Diagnostics) -> None:
    """Count each query parameter *name* observed on a request to *endpoint*."""
    for name in names:
        if name in endpoint.query:
            _hit(endpoint.query, name, endpoint)
        else:
            diagnostics.error(
                DiagnosticCode.INVALID_QUERY_PARAM,
                f"Invalid query param: '{name}' for '{_label(endpoint)}'",
                path=endpoint.path,
                method=endpoint.method,
            )


def decode_body(raw: Any, endpoint: Endpoint) -> Any:
    """Return the request body as a decoded JSON value.

    Bodies read from an audit log arrive already decoded and are returned
    unchanged; raw ``bytes`` payloads are parsed as JSON first.
    """
    if isinstance(raw, bytes):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise RequestBodyError(str(exc), method=endpoint.method, path=endpoint.path) from exc
    return raw


def match_body_params(request_object: Any, endpoint: Endpoint, diagnostics: Diagnostics) -> None:
    """Count the body fields of *request_object* against *endpoint*.

    A top-level array is matched element by element.  Bodies sent to an
    endpoint that declares no body parameters are reported and ignored.
    """
    if request_object is None:
        return
    if not endpoint.body:
        diagnostics.warning(
            DiagnosticCode.UNEXPECTED_BODY,
            f"Request '{_label(endpoint)}' should not contain body params",
            path=endpoint.path,
            method=endpoint.method,
        )
        return

    root = endpoint.body_root or ""
    node = to_json_node(decode_body(request_object, endpoint))
    documents = node.items if isinstance(node, JsonArray) else [node]

    for doc in documents:
        if root in endpoint.body:
            # Body declared without structure: any payload covers it.
            _hit(endpoint.body, root, endpoint)
            continue
        if doc.kind is not NodeKind.OBJECT:
            diagnostics.error(
                DiagnosticCode.INVALID_BODY,
                f"Invalid requestObject: expected object, got {doc.kind} for '{_label(endpoint)}'",
                path=endpoint.path,
                method=endpoint.method,
            )
            continue
        for path in flatten_body(doc, root):
            if path in endpoint.body:
                _hit(endpoint.body, path, endpoint)
            else:
                diagnostics.error(
                    DiagnosticCode.INVALID_BODY_PARAM,
                    f"Invalid body param: '{path}' for '{_label(endpoint)}'",
                    path=endpoint.path,
                    method=endpoint.method,
                )


def match_request(
    report: CoverageReport,
    event: AuditEvent,
    diagnostics: Diagnostics,
    *,
    ignore_resource_version: bool = False,
) -> Endpoint | None:
    """Apply one audit *event* to *report*.

    Returns the matched endpoint, or ``None`` when the request was skipped
    (unknown verb, path or method).
    """
    try:
        uri = urlsplit(event.request_uri)
        query = parse_qs(uri.query, keep_blank_values=True)
    except ValueError as exc:
        raise AuditLogError(f"Invalid requestURI '{event.request_uri}': {exc}") from exc

    path = swagger_path(uri.path, event.object_ref, ignore_resource_version=ignore_resource_version)
    methods = report.endpoints.get(path)
    if methods is None:
        diagnostics.error(
            DiagnosticCode.PATH_NOT_FOUND,
            f"Path '{path}' not found in swagger",
            path=path,
        )
        return None

    method = http_method(event.verb)
    if method is None:
        diagnostics.error(
            DiagnosticCode.UNKNOWN_VERB,
            f"Verb '{event.verb}' has no HTTP method for '{path}' path",
            path=path,
        )
        return None

    endpoint = methods.get(method)
    if endpoint is None:
        diagnostics.error(
            DiagnosticCode.METHOD_NOT_FOUND,
            f"Method '{method}' not found for '{path}' path",
            path=path,
            method=method,
        )
        return None

    endpoint.method_called = True
    match_query_params(query, endpoint, diagnostics)
    match_body_params(event.request_object, endpoint, diagnostics)
    return endpoint
