"""Build the expected-parameter model of a :class:`CoverageReport` from a schema."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from restcov._internal.versions import strip_resource_version
from restcov.matching.diagnostics import DiagnosticCode, Diagnostics
from restcov.models.coverage import CoverageReport, Endpoint

if TYPE_CHECKING:
    from restcov.analysis.schema import Parameter, SwaggerDocument

logger = logging.getLogger(__name__)


def analyze_schema(
    document: SwaggerDocument,
    filter: str = "",  # noqa: A002
    *,
    ignore_resource_version: bool = False,
    diagnostics: Diagnostics | None = None,
) -> CoverageReport:
    """Return a report holding one zeroed :class:`Endpoint` per schema operation.

    Only operations whose lower-cased path starts with *filter* are kept.
    """
    report = CoverageReport()

    for method, path in document.operation_method_paths():
        key_method, key_path = method.lower(), path.lower()
        if not key_path.startswith(filter):
            continue
        if ignore_resource_version:
            key_path = strip_resource_version(key_path)

        methods = report.endpoints.setdefault(key_path, {})
        endpoint = methods.get(key_method)
        if endpoint is None:
            endpoint = Endpoint(path=key_path, method=key_method)
            methods[key_method] = endpoint

        _add_params(endpoint, document.params_for(method, path), document, diagnostics)

    logger.debug("Analyzed %d endpoints", sum(1 for _ in report.iter_endpoints()))
    return report


def _add_params(
    endpoint: Endpoint,
    params: list[Parameter],
    document: SwaggerDocument,
    diagnostics: Diagnostics | None,
) -> None:
    for param in params:
        if param.location == "query":
            if param.name not in endpoint.query:
                endpoint.query[param.name] = 0
                endpoint.expected_unique_hits += 1
        elif param.location == "body":
            endpoint.body_root = param.name
            if param.schema:
                fields = resolve_ref_fields(document, param.schema, param.name, diagnostics=diagnostics)
            else:
                fields = {param.name: 0}
            new = {k: v for k, v in fields.items() if k not in endpoint.body}
            endpoint.body.update(new)
            endpoint.expected_unique_hits += len(new)


def resolve_ref_fields(
    document: SwaggerDocument,
    schema: dict[str, Any],
    prefix: str,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict[str, int]:
    """Flatten *schema* into dotted leaf paths rooted at *prefix*.

    Returns a new ``{path: 0}`` mapping; its length is the number of leaves
    the schema contributes.  References are followed within *document*
    only.  A reference that cannot be resolved, or that is already being
    resolved further up the same branch, contributes no fields.
    """
    return _flatten_schema(document, schema, prefix, frozenset(), diagnostics)


def _flatten_schema(
    document: SwaggerDocument,
    schema: dict[str, Any],
    prefix: str,
    active: frozenset[str],
    diagnostics: Diagnostics | None,
) -> dict[str, int]:
    ref = schema.get("$ref")
    if ref is not None:
        if ref in active:
            if diagnostics is not None:
                diagnostics.warning(
                    DiagnosticCode.CYCLIC_REF,
                    f"Cyclic reference '{ref}' at '{prefix}'",
                )
            return {}
        resolved = document.resolve(ref)
        if resolved is None:
            if diagnostics is not None:
                diagnostics.warning(
                    DiagnosticCode.UNRESOLVED_REF,
                    f"Unresolved reference '{ref}' at '{prefix}'",
                )
            return {}
        return _flatten_schema(document, resolved, prefix, active | {ref}, diagnostics)

    properties = schema.get("properties")
    if properties:
        fields: dict[str, int] = {}
        for name, prop in properties.items():
            fields.update(_flatten_schema(document, prop, f"{prefix}.{name}", active, diagnostics))
        return fields

    items = schema.get("items")
    if isinstance(items, dict) and ("$ref" in items or items.get("properties")):
        return _flatten_schema(document, items, prefix, active, diagnostics)

    return {prefix: 0}
