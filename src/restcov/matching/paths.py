"""Translate audit-log request identifiers into schema path templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from restcov._internal.versions import strip_resource_version

if TYPE_CHECKING:
    from restcov.models.audit import ObjectReference

NAMESPACE_PLACEHOLDER = "{namespace}"
NAME_PLACEHOLDER = "{name}"

# Audit logs carry Kubernetes verbs, not HTTP methods.
VERB_METHODS: dict[str, str] = {
    "get": "get",
    "list": "get",
    "watch": "get",
    "watchList": "get",
    "create": "post",
    "delete": "delete",
    "deletecollection": "delete",
    "update": "put",
    "patch": "patch",
}


def swagger_path(
    path: str,
    object_ref: ObjectReference | None,
    *,
    ignore_resource_version: bool = False,
) -> str:
    """Return the schema template for a concrete request *path*.

    ``/apis/kubevirt.io/v1alpha3/namespaces/default/virtualmachineinstances/vm1``
    with a reference to namespace ``default`` and name ``vm1`` becomes
    ``/apis/kubevirt.io/v1alpha3/namespaces/{namespace}/virtualmachineinstances/{name}``.
    """
    if object_ref is not None:
        if object_ref.namespace:
            path = path.replace(
                f"namespaces/{object_ref.namespace}",
                f"namespaces/{NAMESPACE_PLACEHOLDER}",
                1,
            )
        if object_ref.name:
            path = path.replace(
                f"{object_ref.resource}/{object_ref.name}",
                f"{object_ref.resource}/{NAME_PLACEHOLDER}",
                1,
            )
    path = path.lower()
    if ignore_resource_version:
        path = strip_resource_version(path)
    return path


def http_method(verb: str) -> str | None:
    """Return the HTTP method for an audit *verb*, or ``None`` if unknown."""
    return VERB_METHODS.get(verb)
