"""API version placeholders for Kubernetes-style resource paths."""

from __future__ import annotations

import re

VERSION_PLACEHOLDER = "{version}"

_GROUP_VERSION_RE = re.compile(r"^(/apis/[^/]+/)[^/]+(?=/|$)")
_CORE_VERSION_RE = re.compile(r"^(/api/)[^/]+(?=/|$)")


def strip_resource_version(path: str) -> str:
    """Replace the API version segment of a group or core path.

    ``/apis/kubevirt.io/v1alpha3/namespaces`` becomes
    ``/apis/kubevirt.io/{version}/namespaces``; ``/api/v1/pods`` becomes
    ``/api/{version}/pods``.  Other paths are returned unchanged.
    """
    path, n = _GROUP_VERSION_RE.subn(rf"\g<1>{VERSION_PLACEHOLDER}", path)
    if n:
        return path
    return _CORE_VERSION_RE.sub(rf"\g<1>{VERSION_PLACEHOLDER}", path)
