"""Read-only view over a parsed Swagger 2.0 or OpenAPI 3 document.

Only what the analyzer needs is exposed: the ``(METHOD, path)`` operation
pairs, the parameters declared for each operation, and resolution of local
``#/...`` references.  References into other files are never followed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from restcov.errors import SchemaError

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

LOCAL_REF_PREFIX = "#/"


@dataclass(frozen=True)
class Parameter:
    """One declared operation parameter."""

    name: str
    location: str
    schema: dict[str, Any] | None = None


class SwaggerDocument:
    """A parsed API schema document."""

    def __init__(self, spec: dict[str, Any], *, source: str | None = None) -> None:
        if not isinstance(spec, dict):
            raise SchemaError("Schema document must be a JSON object", source=source)
        paths = spec.get("paths", {})
        if not isinstance(paths, dict):
            raise SchemaError("'paths' must be a JSON object", source=source)
        self._spec = spec
        self._paths: dict[str, Any] = paths
        self.source = source

    @classmethod
    def load(cls, path: str | Path) -> SwaggerDocument:
        """Read and parse a JSON schema document from *path*."""
        p = Path(path).expanduser()
        try:
            raw = p.read_text(encoding="utf-8")
        except OSError as exc:
            raise SchemaError(f"Cannot read schema file: {exc}", source=str(p)) from exc
        try:
            spec = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Cannot parse schema file {p}: {exc}", source=str(p)) from exc
        logger.debug("Loaded schema %s (%d paths)", p, len(spec.get("paths", {})))
        return cls(spec, source=str(p))

    @property
    def is_openapi3(self) -> bool:
        return "openapi" in self._spec

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def operation_method_paths(self) -> list[tuple[str, str]]:
        """Return every declared operation as an ``(METHOD, path)`` pair."""
        pairs: list[tuple[str, str]] = []
        for path, item in self._paths.items():
            if not isinstance(item, dict):
                raise SchemaError(f"Invalid path item for '{path}'", source=self.source)
            for method in item:
                if method.lower() in HTTP_METHODS:
                    pairs.append((method.upper(), path))
        return pairs

    def params_for(self, method: str, path: str) -> list[Parameter]:
        """Return the parameters declared for *method* on *path*.

        Path-level parameters are merged with the operation's own; the
        operation wins when both declare the same ``(name, in)`` pair.
        """
        item = self._paths.get(path)
        if item is None:
            raise SchemaError(f"Path '{path}' not declared", source=self.source)
        operation = next((op for key, op in item.items() if key.lower() == method.lower()), None)
        if operation is None:
            raise SchemaError(f"Method '{method}' not declared for '{path}'", source=self.source)

        merged: dict[tuple[str, str], Parameter] = {}
        for raw in [*item.get("parameters", []), *operation.get("parameters", [])]:
            param = self._parameter(raw)
            if param is not None:
                merged[(param.name, param.location)] = param

        if self.is_openapi3 and "requestBody" in operation:
            schema = self._request_body_schema(operation["requestBody"])
            merged[("body", "body")] = Parameter("body", "body", schema)

        return list(merged.values())

    def _parameter(self, raw: dict[str, Any]) -> Parameter | None:
        if "$ref" in raw:
            resolved = self.resolve(raw["$ref"])
            if resolved is None:
                logger.debug("Skipping unresolved parameter reference %s", raw["$ref"])
                return None
            raw = resolved
        name = raw.get("name")
        location = raw.get("in")
        if not name or not location:
            return None
        return Parameter(name=name, location=location, schema=raw.get("schema"))

    def _request_body_schema(self, body: dict[str, Any]) -> dict[str, Any] | None:
        if "$ref" in body:
            body = self.resolve(body["$ref"]) or {}
        content = body.get("content") or {}
        if not content:
            return None
        media = content.get("application/json") or next(iter(content.values()))
        return media.get("schema") if isinstance(media, dict) else None

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def resolve(self, ref: str) -> dict[str, Any] | None:
        """Resolve a local JSON pointer such as ``#/definitions/Pet``.

        Returns ``None`` for references into other documents and for
        pointers that do not lead anywhere.
        """
        if not ref.startswith(LOCAL_REF_PREFIX):
            return None
        node: Any = self._spec
        for token in ref[len(LOCAL_REF_PREFIX) :].split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if not isinstance(node, dict) or token not in node:
                return None
            node = node[token]
        return node if isinstance(node, dict) else None
