"""Shared fixtures: schema documents and audit logs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from restcov.analysis.schema import SwaggerDocument

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture()
def petstore_path() -> Path:
    return FIXTURES / "petstore.json"


@pytest.fixture()
def audit_log_path() -> Path:
    return FIXTURES / "audit.log"


@pytest.fixture()
def petstore(petstore_path: Path) -> SwaggerDocument:
    return SwaggerDocument.load(petstore_path)


@pytest.fixture()
def two_endpoint_spec() -> dict[str, Any]:
    """``POST /pets`` with six body leaves and ``GET /pets`` with two query params."""
    return {
        "swagger": "2.0",
        "paths": {
            "/pets": {
                "get": {
                    "parameters": [
                        {"name": "limit", "in": "query"},
                        {"name": "offset", "in": "query"},
                    ]
                },
                "post": {
                    "parameters": [
                        {"name": "pet", "in": "body", "schema": {"$ref": "#/definitions/Pet"}},
                    ]
                },
            }
        },
        "definitions": {
            "Pet": {
                "properties": {
                    "name": {"type": "string"},
                    "kind": {"type": "string"},
                    "age": {"type": "integer"},
                    "owner": {"$ref": "#/definitions/Owner"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                }
            },
            "Owner": {
                "properties": {
                    "name": {"type": "string"},
                    "email": {"type": "string"},
                }
            },
        },
    }


def write_audit_log(path: Path, events: list[dict[str, Any]]) -> Path:
    """Write *events* as JSON lines to *path*."""
    path.write_text("\n".join(json.dumps(e) for e in events) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def make_audit_log(tmp_path: Path):  # type: ignore[no-untyped-def]
    """Return a factory writing a JSON-lines audit log into ``tmp_path``."""

    def _make(events: list[dict[str, Any]], name: str = "audit.log") -> Path:
        return write_audit_log(tmp_path / name, events)

    return _make


@pytest.fixture()
def make_swagger(tmp_path: Path):  # type: ignore[no-untyped-def]
    """Return a factory writing a schema document into ``tmp_path``."""

    def _make(spec: dict[str, Any], name: str = "swagger.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(spec), encoding="utf-8")
        return path

    return _make
