from __future__ import annotations

from pathlib import Path

import pytest

from restcov.analysis.schema import Parameter, SwaggerDocument
from restcov.errors import SchemaError


class TestLoad:
    def test_loads_fixture(self, petstore: SwaggerDocument) -> None:
        assert not petstore.is_openapi3
        assert petstore.source is not None
        assert petstore.source.endswith("petstore.json")

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaError, match="Cannot read schema file"):
            SwaggerDocument.load(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaError, match="Cannot parse schema file") as exc_info:
            SwaggerDocument.load(bad)
        assert exc_info.value.source == str(bad)
        assert exc_info.value.__cause__ is not None

    def test_non_object_document_raises(self) -> None:
        with pytest.raises(SchemaError, match="JSON object"):
            SwaggerDocument([])  # type: ignore[arg-type]


class TestOperations:
    def test_operation_method_paths(self, petstore: SwaggerDocument) -> None:
        pairs = set(petstore.operation_method_paths())
        assert ("GET", "/pets") in pairs
        assert ("POST", "/pets") in pairs
        assert ("DELETE", "/pets/{name}") in pairs
        assert ("PATCH", "/apis/pets.io/v1/namespaces/{namespace}/pets/{name}") in pairs
        assert len(pairs) == 7

    def test_path_level_parameters_are_not_operations(self, petstore: SwaggerDocument) -> None:
        methods = {m for m, p in petstore.operation_method_paths() if p == "/pets/{name}"}
        assert methods == {"GET", "PUT", "DELETE"}

    def test_params_for_merges_path_level(self, petstore: SwaggerDocument) -> None:
        params = petstore.params_for("GET", "/pets/{name}")
        assert params == [Parameter(name="name", location="path")]

    def test_params_for_resolves_parameter_ref(self, petstore: SwaggerDocument) -> None:
        params = petstore.params_for("DELETE", "/pets/{name}")
        assert Parameter(name="gracePeriodSeconds", location="query") in params

    def test_operation_param_overrides_path_level(self) -> None:
        doc = SwaggerDocument(
            {
                "paths": {
                    "/x": {
                        "parameters": [{"name": "q", "in": "query", "description": "path"}],
                        "get": {"parameters": [{"name": "q", "in": "query", "schema": {"type": "string"}}]},
                    }
                }
            }
        )
        params = doc.params_for("GET", "/x")
        assert params == [Parameter(name="q", location="query", schema={"type": "string"})]

    def test_unknown_path_raises(self, petstore: SwaggerDocument) -> None:
        with pytest.raises(SchemaError, match="not declared"):
            petstore.params_for("GET", "/nope")


class TestOpenAPI3:
    def test_request_body_becomes_body_parameter(self) -> None:
        doc = SwaggerDocument(
            {
                "openapi": "3.0.0",
                "paths": {
                    "/pets": {
                        "post": {
                            "requestBody": {
                                "content": {
                                    "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}
                                }
                            }
                        }
                    }
                },
                "components": {"schemas": {"Pet": {"properties": {"name": {"type": "string"}}}}},
            }
        )
        assert doc.is_openapi3
        params = doc.params_for("POST", "/pets")
        assert params == [Parameter("body", "body", {"$ref": "#/components/schemas/Pet"})]

    def test_request_body_ref(self) -> None:
        doc = SwaggerDocument(
            {
                "openapi": "3.0.0",
                "paths": {"/pets": {"put": {"requestBody": {"$ref": "#/components/requestBodies/PetBody"}}}},
                "components": {
                    "requestBodies": {
                        "PetBody": {"content": {"application/yaml": {"schema": {"type": "object"}}}}
                    }
                },
            }
        )
        params = doc.params_for("PUT", "/pets")
        assert params == [Parameter("body", "body", {"type": "object"})]


class TestResolve:
    def test_local_definition(self, petstore: SwaggerDocument) -> None:
        owner = petstore.resolve("#/definitions/Owner")
        assert owner is not None
        assert set(owner["properties"]) == {"name", "email"}

    def test_external_reference_is_none(self, petstore: SwaggerDocument) -> None:
        assert petstore.resolve("other.json#/definitions/Owner") is None

    def test_dangling_reference_is_none(self, petstore: SwaggerDocument) -> None:
        assert petstore.resolve("#/definitions/Missing") is None

    def test_escaped_tokens(self) -> None:
        doc = SwaggerDocument({"paths": {}, "definitions": {"a/b": {"type": "string"}}})
        assert doc.resolve("#/definitions/a~1b") == {"type": "string"}
