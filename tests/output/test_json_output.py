from __future__ import annotations

import json

from restcov.models.coverage import CoverageReport, Endpoint
from restcov.output.json_output import format_json_error, format_json_response


class TestFormatJsonResponse:
    """Tests for :func:`format_json_response`."""

    def test_with_report(self) -> None:
        report = CoverageReport(unique_hits=9, expected_unique_hits=10, percent=90.0)
        report.endpoints["/pets"] = {"get": Endpoint(path="/pets", method="get", method_called=True)}

        raw = format_json_response(data=report, command="report")
        parsed = json.loads(raw)

        assert parsed["ok"] is True
        assert parsed["command"] == "report"
        assert parsed["data"]["uniqueHits"] == 9
        assert parsed["data"]["expectedUniqueHits"] == 10
        assert parsed["data"]["percent"] == 90.0
        assert parsed["data"]["endpoints"]["/pets"]["get"]["methodCalled"] is True
        assert "timestamp" in parsed

    def test_dict_with_nested_model(self) -> None:
        raw = format_json_response(
            data={"report": CoverageReport(), "diagnostics": {"path_not_found": 2}},
            command="report",
        )
        parsed = json.loads(raw)

        assert parsed["data"]["report"]["endpoints"] == {}
        assert parsed["data"]["diagnostics"] == {"path_not_found": 2}

    def test_with_list_of_models(self) -> None:
        endpoints = [Endpoint(path="/pets", method="get"), Endpoint(path="/pets", method="post")]
        parsed = json.loads(format_json_response(data=endpoints, command="show"))

        assert [e["method"] for e in parsed["data"]] == ["get", "post"]


class TestFormatJsonError:
    """Tests for :func:`format_json_error`."""

    def test_basic_error(self) -> None:
        raw = format_json_error(code="schema_error", message="Cannot read schema file", command="report")
        parsed = json.loads(raw)

        assert parsed["ok"] is False
        assert parsed["command"] == "report"
        assert parsed["error"]["code"] == "schema_error"
        assert parsed["error"]["message"] == "Cannot read schema file"
        assert "timestamp" in parsed

    def test_extra_fields(self) -> None:
        raw = format_json_error(code="audit_log_error", message="bad", command="report", line=3)
        parsed = json.loads(raw)
        assert parsed["error"]["line"] == 3


class TestEnvelope:
    def test_carries_version(self) -> None:
        from restcov import __version__

        parsed = json.loads(format_json_response(data=None, command="report"))
        assert parsed["version"] == __version__
        assert parsed["data"] is None
