from __future__ import annotations

from pathlib import Path

import pytest

from restcov.errors import AuditLogError
from restcov.report.audit_log import iter_audit_events


class TestIterAuditEvents:
    def test_reads_fixture(self, audit_log_path: Path) -> None:
        events = list(iter_audit_events(audit_log_path))
        assert len(events) == 8
        line_no, first = events[0]
        assert line_no == 1
        assert first.verb == "create"
        assert first.request_uri == "/pets"
        assert first.object_ref is not None
        assert first.object_ref.resource == "pets"
        assert first.request_object["owner"] == {"name": "ann"}

    def test_skips_blank_lines(self, audit_log_path: Path) -> None:
        line_numbers = [n for n, _ in iter_audit_events(audit_log_path)]
        assert 5 not in line_numbers
        assert line_numbers[-1] == 9

    def test_object_ref_aliases(self, tmp_path: Path) -> None:
        log = tmp_path / "a.log"
        log.write_text(
            '{"verb":"get","requestURI":"/x","objectRef":{"apiGroup":"pets.io","apiVersion":"v1"}}\n',
            encoding="utf-8",
        )
        [(_, event)] = list(iter_audit_events(log))
        assert event.object_ref is not None
        assert event.object_ref.model_extra == {"apiGroup": "pets.io", "apiVersion": "v1"}

    def test_missing_request_uri_is_malformed(self, tmp_path: Path) -> None:
        log = tmp_path / "a.log"
        log.write_text('{"verb":"get"}\n', encoding="utf-8")
        with pytest.raises(AuditLogError, match="line 1"):
            list(iter_audit_events(log))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(AuditLogError, match="Cannot read audit log"):
            list(iter_audit_events(tmp_path / "missing.log"))

    def test_lazy(self, tmp_path: Path) -> None:
        log = tmp_path / "a.log"
        log.write_text('{"verb":"get","requestURI":"/x"}\nnot json\n', encoding="utf-8")
        events = iter_audit_events(log)
        line_no, _ = next(events)
        assert line_no == 1
        with pytest.raises(AuditLogError):
            next(events)

    def test_invalid_utf8_names_line(self, tmp_path: Path) -> None:
        log = tmp_path / "a.log"
        log.write_bytes(b'{"verb":"get","requestURI":"/x"}\n{"verb":"get","requestURI":"/\xff"}\n')
        events = iter_audit_events(log)
        assert next(events)[0] == 1
        with pytest.raises(AuditLogError, match="line 2: Audit event is not valid UTF-8") as exc_info:
            next(events)
        assert exc_info.value.line == 2
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
