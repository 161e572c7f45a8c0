"""Persist reports as JSON and read them back."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from restcov.errors import RestcovError
from restcov.models.coverage import CoverageReport


def dump(report: CoverageReport, path: str | Path) -> Path:
    """Write *report* to *path* using the camelCase field names."""
    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(report.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    return p


def load(path: str | Path) -> CoverageReport:
    """Read a report previously written by :func:`dump`."""
    p = Path(path).expanduser()
    try:
        report = CoverageReport.model_validate_json(p.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise RestcovError(f"Cannot load report {p}: {exc}") from exc
    report.mark_finalized()
    return report
