from __future__ import annotations

from restcov.report.audit_log import iter_audit_events
from restcov.report.coverage import calculate_coverage
from restcov.report.generate import generate
from restcov.report.store import dump, load

__all__ = [
    "calculate_coverage",
    "dump",
    "generate",
    "iter_audit_events",
    "load",
]
