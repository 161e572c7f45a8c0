"""Turn accumulated hit counts into endpoint and report percentages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from restcov.matching.diagnostics import DiagnosticCode

if TYPE_CHECKING:
    from restcov.matching.diagnostics import Diagnostics
    from restcov.models.coverage import CoverageReport


def calculate_coverage(report: CoverageReport, diagnostics: Diagnostics | None = None) -> CoverageReport:
    """Populate ``percent`` on every endpoint and on *report*.

    Each called endpoint is credited once for its invocation; repeated
    calls do not credit it again.  Hits above the expected number are
    clamped, which happens when the schema under-declares body fields.
    """
    report.unique_hits = 0
    report.expected_unique_hits = 0

    for ep in report.iter_endpoints():
        if ep.method_called and not ep._invocation_credited:
            ep.unique_hits += 1
            ep._invocation_credited = True

        if ep.unique_hits > ep.expected_unique_hits:
            if diagnostics is not None:
                diagnostics.warning(
                    DiagnosticCode.HITS_CLAMPED,
                    f"'{ep.method.upper()} {ep.path}' has {ep.unique_hits} unique hits for "
                    f"{ep.expected_unique_hits} expected; schema definitions may be incomplete",
                    path=ep.path,
                    method=ep.method,
                )
            ep.unique_hits = ep.expected_unique_hits

        if ep.expected_unique_hits > 0:
            report.expected_unique_hits += ep.expected_unique_hits
            report.unique_hits += ep.unique_hits
            ep.percent = ep.unique_hits * 100 / ep.expected_unique_hits
        else:
            ep.percent = 0.0

    if report.expected_unique_hits > 0:
        report.percent = report.unique_hits * 100 / report.expected_unique_hits
    else:
        report.percent = 0.0
    return report
