"""Top-level report generation: analyze, match, aggregate."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from restcov.analysis.analyzer import analyze_schema
from restcov.analysis.schema import SwaggerDocument
from restcov.errors import AuditLogError
from restcov.matching.diagnostics import Diagnostics
from restcov.matching.matcher import match_request
from restcov.report.audit_log import iter_audit_events
from restcov.report.coverage import calculate_coverage

if TYPE_CHECKING:
    from pathlib import Path

    from restcov.models.coverage import CoverageReport

logger = logging.getLogger(__name__)


def generate(
    audit_log_path: str | Path,
    swagger_path: str | Path,
    filter: str = "",  # noqa: A002
    *,
    ignore_resource_version: bool = False,
    diagnostics: Diagnostics | None = None,
) -> CoverageReport:
    """Build a full coverage report from an audit log and a schema file.

    *filter* limits the report to paths starting with it, e.g.
    ``/apis/kubevirt.io/v1alpha3/``; an empty filter keeps everything.
    Soft matching problems are appended to *diagnostics*.
    """
    start = time.monotonic()
    if diagnostics is None:
        diagnostics = Diagnostics()

    document = SwaggerDocument.load(swagger_path)
    report = analyze_schema(
        document,
        filter.lower(),
        ignore_resource_version=ignore_resource_version,
        diagnostics=diagnostics,
    )

    requests = 0
    for line_no, event in iter_audit_events(audit_log_path):
        try:
            match_request(report, event, diagnostics, ignore_resource_version=ignore_resource_version)
        except AuditLogError as exc:
            raise AuditLogError(str(exc), line=line_no) from exc
        requests += 1

    calculate_coverage(report, diagnostics)
    logger.info(
        "REST API coverage execution time: %.3fs (%d requests, %d diagnostics)",
        time.monotonic() - start,
        requests,
        len(diagnostics),
    )
    return report
