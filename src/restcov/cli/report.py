"""CLI commands: ``report`` and ``show``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from restcov.errors import ConfigError
from restcov.matching.diagnostics import Diagnostics, logging_sink
from restcov.models.config import AppSettings
from restcov.report import dump, generate, load

if TYPE_CHECKING:
    from restcov.cli.main import AppContext

logger = logging.getLogger(__name__)
diagnostics_logger = logging.getLogger("restcov.diagnostics")


@click.command("report")
@click.option("--swagger-path", default=None, help="Path to the Swagger/OpenAPI JSON file")
@click.option("--audit-log-path", default=None, help="Path to the JSON-lines audit log")
@click.option(
    "--filter",
    "path_filter",
    default=None,
    help="Only cover paths starting with this prefix, e.g. /apis/kubevirt.io/v1alpha3/",
)
@click.option("--output-path", default=None, help="Write the report as JSON to this file")
@click.option("--detailed", is_flag=True, default=False, help="Show coverage for each endpoint")
@click.option(
    "--ignore-resource-version",
    is_flag=True,
    default=False,
    help="Merge endpoints that differ only by API version",
)
@click.pass_obj
def report_cmd(
    app_ctx: AppContext,
    swagger_path: str | None,
    audit_log_path: str | None,
    path_filter: str | None,
    output_path: str | None,
    detailed: bool,
    ignore_resource_version: bool,
) -> None:
    """Generate a REST API coverage report from an audit log."""
    settings = AppSettings()
    swagger_path = swagger_path or settings.swagger_path
    audit_log_path = audit_log_path or settings.audit_log_path
    if not swagger_path or not audit_log_path:
        raise ConfigError("Both a swagger path and an audit log path are required.")

    if path_filter is None:
        path_filter = settings.filter
    output_path = output_path or settings.output_path
    detailed = detailed or settings.detailed
    ignore_resource_version = ignore_resource_version or settings.ignore_resource_version

    diagnostics = Diagnostics(sink=logging_sink(diagnostics_logger))
    report = generate(
        audit_log_path,
        swagger_path,
        path_filter,
        ignore_resource_version=ignore_resource_version,
        diagnostics=diagnostics,
    )

    formatter = app_ctx.formatter
    if output_path:
        written = dump(report, output_path)
        logger.debug("Report written to %s", written)
        if formatter.format == "json":
            formatter.output(
                {"outputPath": str(written), "percent": report.percent},
                command="report",
            )
        else:
            formatter.rich.success(f"Report written to {written}")
        return

    formatter.output_report(
        report,
        command="report",
        detailed=detailed,
        diagnostics=diagnostics.counts(),
    )


@click.command("show")
@click.argument("report_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--path", "endpoint_path", default=None, help="Show parameter hits for this path")
@click.option("--detailed", is_flag=True, default=False, help="Show coverage for each endpoint")
@click.pass_obj
def show_cmd(
    app_ctx: AppContext,
    report_path: str,
    endpoint_path: str | None,
    detailed: bool,
) -> None:
    """Display a report previously written with --output-path."""
    report = load(report_path)
    formatter = app_ctx.formatter

    if endpoint_path is None:
        formatter.output_report(report, command="show", detailed=detailed)
        return

    methods = report.endpoints.get(endpoint_path.lower())
    if methods is None:
        raise click.UsageError(f"Path '{endpoint_path}' is not in the report.")
    if formatter.format == "json":
        formatter.output(list(methods.values()), command="show")
        return
    for endpoint in methods.values():
        formatter.rich.endpoint_detail(endpoint)
