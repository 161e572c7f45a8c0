from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

    from restcov.models.coverage import CoverageReport, Endpoint


def _percent_style(percent: float) -> str:
    if percent >= 80:
        return "green"
    if percent >= 50:
        return "yellow"
    return "red"


def _percent(value: float) -> str:
    style = _percent_style(value)
    return f"[{style}]{value:.2f}%[/{style}]"


class RichOutput:
    """Rich-based terminal output helpers for *restcov*."""

    def __init__(self, console: Console) -> None:
        self._con = console

    # ------------------------------------------------------------------
    # Coverage report
    # ------------------------------------------------------------------

    def coverage_report(self, report: CoverageReport, *, detailed: bool = False) -> None:
        """Print the total coverage, optionally preceded by a per-endpoint table."""
        self._con.print()
        self._con.print("[bold]REST API coverage report:[/bold]")
        self._con.print()

        if detailed:
            self.endpoint_table(report)

        self._con.print(
            f"Total coverage: {_percent(report.percent)} "
            f"[dim]({report.unique_hits}/{report.expected_unique_hits} unique hits)[/dim]",
            highlight=False,
        )

    def endpoint_table(self, report: CoverageReport) -> None:
        """Print one row per path with the coverage of each of its methods."""
        table = Table(title="Endpoints")
        table.add_column("Path", style="cyan")
        table.add_column("Methods")

        for path in sorted(report.endpoints):
            methods = report.endpoints[path]
            cells = [
                f"{ep.method.upper()}: {_percent(ep.percent)}"
                for ep in sorted(methods.values(), key=lambda e: e.method)
            ]
            table.add_row(path, Text.from_markup("  ".join(cells)))

        self._con.print(table)

    def endpoint_detail(self, endpoint: Endpoint) -> None:
        """Print the per-parameter hit counts of a single endpoint."""
        table = Table(title=f"{endpoint.method.upper()} {endpoint.path}")
        table.add_column("Location", style="bold")
        table.add_column("Parameter")
        table.add_column("Hits", justify="right")

        for name, hits in sorted(endpoint.query.items()):
            table.add_row("query", name, self._hits(hits))
        for name, hits in sorted(endpoint.body.items()):
            table.add_row("body", name, self._hits(hits))

        self._con.print(table)

    @staticmethod
    def _hits(hits: int) -> str:
        return str(hits) if hits else "[red]0[/red]"

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def diagnostic_summary(self, counts: dict[str, int]) -> None:
        """Print the number of diagnostics recorded per code."""
        if not counts:
            return
        table = Table(title="Diagnostics")
        table.add_column("Code", style="yellow")
        table.add_column("Count", justify="right")
        for code, count in sorted(counts.items()):
            table.add_row(code, str(count))
        self._con.print(table)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    def info(self, msg: str) -> None:
        """Print an informational message."""
        self._con.print(msg)

    def error(self, msg: str) -> None:
        """Print an error message in bold red."""
        self._con.print(f"[bold red]Error:[/bold red] {msg}")

    def success(self, msg: str) -> None:
        """Print a success message in green."""
        self._con.print(f"[green]{msg}[/green]")
