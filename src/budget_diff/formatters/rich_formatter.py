"""Rich terminal formatter for comparison reports.

Renders the summary panel, the per-category rollup, the filtered line
table and the variance drivers with colour-coded statuses.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..comparison.models import LineDiff
from ..comparison.report import ComparisonReport
from ..math import SafeMath
from .base import BaseFormatter

_STATUS_STYLE = {
    "added": "[blue]added[/blue]",
    "removed": "[red]removed[/red]",
    "increased": "[yellow]increased ↑[/yellow]",
    "decreased": "[green]decreased ↓[/green]",
    "unchanged": "[dim]unchanged[/dim]",
}


def _amount(value: Optional[float]) -> str:
    if value is None:
        return "[dim]-[/dim]"
    return f"{value:,.2f}"


def _change(value: float) -> str:
    if value > 0:
        return f"[yellow]+{value:,.2f}[/yellow]"
    if value < 0:
        return f"[green]{value:,.2f}[/green]"
    return "[dim]0.00[/dim]"


def _line(diff: LineDiff) -> str:
    return f"{escape(diff.display_name)} [dim]({escape(diff.category)})[/dim]"


class RichFormatter(BaseFormatter):
    """Colour terminal output for a comparison."""

    def __init__(self, console: Optional[Console] = None, show_insights: bool = True):
        self._console = console or Console()
        self.show_insights = show_insights

    def render(self, report: ComparisonReport) -> None:
        self._print_summary(report)
        self._print_rollups(report)
        self._print_rows(report)
        if self.show_insights:
            self._print_insights(report)

    def format(self, report: ComparisonReport) -> str:
        with self._console.capture() as capture:
            self.render(report)
        return capture.get()

    def _print_summary(self, report: ComparisonReport) -> None:
        s = report.summary
        parts = [
            f"{escape(report.v1_label)}: {s.v1_total:,.2f}",
            f"{escape(report.v2_label)}: {s.v2_total:,.2f}",
            f"Net: {_change(s.total_change)} ({SafeMath.format_percent(s.change_percent)})",
        ]
        counts = "  |  ".join(
            f"{_STATUS_STYLE[key]}: {s.count(key)}"
            for key in ("added", "removed", "increased", "decreased", "unchanged")
            if s.count(key)
        )
        body = "\n".join(["  ".join(parts), counts or "No line items"])
        body += f"\n[dim]{s.line_count} lines, {s.changed_ratio:.0%} changed[/dim]"
        self._console.print(
            Panel(body, title="[bold cyan]Version Comparison[/bold cyan]", expand=False)
        )
        self._console.print()

    def _print_rollups(self, report: ComparisonReport) -> None:
        if not report.rollups:
            return
        table = Table(title="By Category", expand=True)
        table.add_column("Category", style="cyan", ratio=3)
        table.add_column(report.v1_label, justify="right")
        table.add_column(report.v2_label, justify="right")
        table.add_column("Change", justify="right")
        table.add_column("Change %", justify="right")
        for r in report.rollups:
            table.add_row(
                escape(r.category),
                _amount(r.v1_total),
                _amount(r.v2_total),
                _change(r.change),
                SafeMath.format_percent(r.change_percent),
            )
        self._console.print(table)
        self._console.print()

    def _print_rows(self, report: ComparisonReport) -> None:
        if not report.rows:
            self._console.print("[yellow]No line items match the current view.[/yellow]")
            return
        table = Table(title=f"Line Items ({len(report.rows)} of {len(report.diffs)})", expand=True)
        table.add_column("Cost Line", style="yellow", ratio=3)
        table.add_column("Category", ratio=2)
        table.add_column(report.v1_label, justify="right")
        table.add_column(report.v2_label, justify="right")
        table.add_column("Change", justify="right")
        table.add_column("Change %", justify="right")
        table.add_column("Status", justify="center")
        for d in report.rows:
            table.add_row(
                escape(d.display_name),
                escape(d.category),
                _amount(d.v1_amount),
                _amount(d.v2_amount),
                _change(d.change),
                SafeMath.format_percent(d.change_percent),
                _STATUS_STYLE.get(d.status_label, d.status_label),
            )
        self._console.print(table)
        self._console.print()

    def _print_insights(self, report: ComparisonReport) -> None:
        insights = report.insights
        if insights.top_increases:
            self._console.print("[bold]Top increases[/bold]")
            for d in insights.top_increases:
                self._console.print(f"  {_line(d)}  {_change(d.change)}")
        if insights.top_decreases:
            self._console.print("[bold]Top decreases[/bold]")
            for d in insights.top_decreases:
                self._console.print(f"  {_line(d)}  {_change(d.change)}")
        if report.has_significant_percent_change:
            d = insights.largest_percent
            self._console.print(
                f"[bold magenta]Notable:[/bold magenta] {_line(d)} changed by "
                f"{SafeMath.format_percent(d.change_percent)} ({_change(d.change)})"
            )
