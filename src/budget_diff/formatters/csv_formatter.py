"""CSV export of comparison rows.

One header row, then one row per diff in the order given (normally the
projected view). Amounts are plain numbers so spreadsheets parse them;
an absent amount is an empty field, which keeps it distinct from zero.
"""

import csv
import io
from dataclasses import dataclass
from typing import Iterable, Optional

from ..comparison.models import LineDiff, version_label
from ..comparison.report import ComparisonReport
from ..comparison.summary import summarize
from ..math import SafeMath
from .base import BaseFormatter

TOTAL_ROW_LABEL = "TOTAL"


@dataclass(frozen=True)
class VersionLabels:
    """Column captions for the two compared versions."""

    v1: str
    v2: str

    @classmethod
    def for_versions(cls, v1_version, v2_version) -> "VersionLabels":
        return cls(v1=version_label(v1_version), v2=version_label(v2_version))


def format_amount(value: Optional[float]) -> str:
    """Plain, lossless number text: ``100``, ``99.5``, or empty for absent."""
    if value is None:
        return ""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def csv_header(labels: VersionLabels) -> list[str]:
    return ["Cost Line", "Category", labels.v1, labels.v2, "Change", "Change %", "Status"]


def _row(diff: LineDiff) -> list[str]:
    return [
        diff.display_name,
        diff.category,
        format_amount(diff.v1_amount),
        format_amount(diff.v2_amount),
        format_amount(diff.change),
        SafeMath.format_percent(diff.change_percent),
        diff.status.value,
    ]


def to_csv(
    rows: Iterable[LineDiff],
    version_labels: VersionLabels,
    include_totals: bool = False,
) -> str:
    """Serialize diffs to CSV text.

    Args:
        rows: Diffs in output order.
        version_labels: Captions for the two amount columns.
        include_totals: Append a TOTAL row summing the exported rows.

    Returns:
        CSV text. Fields containing a comma, quote, or newline are quoted.
    """
    rows = list(rows)
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(csv_header(version_labels))
    for diff in rows:
        writer.writerow(_row(diff))

    if include_totals:
        summary = summarize(rows)
        writer.writerow([
            TOTAL_ROW_LABEL, "",
            format_amount(summary.v1_total),
            format_amount(summary.v2_total),
            format_amount(summary.total_change),
            SafeMath.format_percent(summary.change_percent),
            "",
        ])
    return output.getvalue()


class CsvFormatter(BaseFormatter):
    """Render the projected rows of a report as CSV."""

    def __init__(self, include_totals: bool = False):
        self.include_totals = include_totals

    def render(self, report: ComparisonReport) -> None:
        print(self.format(report), end="")

    def format(self, report: ComparisonReport) -> str:
        labels = VersionLabels(v1=report.v1_label, v2=report.v2_label)
        return to_csv(report.rows, labels, include_totals=self.include_totals)
