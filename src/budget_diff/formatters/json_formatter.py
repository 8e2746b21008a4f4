"""JSON formatter for comparison reports."""

import json
from dataclasses import asdict
from typing import Any

from ..comparison.models import LineDiff
from ..comparison.report import ComparisonReport
from .base import BaseFormatter


def _diff_dict(diff: LineDiff) -> dict[str, Any]:
    data = asdict(diff)
    data["identity"] = str(diff.identity)
    data["status"] = diff.status.value
    data["status_label"] = diff.status_label
    return data


class JsonFormatter(BaseFormatter):
    """Render a report as JSON."""

    def render(self, report: ComparisonReport) -> None:
        print(self.format(report))

    def format(self, report: ComparisonReport) -> str:
        insights = report.insights
        data = {
            "v1": report.v1_label,
            "v2": report.v2_label,
            "options": asdict(report.options),
            "summary": asdict(report.summary),
            "categories": [asdict(r) for r in report.rollups],
            "insights": {
                "top_increases": [str(d.identity) for d in insights.top_increases],
                "top_decreases": [str(d.identity) for d in insights.top_decreases],
                "largest_percent": (
                    str(insights.largest_percent.identity) if insights.largest_percent else None
                ),
            },
            "rows": [_diff_dict(d) for d in report.rows],
        }
        return json.dumps(data, indent=2)
