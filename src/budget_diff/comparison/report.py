"""Comparison report: one pass through the pipeline for a pair of snapshots.

    snapshots -> reconcile -> {summarize, rollup, insights, project}

Formatters and the CLI consume a ``ComparisonReport``; they never call the
engine themselves, so the table, the charts and the CSV export all read
the same diff set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..config import ComparisonConfig, default_config
from .cache import ComparisonCache
from .engine import reconcile
from .models import (
    CategoryRollup,
    ComparisonSummary,
    DiffSet,
    LineDiff,
    VarianceInsights,
    VersionSnapshot,
    version_label,
)
from .projection import ALL_CATEGORIES, available_categories, project
from .summary import rollup_by_category, summarize, variance_insights


@dataclass(frozen=True)
class ViewOptions:
    """The user's current table view."""

    view_mode: str = "all"
    category: str = ALL_CATEGORIES
    search_term: str = ""
    sort_field: str = "display_name"
    sort_direction: str = "asc"

    @classmethod
    def from_config(cls, config: ComparisonConfig, **overrides) -> "ViewOptions":
        values = {
            "view_mode": config.view_mode,
            "sort_field": config.sort_field,
            "sort_direction": config.sort_direction,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class ComparisonReport:
    """Everything a view needs to render one comparison."""

    diffs: DiffSet
    rows: list[LineDiff]
    summary: ComparisonSummary
    rollups: list[CategoryRollup]
    insights: VarianceInsights
    categories: list[str]
    options: ViewOptions = field(default_factory=ViewOptions)
    significant_change_percent: float = 20.0

    @property
    def v1_label(self) -> str:
        return version_label(self.diffs.v1_version)

    @property
    def v2_label(self) -> str:
        return version_label(self.diffs.v2_version)

    @property
    def has_significant_percent_change(self) -> bool:
        """True when the largest percent mover exceeds the configured threshold."""
        largest = self.insights.largest_percent
        if largest is None:
            return False
        return abs(largest.change_percent) > self.significant_change_percent


def build_report(
    v1: VersionSnapshot,
    v2: VersionSnapshot,
    options: Optional[ViewOptions] = None,
    config: Optional[ComparisonConfig] = None,
    cache: Optional[ComparisonCache] = None,
) -> ComparisonReport:
    """Reconcile two snapshots and derive every view of the result.

    Pass a ``ComparisonCache`` when the same snapshots are rendered
    repeatedly; the diff set and the projected rows are then reused.
    """
    config = config or default_config
    options = options or ViewOptions.from_config(config)
    view = dict(
        view_mode=options.view_mode,
        category=options.category,
        search_term=options.search_term,
        sort_field=options.sort_field,
        sort_direction=options.sort_direction,
    )

    if cache is None:
        diffs = reconcile(v1, v2, metadata_preference=config.metadata_preference)
        rows = project(diffs, **view)
    else:
        diffs = cache.reconcile(v1, v2)
        rows = list(cache.project(diffs, **view))

    return ComparisonReport(
        diffs=diffs,
        rows=rows,
        summary=summarize(diffs),
        rollups=rollup_by_category(diffs),
        insights=variance_insights(diffs, top_n=config.insight_top_n),
        categories=available_categories(diffs),
        options=options,
        significant_change_percent=config.significant_change_percent,
    )
