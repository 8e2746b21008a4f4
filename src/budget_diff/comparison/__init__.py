"""Version comparison core: reconcile, aggregate, and project cost line diffs."""

from .cache import ComparisonCache
from .engine import reconcile
from .indexer import index_snapshot
from .models import (
    BASELINE,
    CategoryRollup,
    ChangeDirection,
    ComparisonSummary,
    DiffSet,
    DiffStatus,
    LineDiff,
    VarianceInsights,
    VersionLineItem,
    VersionSnapshot,
    version_label,
)
from .projection import (
    ALL_CATEGORIES,
    SortDirection,
    SortField,
    ViewMode,
    available_categories,
    project,
)
from .report import ComparisonReport, ViewOptions, build_report
from .summary import rollup_by_category, summarize, variance_insights

__all__ = [
    "ALL_CATEGORIES",
    "BASELINE",
    "CategoryRollup",
    "ChangeDirection",
    "ComparisonCache",
    "ComparisonReport",
    "ComparisonSummary",
    "DiffSet",
    "DiffStatus",
    "LineDiff",
    "SortDirection",
    "SortField",
    "VarianceInsights",
    "VersionLineItem",
    "VersionSnapshot",
    "ViewMode",
    "ViewOptions",
    "available_categories",
    "build_report",
    "index_snapshot",
    "project",
    "reconcile",
    "rollup_by_category",
    "summarize",
    "variance_insights",
    "version_label",
]
