"""
Budget Diff - version comparison for project cost line items.

Reconciles two budget/forecast snapshots into a per-line diff set, then
summarizes, rolls up by category, filters, sorts and exports it.
"""

__version__ = "0.1.0"

from .comparison import (
    BASELINE,
    CategoryRollup,
    ComparisonSummary,
    DiffSet,
    DiffStatus,
    LineDiff,
    VersionLineItem,
    VersionSnapshot,
    project,
    reconcile,
    rollup_by_category,
    summarize,
)
from .formatters import VersionLabels, to_csv
from .math import SafeMath

__all__ = [
    "BASELINE",
    "CategoryRollup",
    "ComparisonSummary",
    "DiffSet",
    "DiffStatus",
    "LineDiff",
    "SafeMath",
    "VersionLabels",
    "VersionLineItem",
    "VersionSnapshot",
    "project",
    "reconcile",
    "rollup_by_category",
    "summarize",
    "to_csv",
]
