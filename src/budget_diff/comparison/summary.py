"""Aggregation of a ``DiffSet`` into totals, category rollups, and variance drivers."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..math import SafeMath
from .models import (
    CategoryRollup,
    ChangeDirection,
    ComparisonSummary,
    DiffStatus,
    LineDiff,
    VarianceInsights,
)

_COUNT_KEYS = tuple(s.value for s in DiffStatus) + tuple(d.value for d in ChangeDirection)


def summarize(diffs: Iterable[LineDiff]) -> ComparisonSummary:
    """Reduce diffs to totals and a tally by status.

    Absent amounts count as zero. ``counts_by_status`` always carries all
    six keys (four statuses plus increased/decreased), zero-filled.
    """
    rows = list(diffs)
    v1_total = SafeMath.safe_sum(d.v1_amount for d in rows)
    v2_total = SafeMath.safe_sum(d.v2_amount for d in rows)

    counts: Counter[str] = Counter({key: 0 for key in _COUNT_KEYS})
    for d in rows:
        counts[d.status.value] += 1
        direction = d.direction
        if direction is not None:
            counts[direction.value] += 1

    not_unchanged = len(rows) - counts[DiffStatus.UNCHANGED.value]

    return ComparisonSummary(
        v1_total=v1_total,
        v2_total=v2_total,
        total_change=v2_total - v1_total,
        change_percent=SafeMath.percent_change(v1_total, v2_total),
        counts_by_status=dict(counts),
        line_count=len(rows),
        changed_ratio=SafeMath.safe_divide(not_unchanged, len(rows)),
    )


def rollup_by_category(diffs: Iterable[LineDiff]) -> list[CategoryRollup]:
    """Group diffs by category and total each side.

    Categories come back in order of first occurrence.
    """
    grouped: dict[str, list[LineDiff]] = {}
    for d in diffs:
        grouped.setdefault(d.category, []).append(d)

    rollups = []
    for category, members in grouped.items():
        v1_total = SafeMath.safe_sum(d.v1_amount for d in members)
        v2_total = SafeMath.safe_sum(d.v2_amount for d in members)
        rollups.append(
            CategoryRollup(
                category=category,
                v1_total=v1_total,
                v2_total=v2_total,
                change=v2_total - v1_total,
                change_percent=SafeMath.percent_change(v1_total, v2_total),
            )
        )
    return rollups


def variance_insights(diffs: Iterable[LineDiff], top_n: int = 3) -> VarianceInsights:
    """Find the lines that drive the variance between two versions.

    Args:
        diffs: Reconciled lines.
        top_n: How many increases and decreases to keep.

    Returns:
        Top increases (largest positive change first), top decreases (most
        negative first), the line with the largest absolute percent change,
        and the single largest increase and decrease. Ties keep input order.
    """
    if top_n < 0:
        raise ValueError("top_n must be non-negative")

    rows = list(diffs)
    increases = sorted((d for d in rows if d.change > 0), key=lambda d: -d.change)
    decreases = sorted((d for d in rows if d.change < 0), key=lambda d: d.change)

    largest_percent = None
    for d in rows:
        if d.change == 0:
            continue
        if largest_percent is None or abs(d.change_percent) > abs(largest_percent.change_percent):
            largest_percent = d

    return VarianceInsights(
        top_increases=tuple(increases[:top_n]),
        top_decreases=tuple(decreases[:top_n]),
        largest_percent=largest_percent,
        largest_increase=increases[0] if increases else None,
        largest_decrease=decreases[0] if decreases else None,
    )
