"""Data models for version comparison: line items, snapshots, and per-line diffs.

A comparison takes two ``VersionSnapshot`` objects, keyed by the stable
``identity`` of each cost line, and produces a ``DiffSet`` with exactly one
``LineDiff`` per identity found in either snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Iterator, Optional, Tuple, Union

# Distinguished version marker for the original budget.
BASELINE = "baseline"

LineIdentity = Hashable
VersionId = Union[int, str]


class DiffStatus(str, Enum):
    """Closed classification of a reconciled line."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


class ChangeDirection(str, Enum):
    """Sub-classification of a ``changed`` line by the sign of its change."""

    INCREASED = "increased"
    DECREASED = "decreased"


def version_label(version: Optional[VersionId]) -> str:
    """Human label for a version identifier."""
    if version is None:
        return "Version"
    if version == BASELINE:
        return "Baseline"
    return f"Version {version}"


@dataclass(frozen=True)
class VersionLineItem:
    """One cost line in one version's snapshot.

    ``amount`` is already normalized by the data layer: baseline and
    forecast versions both land here regardless of their source field.
    """

    identity: LineIdentity
    display_name: str
    category: str
    amount: float


@dataclass
class VersionSnapshot:
    """All line items for one budget or forecast version."""

    version: VersionId
    items: list[VersionLineItem] = field(default_factory=list)

    @property
    def label(self) -> str:
        return version_label(self.version)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class LineDiff:
    """Reconciled comparison record for one line identity.

    ``v1_amount`` is ``None`` when the line is absent from version 1, and
    likewise for ``v2_amount``. They are never both ``None``.
    """

    identity: LineIdentity
    display_name: str
    category: str
    v1_amount: Optional[float]
    v2_amount: Optional[float]
    change: float  # (v2 or 0) - (v1 or 0)
    change_percent: float
    status: DiffStatus

    @property
    def direction(self) -> Optional[ChangeDirection]:
        """``increased``/``decreased`` for changed lines, ``None`` otherwise."""
        if self.status is not DiffStatus.CHANGED:
            return None
        if self.change > 0:
            return ChangeDirection.INCREASED
        if self.change < 0:
            return ChangeDirection.DECREASED
        return None

    @property
    def status_label(self) -> str:
        """Five-way label: added, removed, increased, decreased, unchanged."""
        direction = self.direction
        if direction is not None:
            return direction.value
        return self.status.value


@dataclass(frozen=True)
class DiffSet:
    """Immutable result of one comparison.

    Filtering and sorting never touch a ``DiffSet``; they return new
    sequences (see ``projection.project``).
    """

    v1_version: Optional[VersionId]
    v2_version: Optional[VersionId]
    diffs: Tuple[LineDiff, ...] = ()

    def __iter__(self) -> Iterator[LineDiff]:
        return iter(self.diffs)

    def __len__(self) -> int:
        return len(self.diffs)

    def __getitem__(self, index: int) -> LineDiff:
        return self.diffs[index]

    def get(self, identity: LineIdentity) -> Optional[LineDiff]:
        """Look up the diff for one identity."""
        for diff in self.diffs:
            if diff.identity == identity:
                return diff
        return None


@dataclass(frozen=True)
class ComparisonSummary:
    """Totals and status tallies for a ``DiffSet``.

    ``counts_by_status`` is keyed by the status and direction values:
    added, removed, changed, unchanged, increased, decreased.
    """

    v1_total: float
    v2_total: float
    total_change: float
    change_percent: float
    counts_by_status: dict[str, int] = field(default_factory=dict)
    line_count: int = 0
    changed_ratio: float = 0.0

    def count(self, status: Union[DiffStatus, ChangeDirection, str]) -> int:
        key = status.value if isinstance(status, Enum) else status
        return self.counts_by_status.get(key, 0)


@dataclass(frozen=True)
class CategoryRollup:
    """Per-category aggregate used for chart and summary views."""

    category: str
    v1_total: float
    v2_total: float
    change: float
    change_percent: float


@dataclass(frozen=True)
class VarianceInsights:
    """The lines driving a comparison's variance."""

    top_increases: Tuple[LineDiff, ...] = ()
    top_decreases: Tuple[LineDiff, ...] = ()
    largest_percent: Optional[LineDiff] = None
    largest_increase: Optional[LineDiff] = None
    largest_decrease: Optional[LineDiff] = None
