"""Diff engine: reconciles two version snapshots into a ``DiffSet``.

The algorithm works in two passes:
  1. Index each snapshot by line identity (last duplicate wins).
  2. Walk the union of identities, v1 order first and then v2-only lines
     in v2 order, producing one ``LineDiff`` per identity.

Classification:
  absent in v1, present in v2   -> added
  present in v1, absent in v2   -> removed
  present in both, equal amount -> unchanged
  present in both, otherwise    -> changed (increased/decreased by sign)

When a line carries different metadata on each side (a renamed cost
line), ``metadata_preference`` picks the side whose name and category
are kept. The amounts are never affected.
"""

from __future__ import annotations

from typing import Optional

from ..exceptions import InvalidViewError
from ..logging_config import get_logger
from ..math import SafeMath
from .indexer import index_snapshot
from .models import DiffSet, DiffStatus, LineDiff, LineIdentity, VersionLineItem, VersionSnapshot

logger = get_logger(__name__)

METADATA_PREFERENCES = ("v2", "v1")


def _classify(v1_item: Optional[VersionLineItem], v2_item: Optional[VersionLineItem]) -> DiffStatus:
    if v1_item is None:
        return DiffStatus.ADDED
    if v2_item is None:
        return DiffStatus.REMOVED
    if v1_item.amount == v2_item.amount:
        return DiffStatus.UNCHANGED
    return DiffStatus.CHANGED


def _diff_line(
    identity: LineIdentity,
    v1_item: Optional[VersionLineItem],
    v2_item: Optional[VersionLineItem],
    metadata_preference: str,
) -> LineDiff:
    """Build the ``LineDiff`` for one identity. At least one side is present."""
    if metadata_preference == "v1":
        source = v1_item if v1_item is not None else v2_item
    else:
        source = v2_item if v2_item is not None else v1_item
    assert source is not None

    v1_amount = v1_item.amount if v1_item is not None else None
    v2_amount = v2_item.amount if v2_item is not None else None

    return LineDiff(
        identity=identity,
        display_name=source.display_name,
        category=source.category,
        v1_amount=v1_amount,
        v2_amount=v2_amount,
        change=(v2_amount or 0.0) - (v1_amount or 0.0),
        change_percent=SafeMath.percent_change(v1_amount, v2_amount),
        status=_classify(v1_item, v2_item),
    )


def reconcile(
    v1: VersionSnapshot,
    v2: VersionSnapshot,
    metadata_preference: str = "v2",
) -> DiffSet:
    """Compare two snapshots and return the complete ``DiffSet``.

    Args:
        v1: The earlier (or reference) version.
        v2: The version compared against ``v1``.
        metadata_preference: "v2" (default) or "v1"; which side's name and
            category win when a line exists in both with different metadata.

    Returns:
        One ``LineDiff`` per identity in the union of both snapshots.

    Raises:
        MissingSnapshotError: If either snapshot is ``None``.
        InvalidViewError: If ``metadata_preference`` is not "v1" or "v2".
    """
    if metadata_preference not in METADATA_PREFERENCES:
        raise InvalidViewError("metadata_preference", metadata_preference, METADATA_PREFERENCES)

    v1_index = index_snapshot(v1, side="v1")
    v2_index = index_snapshot(v2, side="v2")

    # dict keys keep insertion order: v1 lines, then v2-only lines
    identities = dict.fromkeys(v1_index)
    identities.update(dict.fromkeys(v2_index))

    diffs = tuple(
        _diff_line(identity, v1_index.get(identity), v2_index.get(identity), metadata_preference)
        for identity in identities
    )

    logger.debug(
        "Reconciled %s (%d lines) against %s (%d lines): %d diffs",
        v1.label,
        len(v1_index),
        v2.label,
        len(v2_index),
        len(diffs),
    )
    return DiffSet(v1_version=v1.version, v2_version=v2.version, diffs=diffs)
