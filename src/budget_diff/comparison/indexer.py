"""Index a version snapshot by line identity."""

from __future__ import annotations

from ..exceptions import MissingSnapshotError
from ..logging_config import get_logger
from .models import LineIdentity, VersionLineItem, VersionSnapshot

logger = get_logger(__name__)


def index_snapshot(
    snapshot: VersionSnapshot, side: str = "snapshot"
) -> dict[LineIdentity, VersionLineItem]:
    """Map each line identity in ``snapshot`` to its line item.

    Identities should be unique upstream. When one repeats, the last
    occurrence wins and the collapse is logged at DEBUG level.

    The returned dict preserves the snapshot's item order (by first
    occurrence of each identity).
    """
    if snapshot is None:
        raise MissingSnapshotError(side)

    index: dict[LineIdentity, VersionLineItem] = {}
    for item in snapshot.items:
        if item.identity in index:
            logger.debug(
                "Duplicate line identity %r in %s; keeping last occurrence",
                item.identity,
                snapshot.label,
            )
        index[item.identity] = item
    return index
