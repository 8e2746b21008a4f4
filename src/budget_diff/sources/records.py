"""Normalization of raw cost breakdown records into ``VersionLineItem``.

The baseline budget and forecast versions store their amount in different
fields: the baseline reads ``budget_cost`` while forecasts read
``forecasted_cost``. This module is the only place that knows about that
difference. The comparison core sees a single ``amount``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..comparison.models import BASELINE, VersionId, VersionLineItem, VersionSnapshot
from ..exceptions import SnapshotFormatError
from ..math import SafeMath

BASELINE_AMOUNT_FIELD = "budget_cost"
FORECAST_AMOUNT_FIELD = "forecasted_cost"
UNCATEGORIZED = "Uncategorized"
UNKNOWN_LINE = "Unknown"


def is_baseline_version(version: VersionId) -> bool:
    """Version 0 and the ``baseline`` marker both denote the original budget."""
    return version == BASELINE or version == 0


def _amount(record: Mapping[str, Any], baseline: bool, position: int, source: Optional[Path]) -> float:
    if baseline:
        raw = record.get(BASELINE_AMOUNT_FIELD)
    else:
        raw = record.get(FORECAST_AMOUNT_FIELD)
        if raw is None:
            raw = record.get(BASELINE_AMOUNT_FIELD)

    if raw is None:
        return 0.0
    if isinstance(raw, str):
        try:
            raw = float(raw)
        except ValueError:
            raise SnapshotFormatError(f"amount {raw!r} is not a number", source, position)
    if not SafeMath.is_valid_number(raw):
        raise SnapshotFormatError(f"amount {raw!r} is not a finite number", source, position)
    return float(raw)


def normalize_record(
    record: Mapping[str, Any],
    version: VersionId,
    position: int = 0,
    source: Optional[Path] = None,
) -> VersionLineItem:
    """Convert one raw record into a line item for ``version``."""
    if not isinstance(record, Mapping):
        raise SnapshotFormatError(f"expected an object, got {type(record).__name__}", source, position)

    identity = record.get("id")
    if identity is None:
        raise SnapshotFormatError("record has no 'id'", source, position)

    category = record.get("sub_business_line") or record.get("spend_type") or UNCATEGORIZED

    return VersionLineItem(
        identity=str(identity),
        display_name=str(record.get("cost_line") or UNKNOWN_LINE),
        category=str(category),
        amount=_amount(record, is_baseline_version(version), position, source),
    )


def normalize_records(
    records: Iterable[Mapping[str, Any]],
    version: VersionId,
    source: Optional[Path] = None,
) -> VersionSnapshot:
    """Build a snapshot for ``version`` from raw cost breakdown records."""
    items = [
        normalize_record(record, version, position=i, source=source)
        for i, record in enumerate(records)
    ]
    return VersionSnapshot(version=version, items=items)
