"""Load version snapshots from JSON exports of the cost breakdown API.

Accepted layouts:
    [ {record}, ... ]                       version must be given by the caller
    {"version": 2, "items": [ {record}, ... ]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from ..comparison.models import BASELINE, VersionId, VersionSnapshot
from ..exceptions import SnapshotFormatError
from ..logging_config import get_logger
from .records import is_baseline_version, normalize_records

logger = get_logger(__name__)


def parse_version(value: Union[str, int, None]) -> Optional[VersionId]:
    """Parse a version identifier: an integer or ``baseline``.

    Version 0 is the original budget and comes back as ``BASELINE``.
    """
    if value is None:
        return None
    if isinstance(value, int):
        version = value
    else:
        text = str(value).strip()
        if text.lower() == BASELINE:
            return BASELINE
        try:
            version = int(text)
        except ValueError:
            raise SnapshotFormatError(f"version {value!r} is neither an integer nor 'baseline'")
    return BASELINE if is_baseline_version(version) else version


def load_snapshot(path: Union[str, Path], version: Union[str, int, None] = None) -> VersionSnapshot:
    """Read one snapshot file.

    Args:
        path: JSON file to read.
        version: Version identifier. Overrides any ``version`` in the file.

    Raises:
        SnapshotFormatError: If the file is missing, not JSON, or its
            records cannot be normalized.
    """
    p = Path(path)
    if not p.exists():
        raise SnapshotFormatError("file not found", source=p)

    try:
        with open(p, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"invalid JSON: {e}", source=p)
    except UnicodeDecodeError as e:
        raise SnapshotFormatError(f"not UTF-8 text: {e.reason}", source=p)

    if isinstance(raw, list):
        records = raw
        file_version = None
    elif isinstance(raw, dict) and isinstance(raw.get("items"), list):
        records = raw["items"]
        file_version = raw.get("version")
    else:
        raise SnapshotFormatError("expected a list of records or an object with 'items'", source=p)

    resolved = parse_version(version) if version is not None else parse_version(file_version)
    if resolved is None:
        raise SnapshotFormatError("no version given and none found in file", source=p)

    snapshot = normalize_records(records, resolved, source=p)
    logger.info("Loaded %s with %d lines from %s", snapshot.label, len(snapshot), p)
    return snapshot
