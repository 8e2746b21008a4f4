"""Data-layer adapter: raw version records in, normalized snapshots out."""

from .loader import load_snapshot, parse_version
from .records import is_baseline_version, normalize_record, normalize_records

__all__ = [
    "is_baseline_version",
    "load_snapshot",
    "normalize_record",
    "normalize_records",
    "parse_version",
]
