"""In-memory memoization for repeated comparisons.

Views re-render often with the same two snapshots and the same view
options. ``ComparisonCache`` keys ``reconcile`` on the identity of the two
snapshot objects and ``project`` on the identity of the diff set plus the
view parameters. Both tables are bounded LRUs.

Entries hold strong references to their key objects so an ``id()`` can
never be reused by a different object while its entry is alive.

Usage:
    cache = ComparisonCache.from_config(load_config())
    diffs = cache.reconcile(v1, v2)
    rows = cache.project(diffs, view_mode="changed")
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Hashable, Union

from ..config import ComparisonConfig
from ..logging_config import get_logger
from .engine import reconcile
from .models import DiffSet, LineDiff, VersionSnapshot
from .projection import (
    ALL_CATEGORIES,
    SortDirection,
    SortField,
    ViewMode,
    coerce_option,
    project,
)

logger = get_logger(__name__)


class _LRU:
    """Minimal ordered LRU table."""

    def __init__(self, maxsize: int):
        self.maxsize = maxsize
        self._data: OrderedDict[Hashable, tuple[Any, Any]] = OrderedDict()

    def get(self, key: Hashable):
        entry = self._data.get(key)
        if entry is None:
            return None
        self._data.move_to_end(key)
        return entry

    def put(self, key: Hashable, anchors: Any, value: Any) -> None:
        self._data[key] = (anchors, value)
        self._data.move_to_end(key)
        while len(self._data) > self.maxsize:
            self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class ComparisonCache:
    """Memoizes ``reconcile`` and ``project`` results."""

    def __init__(self, maxsize: int = 32, metadata_preference: str = "v2"):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.metadata_preference = metadata_preference
        self._diffs = _LRU(maxsize)
        self._views = _LRU(maxsize * 4)
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_config(cls, config: ComparisonConfig) -> "ComparisonCache":
        """Size the cache and pick the rename policy from configuration."""
        return cls(maxsize=config.cache_size, metadata_preference=config.metadata_preference)

    @property
    def maxsize(self) -> int:
        return self._diffs.maxsize

    def reconcile(self, v1: VersionSnapshot, v2: VersionSnapshot) -> DiffSet:
        key = (id(v1), id(v2))
        entry = self._diffs.get(key)
        if entry is not None:
            self.hits += 1
            return entry[1]

        self.misses += 1
        diffs = reconcile(v1, v2, metadata_preference=self.metadata_preference)
        self._diffs.put(key, (v1, v2), diffs)
        return diffs

    def project(
        self,
        diffs: DiffSet,
        view_mode: Union[ViewMode, str] = ViewMode.ALL,
        category: str = ALL_CATEGORIES,
        search_term: str = "",
        sort_field: Union[SortField, str] = SortField.DISPLAY_NAME,
        sort_direction: Union[SortDirection, str] = SortDirection.ASC,
    ) -> tuple[LineDiff, ...]:
        """Cached ``project``. Returns a tuple so callers cannot mutate the cached view."""
        mode = coerce_option(ViewMode, view_mode, "view_mode")
        field = coerce_option(SortField, sort_field, "sort_field")
        direction = coerce_option(SortDirection, sort_direction, "sort_direction")

        key = (id(diffs), mode, category, search_term, field, direction)
        entry = self._views.get(key)
        if entry is not None:
            self.hits += 1
            return entry[1]

        self.misses += 1
        rows = tuple(project(diffs, mode, category, search_term, field, direction))
        self._views.put(key, diffs, rows)
        return rows

    def clear(self) -> None:
        self._diffs.clear()
        self._views.clear()
        logger.debug("Comparison cache cleared")

    def __len__(self) -> int:
        return len(self._diffs) + len(self._views)
