"""View projection: filter, search, and sort a ``DiffSet`` for display or export.

Filters compose with logical AND in a fixed order:
view mode -> category -> search term. Sorting is stable, so rows that tie
keep their relative order from the diff set.
"""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Callable, Iterable, Type, TypeVar, Union

from ..exceptions import InvalidViewError
from .models import DiffStatus, LineDiff

ALL_CATEGORIES = "all"


class ViewMode(str, Enum):
    ALL = "all"
    CHANGED = "changed"
    ADDED = "added"
    REMOVED = "removed"
    INCREASED = "increased"
    DECREASED = "decreased"


class SortField(str, Enum):
    DISPLAY_NAME = "display_name"
    CATEGORY = "category"
    V1_AMOUNT = "v1_amount"
    V2_AMOUNT = "v2_amount"
    CHANGE = "change"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_E = TypeVar("_E", bound=Enum)

_VIEW_PREDICATES: dict[ViewMode, Callable[[LineDiff], bool]] = {
    ViewMode.ALL: lambda d: True,
    ViewMode.CHANGED: lambda d: d.status is not DiffStatus.UNCHANGED,
    ViewMode.ADDED: lambda d: d.status is DiffStatus.ADDED,
    ViewMode.REMOVED: lambda d: d.status is DiffStatus.REMOVED,
    ViewMode.INCREASED: lambda d: d.status is DiffStatus.CHANGED and d.change > 0,
    ViewMode.DECREASED: lambda d: d.status is DiffStatus.CHANGED and d.change < 0,
}


def _collation_key(text: str) -> tuple[str, str, str]:
    """Sort key that files accented letters with their base letter.

    Primary: casefolded text with diacritics stripped ("Étanchéité" sorts
    as "etancheite"). Secondary: casefolded text. Last: the exact text, so
    "a"/"A" and "e"/"é" still order the same way on every run.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text)


_SORT_KEYS: dict[SortField, Callable[[LineDiff], object]] = {
    SortField.DISPLAY_NAME: lambda d: _collation_key(d.display_name),
    SortField.CATEGORY: lambda d: _collation_key(d.category),
    # Absent amounts sort as zero.
    SortField.V1_AMOUNT: lambda d: d.v1_amount or 0.0,
    SortField.V2_AMOUNT: lambda d: d.v2_amount or 0.0,
    SortField.CHANGE: lambda d: d.change,
}


def coerce_option(enum_cls: Type[_E], value: Union[_E, str], parameter: str) -> _E:
    """Accept an enum member or its string value; raise ``InvalidViewError`` otherwise."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidViewError(parameter, value, [m.value for m in enum_cls]) from None


def matches_search(diff: LineDiff, term: str) -> bool:
    """Case-insensitive substring match on display name or category."""
    needle = term.casefold()
    return needle in diff.display_name.casefold() or needle in diff.category.casefold()


def available_categories(diffs: Iterable[LineDiff]) -> list[str]:
    """Distinct categories in order of first occurrence."""
    return list(dict.fromkeys(d.category for d in diffs))


def project(
    diffs: Iterable[LineDiff],
    view_mode: Union[ViewMode, str] = ViewMode.ALL,
    category: str = ALL_CATEGORIES,
    search_term: str = "",
    sort_field: Union[SortField, str] = SortField.DISPLAY_NAME,
    sort_direction: Union[SortDirection, str] = SortDirection.ASC,
) -> list[LineDiff]:
    """Filter and sort diffs for presentation.

    Args:
        diffs: A ``DiffSet`` or any iterable of ``LineDiff``. Not modified.
        view_mode: Named status filter.
        category: "all", or an exact category to keep.
        search_term: Substring matched against display name and category.
            An empty term matches everything.
        sort_field: Field to order by.
        sort_direction: "asc" or "desc".

    Returns:
        A new list of the matching diffs in display order.

    Raises:
        InvalidViewError: For an unknown view mode, sort field, or direction.
    """
    mode = coerce_option(ViewMode, view_mode, "view_mode")
    field = coerce_option(SortField, sort_field, "sort_field")
    direction = coerce_option(SortDirection, sort_direction, "sort_direction")

    predicate = _VIEW_PREDICATES[mode]
    rows = [d for d in diffs if predicate(d)]

    if category != ALL_CATEGORIES:
        rows = [d for d in rows if d.category == category]

    if search_term:
        rows = [d for d in rows if matches_search(d, search_term)]

    # sorted() stays stable with reverse=True
    return sorted(rows, key=_SORT_KEYS[field], reverse=direction is SortDirection.DESC)
