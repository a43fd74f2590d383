"""Single-column sorting for data tables.

Holds the three-state sort toggle used by table headers and the stable
comparator that orders rows by a column's sort key. No widgets are
involved; text collation comes from QtCore's ICU-backed ``QCollator``.

Sort key extraction:
    1. ``column.sort_value(item)`` when the column provides one and it
       returns something other than ``None``.
    2. Otherwise the cell's ``render(item)`` output converted to ``str``.
       Structured cell content (widgets, tuples, dicts) collapses to its
       string form, so ordering for such columns is only approximate.
       Columns with structured cells should provide ``sort_value``.

Comparison:
    timestamps by epoch, numbers numerically, everything else as lowercase
    strings through a case-insensitive ``QCollator`` for
    ``SettingsService.collation_locale`` (accented names sort next to their
    base letter, not after "z"). Descending negates the comparator;
    ``sorted`` is stable, so equal keys keep their input order either way.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from functools import cmp_to_key, lru_cache
from typing import Any, Callable, Iterable, List, Optional, Protocol, TypeVar

from PyQt6.QtCore import QCollator, QLocale, Qt

from .settings_service import SettingsService

__all__ = [
    "SortDirection",
    "SortState",
    "SortableColumn",
    "coerce_sort_key",
    "extract_sort_key",
    "compare_sort_keys",
    "text_collator",
    "sort_rows",
]

T = TypeVar("T")


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortableColumn(Protocol):
    key: str
    render: Callable[[Any], Any]
    sort_value: Optional[Callable[[Any], Any]]


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction; both set or both ``None``."""

    key: Optional[str] = None
    direction: Optional[SortDirection] = None

    def __post_init__(self) -> None:
        if (self.key is None) != (self.direction is None):
            raise ValueError("sort key and direction must be set together")

    @classmethod
    def unsorted(cls) -> "SortState":
        return cls()

    @property
    def is_active(self) -> bool:
        return self.key is not None

    def direction_for(self, key: str) -> Optional[SortDirection]:
        return self.direction if self.key == key else None

    def aria_sort(self, key: str) -> str:
        direction = self.direction_for(key)
        return direction.value if direction is not None else "none"

    def toggled(self, key: str) -> "SortState":
        """Next state in the unsorted -> ascending -> descending -> unsorted cycle."""
        if self.key != key:
            return SortState(key, SortDirection.ASCENDING)
        if self.direction is SortDirection.ASCENDING:
            return SortState(key, SortDirection.DESCENDING)
        return SortState.unsorted()


def coerce_sort_key(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def extract_sort_key(column: SortableColumn, item: Any) -> Any:
    if column.sort_value is not None:
        key = column.sort_value(item)
        if key is not None:
            return key
    return coerce_sort_key(column.render(item))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, (datetime, date))


def _epoch(value: date) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return datetime.combine(value, time()).timestamp()


@lru_cache(maxsize=8)
def text_collator(locale_name: str) -> QCollator:
    collator = QCollator(QLocale(locale_name))
    collator.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
    return collator


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_sort_keys(a: Any, b: Any) -> int:
    """Three-way comparison of two extracted sort keys."""
    if _is_timestamp(a) and _is_timestamp(b):
        return _cmp(_epoch(a), _epoch(b))
    if _is_number(a) and _is_number(b):
        return _cmp(a, b)
    collator = text_collator(SettingsService.instance.collation_locale)
    return _cmp(collator.compare(str(a).lower(), str(b).lower()), 0)


def sort_rows(
    rows: Iterable[T], column: SortableColumn, direction: SortDirection
) -> List[T]:
    """Return a new list of ``rows`` ordered by ``column``.

    Keys are extracted once per row; the input is left untouched.
    """
    keyed = [(extract_sort_key(column, row), row) for row in rows]
    sign = 1 if direction is SortDirection.ASCENDING else -1

    def _compare(left: tuple, right: tuple) -> int:
        return sign * compare_sort_keys(left[0], right[0])

    return [row for _, row in sorted(keyed, key=cmp_to_key(_compare))]
