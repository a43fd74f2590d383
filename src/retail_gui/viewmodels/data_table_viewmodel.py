"""ViewModel for the generic sortable data table.

Owns the column descriptors, the row collection, the loading flag and the
per-table sort state, and produces a ``TableRender`` snapshot the Qt view
(or any other host) paints. It knows nothing about what the rows are:
cells come from each column's ``render`` callable.

An optional row filter narrows the rows before sorting; a filter that
leaves nothing renders the empty state like an empty data set.

Render priority: loading, then empty, then rows.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

from retail_gui.design.skeletons import TABLE_SKELETON_ROWS, placeholder_widths
from retail_gui.services.event_bus import EventBus, GUIEvent
from retail_gui.services.settings_service import SettingsService
from retail_gui.services.table_sort import SortState, sort_rows

__all__ = [
    "Column",
    "TableMode",
    "DisplayRow",
    "SkeletonRow",
    "HeaderCell",
    "TableRender",
    "DataTableViewModel",
    "RowFilter",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")

RowFilter = Callable[[T], bool]


@dataclass(frozen=True)
class Column(Generic[T]):
    """Column descriptor.

    ``render`` must be free of side effects: it runs once for the cell and
    again for sort-key extraction when no ``sort_value`` is given.
    """

    key: str
    header: str
    render: Callable[[T], Any]
    sortable: bool = True
    sort_value: Optional[Callable[[T], Any]] = None


class TableMode(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ROWS = "rows"


@dataclass
class DisplayRow(Generic[T]):
    index: Optional[int]
    item: T
    cells: List[Any]


@dataclass
class SkeletonRow:
    widths: List[float]


@dataclass(frozen=True)
class HeaderCell:
    key: str
    header: str
    sortable: bool
    aria_sort: str
    interactive: bool


@dataclass
class TableRender(Generic[T]):
    mode: TableMode
    headers: List[HeaderCell]
    rows: List[DisplayRow[T]] = field(default_factory=list)
    skeleton_rows: List[SkeletonRow] = field(default_factory=list)
    empty_message: Optional[str] = None
    caption: Optional[str] = None
    show_row_index: bool = True


class DataTableViewModel(Generic[T]):
    def __init__(
        self,
        columns: Sequence[Column[T]],
        rows: Iterable[T] = (),
        *,
        is_loading: bool = False,
        empty_message: Optional[str] = None,
        show_row_index: Optional[bool] = None,
        caption: Optional[str] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        row_filter: Optional[RowFilter[T]] = None,
    ):
        keys = [c.key for c in columns]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate column keys: {', '.join(duplicates)}")
        settings = SettingsService.instance
        self._columns: List[Column[T]] = list(columns)
        self._rows: List[T] = list(rows)
        self._loading = is_loading
        self._empty_message = (
            empty_message if empty_message is not None else settings.table_empty_message
        )
        self._show_row_index = (
            show_row_index if show_row_index is not None else settings.table_show_row_index
        )
        self.caption = caption
        self._rng = rng
        self._bus = event_bus
        self._sort = SortState.unsorted()
        self._filter = row_filter

    # Inputs -------------------------------------------------------------
    def set_rows(self, rows: Iterable[T]) -> None:
        self._rows = list(rows)

    def set_loading(self, loading: bool) -> None:
        self._loading = bool(loading)

    def set_empty_message(self, message: str) -> None:
        self._empty_message = message

    def set_filter(self, row_filter: Optional[RowFilter[T]]) -> None:
        """Keep only rows for which ``row_filter(item)`` is true; ``None`` shows all."""
        self._filter = row_filter

    # Accessors ----------------------------------------------------------
    @property
    def columns(self) -> List[Column[T]]:
        return list(self._columns)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def empty_message(self) -> str:
        return self._empty_message

    def column(self, key: str) -> Optional[Column[T]]:
        return next((c for c in self._columns if c.key == key), None)

    def sort_state(self) -> SortState:
        return self._sort

    # Sorting ------------------------------------------------------------
    def toggle_sort(self, column_key: str) -> SortState:
        """Advance the header cycle for ``column_key`` and return the new state.

        Unknown and non-sortable columns are ignored, as is any click while
        the table shows its loading placeholders.
        """
        col = self.column(column_key)
        if col is None or not col.sortable:
            return self._sort
        if self._loading:
            _logger.debug("Ignoring sort on %r while loading", column_key)
            return self._sort
        self._sort = self._sort.toggled(column_key)
        if self._bus is not None:
            self._bus.publish(
                GUIEvent.TABLE_SORT_CHANGED,
                {
                    "key": self._sort.key,
                    "direction": self._sort.direction.value if self._sort.direction else None,
                },
            )
        return self._sort

    def reset_sort(self) -> None:
        self._sort = SortState.unsorted()

    def filtered_items(self) -> List[T]:
        if self._filter is None:
            return list(self._rows)
        return [item for item in self._rows if self._filter(item)]

    def sorted_items(self) -> List[T]:
        items = self.filtered_items()
        if not self._sort.is_active:
            return items
        col = self.column(self._sort.key)  # type: ignore[arg-type]
        if col is None:
            return items
        return sort_rows(items, col, self._sort.direction)  # type: ignore[arg-type]

    # Rendering ----------------------------------------------------------
    def headers(self) -> List[HeaderCell]:
        return [
            HeaderCell(
                key=c.key,
                header=c.header,
                sortable=c.sortable,
                aria_sort=self._sort.aria_sort(c.key) if c.sortable else "none",
                interactive=c.sortable and not self._loading,
            )
            for c in self._columns
        ]

    def render(self) -> TableRender[T]:
        headers = self.headers()
        if self._loading:
            widths = placeholder_widths(TABLE_SKELETON_ROWS, len(self._columns), self._rng)
            return TableRender(
                mode=TableMode.LOADING,
                headers=headers,
                skeleton_rows=[SkeletonRow(w) for w in widths],
                caption=self.caption,
                show_row_index=self._show_row_index,
            )
        items = self.sorted_items()
        if not items:
            return TableRender(
                mode=TableMode.EMPTY,
                headers=headers,
                empty_message=self._empty_message,
                caption=self.caption,
                show_row_index=self._show_row_index,
            )
        rows = [
            DisplayRow(
                index=(i + 1) if self._show_row_index else None,
                item=item,
                cells=[c.render(item) for c in self._columns],
            )
            for i, item in enumerate(items)
        ]
        return TableRender(
            mode=TableMode.ROWS,
            headers=headers,
            rows=rows,
            caption=self.caption,
            show_row_index=self._show_row_index,
        )
