"""DataTableView

QTableWidget front end for ``DataTableViewModel``. Clicking a sortable
header advances that column's sort cycle; the view repaints from a fresh
``TableRender`` after every change. Depending on the render mode exactly
one of the table, the skeleton placeholder or the empty state is visible.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, TypeVar

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from retail_gui.components.empty_state import EmptyStateWidget
from retail_gui.components.skeleton_loader import TableSkeletonWidget
from retail_gui.services.table_data_service import TableDataService
from retail_gui.viewmodels.data_table_viewmodel import (
    Column,
    DataTableViewModel,
    TableMode,
    TableRender,
)

__all__ = ["DataTableView"]

T = TypeVar("T")

_ARROWS = {"ascending": " ▲", "descending": " ▼", "none": ""}


class DataTableView(QWidget):
    """Sortable table widget.

    Signals:
        retryRequested: the error state's Retry action was clicked.
    """

    retryRequested = pyqtSignal()

    def __init__(
        self,
        columns: Sequence[Column[T]] | None = None,
        parent: Optional[QWidget] = None,
        *,
        viewmodel: Optional[DataTableViewModel[T]] = None,
        title: Optional[str] = None,
        empty_template: str = "no_data",
    ):
        super().__init__(parent)
        if viewmodel is None:
            viewmodel = DataTableViewModel(columns or [])
        self.viewmodel = viewmodel
        self._last_render: Optional[TableRender[T]] = None
        self._error_active = False
        self._empty_template = empty_template
        self._build_ui(title)
        self.refresh()

    def _build_ui(self, title: Optional[str]) -> None:
        root = QVBoxLayout(self)
        self.title_label = QLabel(title or self.viewmodel.caption or "")
        self.title_label.setObjectName("viewTitleLabel")
        self.title_label.setVisible(bool(self.title_label.text()))
        root.addWidget(self.title_label)
        self.table = QTableWidget(0, 0)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore[attr-defined]
        root.addWidget(self.table)
        self.skeleton = TableSkeletonWidget()
        root.addWidget(self.skeleton)
        self.empty_state = EmptyStateWidget(
            self._empty_template, message_override=self.viewmodel.empty_message
        )
        self.empty_state.setObjectName("tableEmptyState")
        self.empty_state.actionRequested.connect(self._on_empty_action)  # type: ignore[attr-defined]
        root.addWidget(self.empty_state)
        root.addStretch(1)

    # Data -----------------------------------------------------------
    def set_rows(self, rows: Iterable[T]) -> None:
        self._error_active = False
        self.viewmodel.set_rows(rows)
        self.refresh()

    def set_loading(self, loading: bool) -> None:
        self.viewmodel.set_loading(loading)
        self.refresh()

    def show_error(self, message: str) -> None:
        """Show the error template with a Retry action; existing rows are dropped."""
        self.viewmodel.set_rows([])
        self.viewmodel.set_loading(False)
        self._error_active = True
        self.refresh()
        self.empty_state.set_template("generic_error", message_override=message)

    def load_from(self, data_service: TableDataService, key: str, fetch, *, refresh: bool = False):
        """Fill the table through ``data_service``; failures switch to the error state."""
        self._error_active = False
        result = data_service.bind(self.viewmodel, key, fetch, refresh=refresh)
        if result.ok:
            self.refresh()
        else:
            self.show_error(result.error or "")
        return result

    def set_filter(self, row_filter) -> None:
        self.viewmodel.set_filter(row_filter)
        self.refresh()

    def toggle_sort(self, column_key: str) -> None:
        self.viewmodel.toggle_sort(column_key)
        self.refresh()

    # Rendering ------------------------------------------------------
    def _index_offset(self) -> int:
        render = self._last_render
        return 1 if render is not None and render.show_row_index else 0

    def refresh(self) -> None:
        render = self.viewmodel.render()
        self._last_render = render
        labels = [h.header + _ARROWS.get(h.aria_sort, "") for h in render.headers]
        if render.show_row_index:
            labels.insert(0, "#")
        self.table.setColumnCount(len(labels))
        self.table.setHorizontalHeaderLabels(labels)
        self.table.horizontalHeader().setSectionsClickable(render.mode is not TableMode.LOADING)
        if render.mode is TableMode.LOADING:
            self.table.setRowCount(0)
            self.skeleton.set_rows(render.skeleton_rows)
            self.skeleton.start()
            self.empty_state.hide()
            self.table.show()
            return
        self.skeleton.stop()
        if render.mode is TableMode.EMPTY:
            self.table.setRowCount(0)
            self.table.hide()
            if not self._error_active:
                self.empty_state.set_template(
                    self._empty_template, message_override=render.empty_message
                )
            self.empty_state.show()
            return
        self.empty_state.hide()
        self.table.show()
        self._populate(render)

    def _populate(self, render: TableRender[T]) -> None:
        offset = self._index_offset()
        self.table.setRowCount(len(render.rows))
        for r, row in enumerate(render.rows):
            if row.index is not None:
                self.table.setItem(r, 0, QTableWidgetItem(str(row.index)))
            for c, value in enumerate(row.cells):
                self._set_cell(r, c + offset, value)

    def _set_cell(self, row: int, col: int, value: Any) -> None:
        if isinstance(value, QWidget):
            self.table.setCellWidget(row, col, value)
            return
        if self.table.cellWidget(row, col) is not None:
            self.table.removeCellWidget(row, col)
        self.table.setItem(row, col, QTableWidgetItem("" if value is None else str(value)))

    # Signals --------------------------------------------------------
    def _on_header_clicked(self, logical_index: int) -> None:
        col_index = logical_index - self._index_offset()
        columns = self.viewmodel.columns
        if 0 <= col_index < len(columns):
            self.toggle_sort(columns[col_index].key)

    def _on_empty_action(self, key: str) -> None:
        if key == "generic_error":
            self.retryRequested.emit()

    # Testing helpers ------------------------------------------------
    def mode(self) -> Optional[TableMode]:
        return self._last_render.mode if self._last_render else None

    def header_labels(self) -> List[str]:
        return [
            self.table.horizontalHeaderItem(c).text() for c in range(self.table.columnCount())
        ]

    def column_texts(self, key: str) -> List[str]:
        keys = [c.key for c in self.viewmodel.columns]
        col = keys.index(key) + self._index_offset()
        out: List[str] = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, col)
            out.append(item.text() if item else "")
        return out
