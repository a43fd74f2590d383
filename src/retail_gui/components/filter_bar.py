"""Filter bar component.

A row of exclusive, checkable buttons in front of a table ("All", "Active",
"Offers", ...). Exactly one filter is active at a time; clicking another
one emits ``filterChanged`` with its label. The bar holds no rows itself:
the owning page maps the label to a predicate and hands it to the table's
view model.

API:
    bar = FilterBar(["All", "Active", "Offers", "Out of stock"])
    bar.filterChanged.connect(page.apply_filter)
    bar.set_active("Offers")
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QButtonGroup, QHBoxLayout, QLabel, QPushButton, QWidget

__all__ = ["FilterBar"]


class FilterBar(QWidget):
    """Single-select filter toolbar.

    Signals:
        filterChanged: emitted with the newly active label (user clicks and
            ``set_active`` both emit, re-selecting the active label does not).
    """

    filterChanged = pyqtSignal(str)

    def __init__(
        self,
        filters: Sequence[str],
        parent: Optional[QWidget] = None,
        *,
        active: Optional[str] = None,
        label: str = "Filters:",
    ):
        super().__init__(parent)
        if not filters:
            raise ValueError("FilterBar needs at least one filter")
        if len(set(filters)) != len(filters):
            raise ValueError("Filter labels must be unique")
        self.setObjectName("filterBar")
        self.setAccessibleName(label.rstrip(":"))
        self._filters: List[str] = list(filters)
        self._active = active if active in self._filters else self._filters[0]
        self.buttons: Dict[str, QPushButton] = {}
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        caption = QLabel(label)
        caption.setObjectName("filterBarLabel")
        layout.addWidget(caption)
        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        for name in self._filters:
            btn = QPushButton(name)
            btn.setObjectName("filterButton")
            btn.setCheckable(True)
            btn.setChecked(name == self._active)
            btn.clicked.connect(lambda _checked=False, n=name: self.set_active(n))  # type: ignore
            self._group.addButton(btn)
            layout.addWidget(btn)
            self.buttons[name] = btn
        layout.addStretch(1)

    def filters(self) -> List[str]:
        return list(self._filters)

    def active(self) -> str:
        return self._active

    def set_active(self, name: str) -> None:
        if name not in self.buttons:
            raise KeyError(f"Unknown filter: {name}")
        self.buttons[name].setChecked(True)
        if name == self._active:
            return
        self._active = name
        self.filterChanged.emit(name)
