"""Table skeleton widget.

Placeholder grid shown by ``DataTableView`` while its view model is loading.
Each row of ``SkeletonRow`` widths becomes a row of grey bars; a bar takes
its ratio of the column's width so rows look like uneven text.

API:
    loader = TableSkeletonWidget()
    loader.set_rows(render.skeleton_rows)
    loader.start() / loader.stop()
    loader.is_active()
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt6.QtWidgets import QGridLayout, QLabel, QSizePolicy, QWidget

from retail_gui.design.skeletons import BAR_HEIGHT, BAR_RADIUS
from retail_gui.viewmodels.data_table_viewmodel import SkeletonRow

__all__ = ["TableSkeletonWidget"]

_NOMINAL_CELL_WIDTH = 120


class TableSkeletonWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("tableSkeleton")
        self._active = False
        self._blocks: List[List[QLabel]] = []
        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setHorizontalSpacing(16)
        self._layout.setVerticalSpacing(10)
        self.hide()

    def set_rows(self, rows: Sequence[SkeletonRow]) -> None:
        self._clear()
        for r, row in enumerate(rows):
            blocks: List[QLabel] = []
            for c, ratio in enumerate(row.widths):
                block = QLabel("")
                block.setObjectName("skeleton_cell")
                block.setStyleSheet(f"background: #d8dce3; border-radius: {BAR_RADIUS}px;")
                block.setProperty("widthRatio", float(ratio))
                block.setFixedHeight(BAR_HEIGHT)
                block.setFixedWidth(int(_NOMINAL_CELL_WIDTH * ratio))
                block.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
                self._layout.addWidget(block, r, c)
                blocks.append(block)
            self._blocks.append(blocks)

    def _clear(self) -> None:
        for row in self._blocks:
            for block in row:
                self._layout.removeWidget(block)
                block.deleteLater()
        self._blocks = []

    # Control -------------------------------------------------------------
    def start(self) -> None:
        self._active = True
        self.show()

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self.hide()

    # Accessors -----------------------------------------------------------
    def is_active(self) -> bool:
        return self._active

    def row_count(self) -> int:
        return len(self._blocks)

    def width_ratios(self) -> List[List[float]]:
        return [[float(b.property("widthRatio")) for b in row] for row in self._blocks]
