"""Blocking prompt for the critical operation guard.

Opens (window-modal, non-blocking) whenever the guard enters BLOCKED and
closes when it leaves it. "Cancel operation" abandons the pending process
through ``confirm_cancel``; "Return to process" and Esc go back to it
through ``confirm_return``.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from retail_gui.services.operation_guard import CriticalOperationGuard, GuardState

__all__ = ["OperationGuardDialog"]


class OperationGuardDialog(QDialog):
    def __init__(self, guard: CriticalOperationGuard, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("operationGuardDialog")
        self.setWindowTitle("Operation in progress")
        self.setWindowModality(Qt.WindowModality.WindowModal)
        self._guard = guard
        layout = QVBoxLayout(self)
        self.title_label = QLabel("Operation in progress")
        self.title_label.setObjectName("operationGuardTitle")
        layout.addWidget(self.title_label)
        self.message_label = QLabel()
        self.message_label.setObjectName("operationGuardMessage")
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)
        buttons = QHBoxLayout()
        self.cancel_button = QPushButton("Cancel operation")
        self.cancel_button.setObjectName("operationGuardCancel")
        self.cancel_button.clicked.connect(self._on_cancel)  # type: ignore[attr-defined]
        buttons.addWidget(self.cancel_button)
        self.return_button = QPushButton("Return to process")
        self.return_button.setObjectName("operationGuardReturn")
        self.return_button.setDefault(True)
        self.return_button.clicked.connect(self._on_return)  # type: ignore[attr-defined]
        buttons.addWidget(self.return_button)
        layout.addLayout(buttons)
        guard.add_state_listener(self._on_guard_state)

    def detach(self) -> None:
        self._guard.remove_state_listener(self._on_guard_state)

    # Guard -> dialog -----------------------------------------------------
    def _on_guard_state(self, state: GuardState) -> None:
        if state is GuardState.BLOCKED:
            op = self._guard.active_operation
            name = op.operation_name if op else ""
            self.message_label.setText(
                f"You have a pending “{name}” process. You cannot change section "
                "until it is completed or cancelled."
            )
            self.open()
        elif self.isVisible():
            self.hide()

    # Dialog -> guard -----------------------------------------------------
    def _on_cancel(self) -> None:
        self._guard.confirm_cancel()

    def _on_return(self) -> None:
        self._guard.confirm_return()

    def reject(self) -> None:  # type: ignore[override]
        if self._guard.state is GuardState.BLOCKED:
            self._guard.confirm_return()
        super().reject()
