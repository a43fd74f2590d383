"""Empty and error state component.

Registry of reusable templates (title, description, optional action) plus a
widget that renders one. Tables pick a template (``no_data`` by default,
``no_products`` on the catalog, ``no_sales`` on the sales history) and put
their own empty message in the description. Views that failed to load
switch to ``generic_error``, whose Retry action is reported through
``actionRequested``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

__all__ = [
    "EmptyStateTemplate",
    "EmptyStateRegistry",
    "empty_state_registry",
    "get_empty_state_template",
    "EmptyStateWidget",
]


@dataclass(frozen=True)
class EmptyStateTemplate:
    key: str
    title: str
    description: str
    action_text: Optional[str] = None


class EmptyStateRegistry:
    def __init__(self) -> None:
        self._templates: Dict[str, EmptyStateTemplate] = {}
        self._bootstrap_defaults()

    def _bootstrap_defaults(self) -> None:
        for tpl in (
            EmptyStateTemplate("no_data", "Nothing here", "No data to display"),
            EmptyStateTemplate(
                "no_products", "No Products", "Add a product to start building the catalog."
            ),
            EmptyStateTemplate("no_sales", "No Sales", "No sales were registered in this period."),
            EmptyStateTemplate(
                "generic_error",
                "Could not load data",
                "An unexpected error occurred while loading this view.",
                action_text="Retry",
            ),
        ):
            self.register(tpl)

    def register(self, template: EmptyStateTemplate) -> None:
        self._templates[template.key] = template

    def get(self, key: str) -> Optional[EmptyStateTemplate]:
        return self._templates.get(key)

    def all_keys(self) -> List[str]:
        return list(self._templates.keys())


empty_state_registry = EmptyStateRegistry()


def get_empty_state_template(key: str) -> Optional[EmptyStateTemplate]:
    return empty_state_registry.get(key)


class EmptyStateWidget(QWidget):
    """Widget rendering a single EmptyStateTemplate.

    Signals:
        actionRequested: emitted with the template key when the action button is clicked.
    """

    actionRequested = pyqtSignal(str)

    def __init__(
        self,
        template_key: str = "no_data",
        parent: Optional[QWidget] = None,
        *,
        message_override: Optional[str] = None,
    ):
        super().__init__(parent)
        self._template_key = template_key
        self._template = self._resolve(template_key, message_override)
        self._build_ui()
        self._apply()

    @staticmethod
    def _resolve(key: str, message: Optional[str]) -> EmptyStateTemplate:
        tpl = empty_state_registry.get(key) or EmptyStateTemplate(key, "Unavailable", "")
        if message is not None:
            tpl = replace(tpl, description=message)
        return tpl

    # UI ---------------------------------------------------------------
    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 24, 0, 24)
        self.title_label = QLabel()
        self.title_label.setObjectName("emptyStateTitle")
        layout.addWidget(self.title_label)
        self.desc_label = QLabel()
        self.desc_label.setObjectName("emptyStateDesc")
        self.desc_label.setWordWrap(True)
        layout.addWidget(self.desc_label)
        self.action_button = QPushButton()
        self.action_button.setObjectName("emptyStateAction")
        self.action_button.clicked.connect(  # type: ignore[attr-defined]
            lambda: self.actionRequested.emit(self._template_key)
        )
        layout.addWidget(self.action_button)
        layout.addStretch(1)

    def _apply(self) -> None:
        self.title_label.setText(self._template.title)
        self.desc_label.setText(self._template.description)
        if self._template.action_text:
            self.action_button.setText(self._template.action_text)
            self.action_button.show()
        else:
            self.action_button.hide()

    # API --------------------------------------------------------------
    def template_key(self) -> str:
        return self._template_key

    def message(self) -> str:
        return self.desc_label.text()

    def has_action(self) -> bool:
        return bool(self._template.action_text)

    def set_template(self, key: str, message_override: Optional[str] = None) -> None:
        self._template_key = key
        self._template = self._resolve(key, message_override)
        self._apply()
