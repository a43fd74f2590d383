"""Main window shell.

Sidebar of section links plus a content area. Links are plain rich-text
anchors; activating one goes through ``NavigationService.request`` so the
operation guard can veto it. Soft navigations reuse a section's page, full
navigations rebuild it. ``closeEvent`` asks the navigation host whether
anything wants a confirmation before the window goes away; while a critical
operation is active that confirmation is always asked. Activity captured by
``LoggingService`` (blocked sections, failed loads) is echoed in the status
bar, and absolute links open outside the app.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QCloseEvent, QDesktopServices
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from retail_gui.components.operation_guard_dialog import OperationGuardDialog
from retail_gui.services.event_bus import Event, EventBus, GUIEvent, Subscription
from retail_gui.services.navigation_service import NavigationService
from retail_gui.services.operation_guard import CriticalOperationGuard

__all__ = ["MainWindow", "SECTIONS"]

_logger = logging.getLogger(__name__)

SECTIONS: List[Tuple[str, str]] = [
    ("/panel", "Dashboard"),
    ("/products", "Products"),
    ("/inventory", "Inventory"),
    ("/sales", "Sales"),
    ("/purchases", "Purchases"),
    ("/orders", "Orders"),
    ("/reports", "Reports"),
    ("/settings", "Settings"),
]

PageFactory = Callable[[], QWidget]

STATUS_TIMEOUT_MS = 8000


class MainWindow(QMainWindow):
    def __init__(
        self,
        navigation: NavigationService,
        guard: CriticalOperationGuard,
        *,
        pages: Optional[Dict[str, PageFactory]] = None,
        event_bus: Optional[EventBus] = None,
        confirm_close: Optional[Callable[[str], bool]] = None,
        open_url: Optional[Callable[[str], None]] = None,
    ):
        super().__init__()
        self.setWindowTitle("Retail Desk")
        self._nav = navigation
        self._guard = guard
        self._factories: Dict[str, PageFactory] = dict(pages or {})
        self._pages: Dict[str, QWidget] = {}
        self._confirm_close = confirm_close or self._ask_close
        self._build_ui()
        self.guard_dialog = OperationGuardDialog(guard, self)
        navigation.add_listener(self._on_navigated)
        navigation.add_full_navigation_listener(self._on_full_navigation)
        navigation.add_external_listener(open_url or self._open_url)
        self._activity_sub: Optional[Subscription] = None
        self._bus = event_bus
        if event_bus is not None:
            self._activity_sub = event_bus.subscribe(
                GUIEvent.LOG_RECORD_ADDED, self._on_activity
            )
        self._show_page(navigation.current_path())

    def _build_ui(self) -> None:
        central = QWidget(self)
        root = QHBoxLayout(central)
        sidebar = QWidget(central)
        sidebar.setObjectName("sidebar")
        side_layout = QVBoxLayout(sidebar)
        self.links: Dict[str, QLabel] = {}
        for path, label in SECTIONS:
            link = QLabel(f'<a href="{path}">{label}</a>')
            link.setObjectName(f"navLink{label}")
            link.linkActivated.connect(self.activate_link)  # type: ignore[attr-defined]
            side_layout.addWidget(link)
            self.links[path] = link
        side_layout.addStretch(1)
        root.addWidget(sidebar)
        self.content = QStackedWidget(central)
        root.addWidget(self.content, 1)
        self.setCentralWidget(central)

    # Navigation -----------------------------------------------------
    def activate_link(self, href: str) -> bool:
        return self._nav.request(href)

    def current_page(self) -> Optional[QWidget]:
        return self.content.currentWidget()

    def _on_navigated(self, _href: str) -> None:
        self._show_page(self._nav.current_path())

    def _on_full_navigation(self, _href: str) -> None:
        path = self._nav.current_path()
        old = self._pages.pop(path, None)
        if old is not None:
            self.content.removeWidget(old)
            old.deleteLater()
        self._show_page(path)

    def _show_page(self, path: str) -> None:
        page = self._pages.get(path)
        if page is None:
            factory = self._factories.get(path)
            page = factory() if factory else QLabel(f"{path} is not available yet")
            self._pages[path] = page
            self.content.addWidget(page)
        self.content.setCurrentWidget(page)

    def _open_url(self, href: str) -> None:
        QDesktopServices.openUrl(QUrl(href))

    # Status ---------------------------------------------------------
    def _on_activity(self, event: Event) -> None:
        payload = event.payload or {}
        self.statusBar().showMessage(str(payload.get("message", "")), STATUS_TIMEOUT_MS)

    # Close ----------------------------------------------------------
    def _ask_close(self, reasons: str) -> bool:
        answer = QMessageBox.question(
            self,
            "Leave Retail Desk?",
            f"There is an operation in progress ({reasons}). Close anyway?",
        )
        return answer == QMessageBox.StandardButton.Yes

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        request = self._nav.request_close()
        if request.confirmation_requested:
            if not self._confirm_close(", ".join(request.requested_by)):
                _logger.info("Close cancelled by user")
                event.ignore()
                return
        self.guard_dialog.detach()
        if self._bus is not None and self._activity_sub is not None:
            self._bus.unsubscribe(self._activity_sub)
            self._activity_sub = None
        super().closeEvent(event)
