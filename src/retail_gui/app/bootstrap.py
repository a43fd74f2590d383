"""Application bootstrap for the retail desk GUI.

Responsibilities:
 - Build settings (environment aware) and the core services
 - Register them in the global service locator
 - Attach the activity capture (guard, navigation and data-load channels)
 - Create the QApplication unless running headless

PyQt6 is imported lazily so headless tests never need a display.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Optional

from retail_gui.services.event_bus import EventBus, GUIEvent
from retail_gui.services.logging_service import LoggingService
from retail_gui.services.navigation_service import NavigationService
from retail_gui.services.operation_guard import CriticalOperationGuard
from retail_gui.services.service_locator import (
    EVENT_BUS,
    LOGGING,
    NAVIGATION,
    OPERATION_GUARD,
    SETTINGS,
    TABLE_DATA,
    ServiceLocator,
    services,
)
from retail_gui.services.settings_service import SettingsService
from retail_gui.services.table_data_service import TableDataService

__all__ = ["AppContext", "create_app", "parse_headless"]

_logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication (None when headless)
    headless: Whether the headless path was taken
    settings: Active settings instance
    services: Service locator after registration
    duration_s: Elapsed bootstrap time in seconds
    """

    qt_app: Optional[Any]
    headless: bool
    settings: SettingsService
    services: ServiceLocator
    duration_s: float

    @property
    def event_bus(self) -> EventBus:
        return self.services.get_typed(EVENT_BUS, EventBus)

    @property
    def navigation(self) -> NavigationService:
        return self.services.get_typed(NAVIGATION, NavigationService)

    @property
    def guard(self) -> CriticalOperationGuard:
        return self.services.get_typed(OPERATION_GUARD, CriticalOperationGuard)


def parse_headless(argv: list[str] | None = None) -> bool:
    args = argv if argv is not None else sys.argv[1:]
    return "--headless" in args or os.environ.get("RETAILDESK_HEADLESS") == "1"


def create_app(
    *,
    headless: bool | None = None,
    settings: SettingsService | None = None,
    locator: ServiceLocator | None = None,
) -> AppContext:
    """Create the service graph and (optionally) the QApplication."""
    started = time.perf_counter()
    headless = parse_headless() if headless is None else headless
    settings = settings or SettingsService.from_env()
    SettingsService.instance = settings
    registry = locator or services

    bus = EventBus()
    log_service = LoggingService(event_bus=bus)
    navigation = NavigationService(settings.initial_path, event_bus=bus)
    guard = CriticalOperationGuard(navigation, event_bus=bus)
    table_data = TableDataService(settings.data_cache_ttl_seconds, event_bus=bus)
    for key, value in (
        (EVENT_BUS, bus),
        (SETTINGS, settings),
        (LOGGING, log_service),
        (NAVIGATION, navigation),
        (OPERATION_GUARD, guard),
        (TABLE_DATA, table_data),
    ):
        registry.register(key, value, replace=True)
    log_service.attach()

    qt_app = None
    if not headless:
        from PyQt6.QtWidgets import QApplication

        qt_app = QApplication.instance() or QApplication(sys.argv)

    duration = time.perf_counter() - started
    _logger.info("Bootstrap finished in %.3fs (headless=%s)", duration, headless)
    bus.publish(GUIEvent.STARTUP_COMPLETE, {"headless": headless})
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        settings=settings,
        services=registry,
        duration_s=duration,
    )
