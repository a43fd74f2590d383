"""Retail Desk GUI public API.

Small curated surface for the launcher and tests: the service locator, the
event bus and the critical operation guard. Qt is not imported here.
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import EventBus, GUIEvent, Event  # noqa: F401
from .services.operation_guard import (  # noqa: F401
    CriticalOperation,
    CriticalOperationGuard,
    GuardState,
)

__all__ = [
    "services",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EventBus",
    "GUIEvent",
    "Event",
    "CriticalOperation",
    "CriticalOperationGuard",
    "GuardState",
]
