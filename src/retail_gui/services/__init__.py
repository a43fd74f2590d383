"""Service layer exports.

Responsibilities:
 - Service locator (`services`) and EventBus publish/subscribe
 - Navigation host and the critical operation guard
 - Table sorting and table data loading
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, GUIEvent  # noqa: F401
from .navigation_service import NavigationService  # noqa: F401
from .operation_guard import CriticalOperation, CriticalOperationGuard, GuardState  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "GUIEvent",
    "NavigationService",
    "CriticalOperation",
    "CriticalOperationGuard",
    "GuardState",
]
