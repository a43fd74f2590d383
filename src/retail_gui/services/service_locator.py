"""Process-wide registry of the retail desk services.

Bootstrap registers one instance under each of the key constants below;
views and the log capture look them up instead of threading every
dependency through constructors. Tests clear the registry between cases.

    services.register(OPERATION_GUARD, guard)
    guard = services.get_typed(OPERATION_GUARD, CriticalOperationGuard)
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T")

__all__ = [
    "ServiceLocator",
    "services",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EVENT_BUS",
    "SETTINGS",
    "LOGGING",
    "NAVIGATION",
    "OPERATION_GUARD",
    "TABLE_DATA",
]

EVENT_BUS = "event_bus"
SETTINGS = "settings"
LOGGING = "logging_service"
NAVIGATION = "navigation"
OPERATION_GUARD = "operation_guard"
TABLE_DATA = "table_data"


class ServiceAlreadyRegisteredError(RuntimeError):
    pass


class ServiceNotFoundError(KeyError):
    pass


class ServiceLocator:
    def __init__(self) -> None:
        self._lock = RLock()
        self._services: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, replace: bool = False) -> None:
        with self._lock:
            if key in self._services and not replace:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._services[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._services:
                raise ServiceNotFoundError(key)
            return self._services[key]

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"Service '{key}' is a {type(value).__name__}, expected {expected_type.__name__}"
            )
        return value

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._services.get(key, default)

    def clear(self) -> None:
        with self._lock:
            self._services.clear()


services = ServiceLocator()
