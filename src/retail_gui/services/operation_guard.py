"""Critical operation guard.

Blocks section changes and window close while a critical operation (a sale
being registered, a purchase being entered) holds unsaved input. The form
that owns the operation calls ``start`` once it becomes dirty and ``end``
when it is saved or discarded. While an operation is active the guard
listens on the navigation host:

 - links to another section are vetoed and the guard moves to BLOCKED,
   remembering the target, so the shell can show the blocking prompt;
 - links to the operation's return path, to the current page, same-page
   ``#fragments`` and absolute URLs pass untouched;
 - close requests always ask the shell for a native confirmation.

From BLOCKED the user either returns to the process (``confirm_return``) or
abandons it (``confirm_cancel``). Cancelling removes the interceptors before
running the operation's ``on_cancel`` callback and only then performs a full
navigation to the remembered target, so the close confirmation cannot fire
again during that navigation.

There is a single operation slot. Starting a second operation replaces the
first without queueing; only the latest ``on_cancel`` will ever run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol

from .event_bus import EventBus, GUIEvent
from .navigation_service import (
    CloseInterceptor,
    CloseRequest,
    LinkInterceptor,
    NavigationIntent,
    is_external,
)

__all__ = [
    "CriticalOperation",
    "GuardState",
    "NavigationHost",
    "CriticalOperationGuard",
]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CriticalOperation:
    operation_name: str
    return_path: str
    on_cancel: Optional[Callable[[], None]] = None

    def __post_init__(self) -> None:
        if not self.operation_name:
            raise ValueError("operation_name must not be empty")
        if not self.return_path:
            raise ValueError("return_path must not be empty")


class GuardState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    BLOCKED = "blocked"


class NavigationHost(Protocol):
    def current_path(self) -> str: ...

    def add_link_interceptor(self, fn: LinkInterceptor) -> None: ...

    def remove_link_interceptor(self, fn: LinkInterceptor) -> None: ...

    def add_close_interceptor(self, fn: CloseInterceptor) -> None: ...

    def remove_close_interceptor(self, fn: CloseInterceptor) -> None: ...

    def navigate_full(self, href: str) -> None: ...


def _strip_fragment(href: str) -> str:
    return href.split("#", 1)[0]


class CriticalOperationGuard:
    def __init__(self, host: NavigationHost, *, event_bus: Optional[EventBus] = None):
        self._host = host
        self._bus = event_bus
        self._operation: Optional[CriticalOperation] = None
        self._state = GuardState.IDLE
        self._pending: Optional[str] = None
        self._intercepting = False
        self._state_listeners: List[Callable[[GuardState], None]] = []

    # Accessors ----------------------------------------------------------
    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def active_operation(self) -> Optional[CriticalOperation]:
        return self._operation

    @property
    def is_operation_active(self) -> bool:
        return self._operation is not None

    @property
    def pending_target(self) -> Optional[str]:
        return self._pending

    @property
    def is_intercepting(self) -> bool:
        return self._intercepting

    def add_state_listener(self, fn: Callable[[GuardState], None]) -> None:
        self._state_listeners.append(fn)

    def remove_state_listener(self, fn: Callable[[GuardState], None]) -> None:
        if fn in self._state_listeners:
            self._state_listeners.remove(fn)

    # Lifecycle ----------------------------------------------------------
    def start(self, operation: CriticalOperation) -> None:
        previous = self._operation
        if previous is not None and previous is not operation:
            _logger.warning(
                "Critical operation %r replaced by %r",
                previous.operation_name,
                operation.operation_name,
            )
        self._operation = operation
        self._install()
        if self._state is GuardState.IDLE:
            self._set_state(GuardState.ACTIVE)
        self._publish(GUIEvent.OPERATION_STARTED, {"operation": operation.operation_name})

    def end(self) -> None:
        if self._state is GuardState.IDLE and not self._intercepting:
            return
        operation = self._operation
        self._remove()
        self._operation = None
        self._pending = None
        self._set_state(GuardState.IDLE)
        self._publish(
            GUIEvent.OPERATION_ENDED,
            {"operation": operation.operation_name if operation else None},
        )

    # Prompt decisions ---------------------------------------------------
    def confirm_return(self) -> None:
        if self._state is not GuardState.BLOCKED:
            return
        self._pending = None
        self._set_state(GuardState.ACTIVE)

    def confirm_cancel(self) -> bool:
        """Abandon the active operation.

        Returns False when there was nothing to cancel.
        """
        operation = self._operation
        if operation is None:
            return False
        target = self._pending
        self._remove()
        if operation.on_cancel is not None:
            try:
                operation.on_cancel()
            except Exception:  # noqa: BLE001
                _logger.exception("on_cancel failed for %r", operation.operation_name)
        self._operation = None
        self._pending = None
        _logger.info("Cancelled %r", operation.operation_name)
        self._set_state(GuardState.IDLE)
        self._publish(
            GUIEvent.OPERATION_CANCELLED,
            {"operation": operation.operation_name, "target": target},
        )
        if target:
            self._host.navigate_full(target)
        return True

    # Interception -------------------------------------------------------
    def should_intercept(self, href: str) -> bool:
        operation = self._operation
        if operation is None or not href or href.startswith("#"):
            return False
        if is_external(href):
            return False
        target = _strip_fragment(href)
        current = _strip_fragment(self._host.current_path())
        return target not in (operation.return_path, current)

    def _on_link(self, intent: NavigationIntent) -> None:
        if not self.should_intercept(intent.href):
            return
        intent.prevent_default()
        intent.stop_propagation()
        self._pending = intent.href
        _logger.info(
            "Blocked navigation to %s during %r",
            intent.href,
            self._operation.operation_name if self._operation else None,
        )
        self._set_state(GuardState.BLOCKED)
        self._publish(GUIEvent.NAVIGATION_BLOCKED, {"target": intent.href})

    def _on_close(self, request: CloseRequest) -> None:
        if self._operation is not None:
            request.request_confirmation(self._operation.operation_name)

    def _install(self) -> None:
        if self._intercepting:
            return
        self._host.add_link_interceptor(self._on_link)
        self._host.add_close_interceptor(self._on_close)
        self._intercepting = True

    def _remove(self) -> None:
        if not self._intercepting:
            return
        self._host.remove_link_interceptor(self._on_link)
        self._host.remove_close_interceptor(self._on_close)
        self._intercepting = False

    # Internal -----------------------------------------------------------
    def _set_state(self, state: GuardState) -> None:
        if state is self._state:
            return
        self._state = state
        for fn in list(self._state_listeners):
            fn(state)

    def _publish(self, name: GUIEvent, payload: dict) -> None:
        if self._bus is not None:
            self._bus.publish(name, payload)
