"""Navigation host for the retail desk sections.

Every section link in the shell goes through ``NavigationService.request``.
Before a soft (in-app) navigation happens the intent is offered to the
registered link interceptors in registration order; any of them may veto it
with ``prevent_default()``. Window close requests are offered to close
interceptors the same way, which may ask the shell to confirm with the
user. ``navigate_full`` is the hard navigation used after a state reset:
it skips interceptors and tells full-navigation listeners to rebuild the
page from scratch. Absolute URLs (``https://...``, ``mailto:...``) never
become the current path; they go to external listeners, which the shell
wires to the desktop browser or mail client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional
from urllib.parse import urlsplit

from .event_bus import EventBus, GUIEvent

__all__ = [
    "NavigationIntent",
    "CloseRequest",
    "LinkInterceptor",
    "CloseInterceptor",
    "NavigationService",
    "is_external",
]

_logger = logging.getLogger(__name__)


@dataclass
class NavigationIntent:
    """A pending in-app navigation offered to link interceptors."""

    href: str
    source_path: str
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class CloseRequest:
    """A window close attempt offered to close interceptors."""

    confirmation_requested: bool = False
    requested_by: List[str] = field(default_factory=list)

    def request_confirmation(self, reason: str = "") -> None:
        self.confirmation_requested = True
        if reason:
            self.requested_by.append(reason)


def is_external(href: str) -> bool:
    """True for absolute URLs (with a scheme or a ``//host`` part)."""
    parts = urlsplit(href)
    return bool(parts.scheme or parts.netloc)


LinkInterceptor = Callable[[NavigationIntent], None]
CloseInterceptor = Callable[[CloseRequest], None]


class NavigationService:
    def __init__(self, initial_path: str = "/panel", *, event_bus: Optional[EventBus] = None):
        self._path = initial_path
        self._bus = event_bus
        self._link_interceptors: List[LinkInterceptor] = []
        self._close_interceptors: List[CloseInterceptor] = []
        self._listeners: List[Callable[[str], None]] = []
        self._full_listeners: List[Callable[[str], None]] = []
        self._external_listeners: List[Callable[[str], None]] = []
        self._history: List[str] = [initial_path]
        self.full_navigation_count = 0

    # Location -----------------------------------------------------------
    def current_path(self) -> str:
        return self._path

    def history(self) -> List[str]:
        return list(self._history)

    # Interceptors -------------------------------------------------------
    def add_link_interceptor(self, fn: LinkInterceptor) -> None:
        if fn not in self._link_interceptors:
            self._link_interceptors.append(fn)

    def remove_link_interceptor(self, fn: LinkInterceptor) -> None:
        if fn in self._link_interceptors:
            self._link_interceptors.remove(fn)

    def add_close_interceptor(self, fn: CloseInterceptor) -> None:
        if fn not in self._close_interceptors:
            self._close_interceptors.append(fn)

    def remove_close_interceptor(self, fn: CloseInterceptor) -> None:
        if fn in self._close_interceptors:
            self._close_interceptors.remove(fn)

    def interceptor_count(self) -> int:
        return len(self._link_interceptors) + len(self._close_interceptors)

    # Listeners ----------------------------------------------------------
    def add_listener(self, fn: Callable[[str], None]) -> None:
        """Call ``fn(path)`` after every navigation, soft or full."""
        self._listeners.append(fn)

    def add_full_navigation_listener(self, fn: Callable[[str], None]) -> None:
        """Call ``fn(path)`` after full navigations only (page rebuild hook)."""
        self._full_listeners.append(fn)

    def add_external_listener(self, fn: Callable[[str], None]) -> None:
        """Call ``fn(url)`` for absolute URLs instead of navigating."""
        self._external_listeners.append(fn)

    # Navigation ---------------------------------------------------------
    def request(self, href: str) -> bool:
        """Offer ``href`` to interceptors, then navigate unless vetoed.

        Returns True when the navigation happened.
        """
        intent = NavigationIntent(href=href, source_path=self._path)
        for interceptor in list(self._link_interceptors):
            interceptor(intent)
            if intent.propagation_stopped:
                break
        if intent.default_prevented:
            _logger.debug("Navigation to %s vetoed", href)
            return False
        if href.startswith("#"):
            return True
        if is_external(href):
            _logger.info("Opening external link %s", href)
            for fn in list(self._external_listeners):
                fn(href)
            return True
        self._go(href, full=False)
        return True

    def request_close(self) -> CloseRequest:
        req = CloseRequest()
        for interceptor in list(self._close_interceptors):
            interceptor(req)
        return req

    def navigate_full(self, href: str) -> None:
        self.full_navigation_count += 1
        self._go(href, full=True)
        for fn in list(self._full_listeners):
            fn(href)

    def _go(self, href: str, *, full: bool) -> None:
        self._path = href.split("#", 1)[0] or self._path
        self._history.append(href)
        _logger.debug("Navigated to %s (full=%s)", href, full)
        if self._bus is not None:
            self._bus.publish(GUIEvent.NAVIGATED, {"path": href, "full": full})
        for fn in list(self._listeners):
            fn(href)
