"""Activity capture for the operator status line.

Only three loggers matter to someone at the counter: the operation guard
(blocked sections, cancelled sales), the navigation host and the table data
loader (failed fetches). ``LoggingService`` hangs a handler on each of those
channels, keeps the latest entries per channel and announces every entry as
``GUIEvent.LOG_RECORD_ADDED`` so the main window can show it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, Dict, List, Optional

from .event_bus import EventBus, GUIEvent
from .service_locator import EVENT_BUS, services

__all__ = ["CHANNELS", "ActivityEntry", "LoggingService"]

CHANNELS: Dict[str, str] = {
    "guard": "retail_gui.services.operation_guard",
    "navigation": "retail_gui.services.navigation_service",
    "data": "retail_gui.services.table_data_service",
}


@dataclass(frozen=True)
class ActivityEntry:
    channel: str
    level: str
    message: str
    created: float


class _ChannelHandler(logging.Handler):
    def __init__(self, svc: "LoggingService", channel: str) -> None:
        super().__init__(logging.DEBUG)
        self._svc = svc
        self._channel = channel

    def emit(self, record: logging.LogRecord) -> None:
        self._svc._ingest(self._channel, record)


class LoggingService:
    def __init__(self, capacity: int = 200, *, event_bus: Optional[EventBus] = None) -> None:
        self._lock = RLock()
        self._entries: Deque[ActivityEntry] = deque(maxlen=max(1, capacity))
        self._bus = event_bus
        self._handlers: Dict[str, _ChannelHandler] = {}
        self._saved_levels: Dict[str, int] = {}

    # Lifecycle --------------------------------------------------------
    def attach(self, level: int = logging.INFO) -> None:
        """Start capturing ``level`` and above on every channel."""
        if self._handlers:
            return
        for channel, logger_name in CHANNELS.items():
            logger = logging.getLogger(logger_name)
            handler = _ChannelHandler(self, channel)
            logger.addHandler(handler)
            self._saved_levels[channel] = logger.level
            if logger.level == logging.NOTSET or logger.level > level:
                logger.setLevel(level)
            self._handlers[channel] = handler

    def detach(self) -> None:
        for channel, handler in self._handlers.items():
            logger = logging.getLogger(CHANNELS[channel])
            logger.removeHandler(handler)
            logger.setLevel(self._saved_levels.get(channel, logging.NOTSET))
        self._handlers.clear()
        self._saved_levels.clear()

    @property
    def attached(self) -> bool:
        return bool(self._handlers)

    # Ingestion --------------------------------------------------------
    def _ingest(self, channel: str, record: logging.LogRecord) -> None:
        entry = ActivityEntry(
            channel=channel,
            level=record.levelname,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        bus = self._bus if self._bus is not None else services.try_get(EVENT_BUS)
        if isinstance(bus, EventBus):
            bus.publish(
                GUIEvent.LOG_RECORD_ADDED,
                {"channel": channel, "level": entry.level, "message": entry.message},
            )

    # Query ------------------------------------------------------------
    def entries(self, channel: Optional[str] = None) -> List[ActivityEntry]:
        with self._lock:
            data = list(self._entries)
        if channel is None:
            return data
        return [e for e in data if e.channel == channel]

    def latest(self, channel: Optional[str] = None) -> Optional[ActivityEntry]:
        found = self.entries(channel)
        return found[-1] if found else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
