"""Table data loading with a short-lived cache.

Views hand a cache key (typically the endpoint, e.g. ``"/api/products"``)
and a zero-argument fetcher. Results are reused for ``ttl_seconds``;
``refresh`` forces a new fetch and ``invalidate`` drops keys by prefix after
a mutation. A failing fetcher never propagates: the result carries the
error text and an empty row list, so a bound table falls back to its empty
state.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .event_bus import EventBus, GUIEvent
from .settings_service import SettingsService

__all__ = ["LoadResult", "TableDataService"]

_logger = logging.getLogger(__name__)

Fetcher = Callable[[], Any]


@dataclass
class LoadResult:
    data: List[Any] = field(default_factory=list)
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class _CacheEntry:
    data: List[Any]
    stored_at: float


class TableDataService:
    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._ttl = (
            ttl_seconds
            if ttl_seconds is not None
            else SettingsService.instance.data_cache_ttl_seconds
        )
        self._clock = clock
        self._bus = event_bus
        self._store: Dict[str, _CacheEntry] = {}

    def load(self, key: str, fetch: Fetcher) -> LoadResult:
        entry = self._store.get(key)
        if entry is not None and self._clock() - entry.stored_at < self._ttl:
            return LoadResult(data=list(entry.data), from_cache=True)
        try:
            data = list(fetch() or [])
        except Exception as exc:  # noqa: BLE001 - surfaced through LoadResult.error
            _logger.warning("Loading %s failed: %s", key, exc)
            return LoadResult(data=[], error=str(exc) or type(exc).__name__)
        self._store[key] = _CacheEntry(data=data, stored_at=self._clock())
        _logger.info("Loaded %d rows for %s", len(data), key)
        if self._bus is not None:
            self._bus.publish(GUIEvent.TABLE_DATA_LOADED, {"key": key, "count": len(data)})
        return LoadResult(data=list(data))

    def refresh(self, key: str, fetch: Fetcher) -> LoadResult:
        self._store.pop(key, None)
        return self.load(key, fetch)

    def bind(self, viewmodel: Any, key: str, fetch: Fetcher, *, refresh: bool = False) -> LoadResult:
        """Load ``key`` into a ``DataTableViewModel``, toggling its loading state."""
        viewmodel.set_loading(True)
        try:
            result = self.refresh(key, fetch) if refresh else self.load(key, fetch)
            viewmodel.set_rows(result.data)
        finally:
            viewmodel.set_loading(False)
        return result

    def invalidate(self, prefix: Optional[str] = None) -> int:
        """Drop cached entries whose key starts with ``prefix`` (all when None)."""
        if prefix is None:
            return self.clear()
        doomed = [k for k in self._store if k.startswith(prefix)]
        for k in doomed:
            del self._store[k]
        return len(doomed)

    def clear(self) -> int:
        removed = len(self._store)
        self._store.clear()
        return removed

    def cached_keys(self) -> List[str]:
        return sorted(self._store)
