"""Application-level settings for the retail desk GUI.

Holds the defaults shared by tables, the data loader and the navigation
host. The class-level ``instance`` is what components fall back to when
no explicit value is passed; bootstrap may replace it with
``SettingsService.from_env()`` and tests with a custom instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Mapping

__all__ = ["SettingsService", "ENV_PREFIX"]

ENV_PREFIX = "RETAILDESK_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class SettingsService:
    """Runtime settings.

    Attributes:
        table_empty_message: Message shown by tables that receive no rows.
        table_show_row_index: Whether tables prefix rows with a 1-based index.
        data_cache_ttl_seconds: How long loaded table data is reused before
            the fetcher is called again.
        collation_locale: Locale whose collation orders text columns.
        initial_path: Section the navigation host starts on.
    """

    instance: ClassVar["SettingsService"]

    table_empty_message: str = "No data to display"
    table_show_row_index: bool = True
    data_cache_ttl_seconds: float = 30.0
    collation_locale: str = "es_ES"
    initial_path: str = "/panel"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SettingsService":
        """Build settings from ``RETAILDESK_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def _get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        def _flag(name: str, default: bool) -> bool:
            raw = _get(name)
            return default if raw is None else raw.strip().lower() in _TRUE_VALUES

        ttl_raw = _get("DATA_CACHE_TTL")
        return cls(
            table_empty_message=_get("EMPTY_MESSAGE") or defaults.table_empty_message,
            table_show_row_index=_flag("SHOW_ROW_INDEX", defaults.table_show_row_index),
            data_cache_ttl_seconds=(
                float(ttl_raw) if ttl_raw else defaults.data_cache_ttl_seconds
            ),
            collation_locale=_get("COLLATION_LOCALE") or defaults.collation_locale,
            initial_path=_get("INITIAL_PATH") or defaults.initial_path,
        )


SettingsService.instance = SettingsService()
