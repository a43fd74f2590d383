# Shared fixtures. Qt runs offscreen; widget tests use pytest-qt's qtbot.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from retail_gui.services.service_locator import services  # noqa: E402
from retail_gui.services.settings_service import SettingsService  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_globals():
    saved_settings = SettingsService.instance
    services.clear()
    yield
    services.clear()
    SettingsService.instance = saved_settings
