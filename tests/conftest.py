"""Shared fixtures for the notification center test-suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``notification_center`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from notification_center.config import reset_settings_cache
from notification_center.utils.datetime import get_app_timezone


def _clear_caches() -> None:
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture(autouse=True)
def utc_settings(monkeypatch: pytest.MonkeyPatch):
    """Run every test with fresh settings evaluated in UTC."""

    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    _clear_caches()
    yield
    _clear_caches()
