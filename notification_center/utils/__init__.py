"""Utility helpers for reusable functionality."""

from .datetime import (
    calendar_days_between,
    coerce_app_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_timezone,
    start_of_day,
)

__all__ = [
    "calendar_days_between",
    "coerce_app_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
    "start_of_day",
]
