"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Any, Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notification_center.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` model). If the provided value cannot be resolved, UTC is
    used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def coerce_app_datetime(value: Any) -> datetime | None:
    """Return ``value`` as an aware datetime, or ``None`` when it is unusable.

    Accepts ``datetime`` and ``date`` instances as well as ISO-8601 strings. A
    bare date is interpreted as the start of that day in the app timezone.
    """

    if isinstance(value, datetime):
        return ensure_app_timezone(value)
    if isinstance(value, date):
        return ensure_app_timezone(datetime.combine(value, time.min))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return ensure_app_timezone(parsed)
    return None


def calendar_days_between(start: datetime, end: datetime) -> int:
    """Return the number of calendar days from ``start`` to ``end`` in the app timezone."""

    start_local = ensure_app_timezone(start)
    end_local = ensure_app_timezone(end)
    return (end_local.date() - start_local.date()).days


def start_of_day(value: datetime) -> datetime:
    """Return midnight of the calendar day containing ``value`` in the app timezone."""

    local = ensure_app_timezone(value)
    return datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
