from datetime import date, datetime, timedelta, timezone

import pytest

from notification_center.config import reset_settings_cache
from notification_center.utils.datetime import (
    calendar_days_between,
    coerce_app_datetime,
    get_app_timezone,
    start_of_day,
)


def _use_timezone(monkeypatch: pytest.MonkeyPatch, name: str) -> None:
    monkeypatch.setenv("APP_TIMEZONE", name)
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime(2026, 10, 19, 8, 0), datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)),
        (date(2026, 10, 19), datetime(2026, 10, 19, tzinfo=timezone.utc)),
        ("2026-10-19", datetime(2026, 10, 19, tzinfo=timezone.utc)),
        ("2026-10-19T08:15:00Z", datetime(2026, 10, 19, 8, 15, tzinfo=timezone.utc)),
        (
            "2026-10-19T10:15:00+02:00",
            datetime(2026, 10, 19, 8, 15, tzinfo=timezone.utc),
        ),
    ],
)
def test_coerce_app_datetime_accepts_supported_inputs(value, expected) -> None:
    result = coerce_app_datetime(value)

    assert result == expected
    assert result.tzinfo is not None


@pytest.mark.parametrize("value", [None, "", "   ", "next tuesday", "2026-13-40", 20261019, []])
def test_coerce_app_datetime_rejects_unusable_values(value) -> None:
    assert coerce_app_datetime(value) is None


def test_offset_timezones_are_resolved(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_timezone(monkeypatch, "UTC-05:00")

    assert get_app_timezone().utcoffset(None) == timedelta(hours=-5)


def test_unknown_timezone_falls_back_to_utc(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_timezone(monkeypatch, "Mars/Olympus_Mons")

    assert get_app_timezone() is timezone.utc


def test_calendar_days_count_date_boundaries_not_hours() -> None:
    late = datetime(2026, 10, 19, 23, 59, tzinfo=timezone.utc)
    early = datetime(2026, 10, 20, 0, 1, tzinfo=timezone.utc)

    assert calendar_days_between(late, early) == 1
    assert calendar_days_between(early, late) == -1
    assert calendar_days_between(early, early + timedelta(hours=20)) == 0


def test_calendar_days_follow_the_app_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_timezone(monkeypatch, "UTC-05:00")
    # 02:00 UTC on the 20th is still the 19th five hours west of UTC.
    now = datetime(2026, 10, 20, 2, 0, tzinfo=timezone.utc)
    due = datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)

    assert calendar_days_between(now, due) == 1


def test_start_of_day_keeps_the_app_timezone() -> None:
    value = datetime(2026, 10, 19, 17, 45, tzinfo=timezone.utc)

    assert start_of_day(value) == datetime(2026, 10, 19, tzinfo=timezone.utc)
