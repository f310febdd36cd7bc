"""
Clock and Time Zone Utilities

All conversions between calendar dates and UTC instants go through this
module. Policy code only ever supplies dates and offsets; the canonical
local time zone (where check-in/check-out dates are interpreted) is
resolved here.

- local_midnight_utc: date -> UTC instant of 00:00 local time
- local_date: UTC instant -> local calendar date
- month_bounds: (year, month) -> [first day, first day of next month)
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo

from django.utils import timezone  # type: ignore

from shared.conf import policy_setting


def get_local_timezone(name: str | None = None) -> ZoneInfo:
    """Canonical calendar time zone (BOOKING_POLICY["LOCAL_TIME_ZONE"])."""
    return ZoneInfo(name or policy_setting("LOCAL_TIME_ZONE"))


def _resolve(tz: ZoneInfo | str | None) -> ZoneInfo:
    if isinstance(tz, ZoneInfo):
        return tz
    return get_local_timezone(tz)


def utc_now() -> datetime:
    return timezone.now().astimezone(dt_timezone.utc)


def ensure_utc(instant: datetime) -> datetime:
    """
    Normalize an instant to an aware UTC datetime.

    Naive datetimes are rejected: an instant without an offset cannot be
    compared against deadlines safely.
    """
    if timezone.is_naive(instant):
        raise ValueError(f"Naive datetime is not an instant: {instant!r}")
    return instant.astimezone(dt_timezone.utc)


def local_midnight_utc(day: date, tz: ZoneInfo | str | None = None) -> datetime:
    """UTC instant of 00:00 on ``day`` in the local calendar zone."""
    local = datetime(day.year, day.month, day.day, tzinfo=_resolve(tz))
    return local.astimezone(dt_timezone.utc)


def local_date(instant: datetime, tz: ZoneInfo | str | None = None) -> date:
    """Calendar date of ``instant`` in the local zone."""
    return ensure_utc(instant).astimezone(_resolve(tz)).date()


def days_before(day: date, days: int) -> date:
    return day - timedelta(days=days)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """
    Return (first day of month, first day of next month).

    The upper bound is exclusive, matching the [check_in, check_out)
    convention used for stays.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)
