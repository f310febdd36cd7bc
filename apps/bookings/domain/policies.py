"""
Cancellation Policy

A booking can be cancelled free of charge until 00:00 local time,
FREE_CANCELLATION_DAYS calendar days before check-in. Local time is the
canonical calendar zone (Asia/Seoul unless configured otherwise); the
deadline itself is a UTC instant.

Bookings made inside the window (last-minute bookings) get a deadline equal
to their creation instant, i.e. no free-cancellation period at all.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from shared.conf import policy_setting
from shared.domain.clock import days_before, ensure_utc, local_midnight_utc

from .entities import BookingStatus

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.bookings.models import Booking


def free_cancellation_days(override: int | None = None) -> int:
    """Per-listing override if set, else the platform default."""
    if override is not None:
        return int(override)
    return int(policy_setting("FREE_CANCELLATION_DAYS"))


def free_cancellation_deadline(
    check_in: date,
    *,
    created_at: datetime | None = None,
    days: int | None = None,
    tz: ZoneInfo | str | None = None,
) -> datetime:
    """
    Last instant (exclusive) at which a cancellation is still free.

    Example with the default zone and 3 days: check-in 2026-01-10 gives
    2026-01-07T00:00+09:00, i.e. 2026-01-06T15:00:00Z.
    """
    boundary_day = days_before(check_in, free_cancellation_days(days))
    deadline = local_midnight_utc(boundary_day, tz)
    if created_at is not None:
        created_at = ensure_utc(created_at)
        if deadline < created_at:
            return created_at
    return deadline


def is_within_free_cancellation(
    now: datetime,
    check_in: date,
    *,
    created_at: datetime | None = None,
    days: int | None = None,
    tz: ZoneInfo | str | None = None,
) -> bool:
    deadline = free_cancellation_deadline(check_in, created_at=created_at, days=days, tz=tz)
    return ensure_utc(now) < deadline


def cancellation_fee_applies(booking: "Booking", now: datetime) -> bool:
    """True when cancelling this confirmed booking at ``now`` incurs the fee."""
    if booking.status != BookingStatus.CONFIRMED:
        return False
    deadline = booking.free_cancellation_deadline
    if deadline is None:
        deadline = free_cancellation_deadline(booking.check_in, created_at=booking.created_at)
    return ensure_utc(now) >= deadline
