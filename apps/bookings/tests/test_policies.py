"""Free-cancellation deadline tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone

import pytest

from apps.bookings.domain.policies import free_cancellation_deadline, is_within_free_cancellation


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=dt_timezone.utc)


CHECK_IN = date(2026, 1, 10)
CREATED = utc(2026, 1, 1)


def test_deadline_is_local_midnight_three_days_before_check_in():
    # 2026-01-07T00:00+09:00
    assert free_cancellation_deadline(CHECK_IN, created_at=CREATED) == utc(2026, 1, 6, 15)


def test_cancelling_on_jan_6_is_free():
    assert is_within_free_cancellation(utc(2026, 1, 6), CHECK_IN, created_at=CREATED)


def test_cancelling_on_jan_8_is_fee_liable():
    assert not is_within_free_cancellation(utc(2026, 1, 8), CHECK_IN, created_at=CREATED)


def test_deadline_instant_itself_is_no_longer_free():
    deadline = free_cancellation_deadline(CHECK_IN, created_at=CREATED)
    assert is_within_free_cancellation(deadline - timedelta(microseconds=1), CHECK_IN, created_at=CREATED)
    assert not is_within_free_cancellation(deadline, CHECK_IN, created_at=CREATED)


def test_last_minute_booking_deadline_is_creation_instant():
    created = utc(2026, 1, 8, 3)
    deadline = free_cancellation_deadline(CHECK_IN, created_at=created)
    assert deadline == created
    assert not is_within_free_cancellation(created, CHECK_IN, created_at=created)


def test_deadline_does_not_depend_on_requester_offset():
    kst = dt_timezone(timedelta(hours=9))
    pst = dt_timezone(timedelta(hours=-8))
    a = free_cancellation_deadline(CHECK_IN, created_at=CREATED.astimezone(kst))
    b = free_cancellation_deadline(CHECK_IN, created_at=CREATED.astimezone(pst))
    assert a == b == utc(2026, 1, 6, 15)


def test_deadline_is_monotonic_in_check_in():
    deadlines = [
        free_cancellation_deadline(CHECK_IN + timedelta(days=offset), created_at=CREATED)
        for offset in range(0, 60)
    ]
    assert deadlines == sorted(deadlines)


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, utc(2026, 1, 9, 15)),
        (1, utc(2026, 1, 8, 15)),
        (7, utc(2026, 1, 2, 15)),
    ],
)
def test_days_override(days, expected):
    assert free_cancellation_deadline(CHECK_IN, created_at=CREATED, days=days) == expected


def test_configured_days_and_zone(settings):
    settings.BOOKING_POLICY = {"FREE_CANCELLATION_DAYS": 5, "LOCAL_TIME_ZONE": "UTC"}
    assert free_cancellation_deadline(CHECK_IN) == utc(2026, 1, 5)
