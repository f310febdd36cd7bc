"""Expiry and completion sweep tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone

import pytest
from django.utils import timezone

from apps.bookings import tasks
from apps.bookings.application.sweeps import complete_finished_bookings, expire_pending_bookings
from apps.bookings.domain.entities import BookingStatus, CancellationSource
from apps.bookings.models import Booking

T = datetime(2026, 1, 1, tzinfo=dt_timezone.utc)


@pytest.mark.django_db
def test_expiry_cancels_bookings_past_the_hold(make_booking):
    booking = make_booking(created_at=T)
    now = T + timedelta(hours=25)

    assert expire_pending_bookings(24, now=now) == 1

    booking.refresh_from_db()
    assert booking.status == BookingStatus.CANCELLED
    assert booking.cancellation_source == CancellationSource.SYSTEM
    assert booking.cancelled_at == now


@pytest.mark.django_db
def test_expiry_leaves_bookings_within_the_hold(make_booking):
    booking = make_booking(created_at=T)

    assert expire_pending_bookings(24, now=T + timedelta(hours=23)) == 0
    # created_at == cutoff is not strictly older than the hold
    assert expire_pending_bookings(24, now=T + timedelta(hours=24)) == 0

    booking.refresh_from_db()
    assert booking.status == BookingStatus.PENDING_PAYMENT


@pytest.mark.django_db
def test_expiry_is_idempotent(make_booking):
    make_booking(created_at=T)
    make_booking(check_in=date(2026, 2, 1), check_out=date(2026, 2, 3), created_at=T)
    now = T + timedelta(hours=25)

    assert expire_pending_bookings(24, now=now) == 2
    assert expire_pending_bookings(24, now=now) == 0


@pytest.mark.django_db
def test_expiry_only_touches_pending_bookings(make_booking):
    confirmed = make_booking(status=BookingStatus.CONFIRMED, created_at=T)
    completed = make_booking(status=BookingStatus.COMPLETED, created_at=T)

    assert expire_pending_bookings(24, now=T + timedelta(days=10)) == 0

    assert Booking.objects.get(pk=confirmed.pk).status == BookingStatus.CONFIRMED
    assert Booking.objects.get(pk=completed.pk).status == BookingStatus.COMPLETED


@pytest.mark.django_db
@pytest.mark.parametrize("hold_hours, expected", [(1, 1), (48, 0)])
def test_hold_hours_is_a_parameter(make_booking, hold_hours, expected):
    make_booking(created_at=T)
    assert expire_pending_bookings(hold_hours, now=T + timedelta(hours=25)) == expected


@pytest.mark.django_db
def test_completion_sweep_uses_local_check_out_date(make_booking):
    booking = make_booking(status=BookingStatus.CONFIRMED)

    # 2026-01-11T23:59+09:00
    assert complete_finished_bookings(now=datetime(2026, 1, 11, 14, 59, tzinfo=dt_timezone.utc)) == 0
    # 2026-01-12T00:00+09:00
    now = datetime(2026, 1, 11, 15, tzinfo=dt_timezone.utc)
    assert complete_finished_bookings(now=now) == 1
    assert complete_finished_bookings(now=now) == 0

    booking.refresh_from_db()
    assert booking.status == BookingStatus.COMPLETED
    assert booking.completed_at == now


@pytest.mark.django_db
def test_completion_sweep_ignores_pending_bookings(make_booking):
    make_booking(status=BookingStatus.PENDING_PAYMENT)
    assert complete_finished_bookings(now=datetime(2026, 2, 1, tzinfo=dt_timezone.utc)) == 0


@pytest.mark.django_db
def test_expire_task_reads_hold_from_policy(make_booking, settings):
    settings.BOOKING_POLICY = {"PENDING_HOLD_HOURS": 24}
    stale = make_booking(created_at=timezone.now() - timedelta(hours=30))
    fresh = make_booking(
        check_in=date(2026, 2, 1),
        check_out=date(2026, 2, 3),
        created_at=timezone.now() - timedelta(hours=1),
    )

    assert tasks.expire_pending_bookings() == {"expired": 1}

    assert Booking.objects.get(pk=stale.pk).status == BookingStatus.CANCELLED
    assert Booking.objects.get(pk=fresh.pk).status == BookingStatus.PENDING_PAYMENT


@pytest.mark.django_db
def test_complete_task_reports_count(make_booking):
    make_booking(status=BookingStatus.CONFIRMED, check_in=date(2020, 1, 10), check_out=date(2020, 1, 12))
    assert tasks.complete_finished_bookings.delay().get() == {"completed": 1}
