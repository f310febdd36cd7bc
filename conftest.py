"""Shared pytest fixtures: users, listings and booking factories."""

from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from apps.bookings.domain.entities import BookingStatus
from apps.bookings.domain.policies import free_cancellation_deadline
from apps.bookings.models import Booking
from apps.listings.models import Listing


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.fixture
def host(db):
    return get_user_model().objects.create_user(username="host", password="HostPass123", email="host@example.com")


@pytest.fixture
def guest(db):
    return get_user_model().objects.create_user(username="guest", password="GuestPass123", email="guest@example.com")


@pytest.fixture
def other_guest(db):
    return get_user_model().objects.create_user(username="guest2", password="GuestPass123", email="guest2@example.com")


@pytest.fixture
def listing(host):
    return Listing.objects.create(
        host=host,
        title="Hanok stay in Bukchon",
        status=Listing.Status.APPROVED,
        base_price=Decimal("100000"),
        currency="KRW",
    )


@pytest.fixture
def make_booking(listing, guest):
    """Insert a booking row directly, bypassing the state machine."""

    def factory(
        check_in: date = date(2026, 1, 10),
        check_out: date = date(2026, 1, 12),
        status: str = BookingStatus.PENDING_PAYMENT,
        created_at: datetime = utc(2026, 1, 1),
        **extra,
    ) -> Booking:
        nights = (check_out - check_in).days
        fields = {
            "listing": listing,
            "guest": guest,
            "host": listing.host,
            "check_in": check_in,
            "check_out": check_out,
            "nights": nights,
            "price_per_night": listing.base_price,
            "total_amount": listing.base_price * nights,
            "currency": listing.currency,
            "status": status,
            "created_at": created_at,
            "free_cancellation_deadline": free_cancellation_deadline(check_in, created_at=created_at),
        }
        fields.update(extra)
        return Booking.objects.create(**fields)

    return factory
