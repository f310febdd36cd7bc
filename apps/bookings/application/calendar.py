"""
Host calendar aggregator.

Collects the bookings of one listing whose stay window intersects a
calendar month, plus the nights the host blocked, for the host's month view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from apps.bookings.domain.entities import CALENDAR_STATUSES
from apps.bookings.domain.errors import InvalidDateRange, NotFound, returns_result
from apps.bookings.models import Booking
from apps.bookings.services import bookings_overlapping
from apps.listings.models import Listing
from apps.listings.services import blocked_dates_between
from shared.domain.clock import month_bounds
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


@dataclass
class HostCalendar:
    listing: Listing
    year: int
    month: int
    bookings: list[Booking] = field(default_factory=list)
    blocked_dates: list[date] = field(default_factory=list)

    @property
    def occupied_dates(self) -> list[date]:
        """Nights inside this month taken by a listed booking or blocked by the host."""
        start, end = month_bounds(self.year, self.month)
        month = DateRange(start, end)
        nights = {
            day
            for booking in self.bookings
            for day in booking.stay.days()
            if month.contains(day)
        }
        nights.update(self.blocked_dates)
        return sorted(nights)


@returns_result
def get_host_calendar(listing_id: int, year: int, month: int, *, host_id: int | None = None) -> HostCalendar:
    try:
        start, end = month_bounds(year, month)
    except ValueError as exc:
        raise InvalidDateRange(str(exc))

    listings = Listing.objects.filter(pk=listing_id)
    if host_id is not None:
        listings = listings.filter(host_id=host_id)
    listing = listings.first()
    if listing is None:
        raise NotFound(f"Listing {listing_id} not found")

    bookings = list(
        bookings_overlapping(listing.pk, start, end, CALENDAR_STATUSES)
        .select_related("guest")
        .order_by("check_in", "id")
    )
    blocked = blocked_dates_between(listing.pk, start, end)
    logger.debug(
        f"Calendar {year}-{month:02d} for listing {listing.pk}: {len(bookings)} bookings, {len(blocked)} blocked"
    )
    return HostCalendar(listing=listing, year=year, month=month, bookings=bookings, blocked_dates=blocked)
