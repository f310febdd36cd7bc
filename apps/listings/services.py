"""Host-facing listing services: flow status and blocked dates."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Iterable

from apps.bookings.domain.errors import InvalidDateRange, NotFound, returns_result

from .models import Listing, ListingBlockedDate

logger = logging.getLogger(__name__)


class HostFlowStatus(str, Enum):
    """Where a host stands in the listing flow, derived from their listings."""
    NONE = "NONE"
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"


# Highest first: any listing in a higher state wins.
_PRECEDENCE = (
    (Listing.Status.APPROVED, HostFlowStatus.APPROVED),
    (Listing.Status.PENDING, HostFlowStatus.PENDING),
    (Listing.Status.DRAFT, HostFlowStatus.DRAFT),
)


def derive_host_flow_status(statuses: Iterable[str]) -> HostFlowStatus:
    """
    Collapse a host's listing statuses into one HostFlowStatus.

    Pure and idempotent. Unknown or rejected statuses count as NONE.
    """
    seen = {str(s).upper() for s in statuses if s}
    for listing_status, flow_status in _PRECEDENCE:
        if listing_status.value in seen:
            return flow_status
    return HostFlowStatus.NONE


def get_host_flow_status(host_id: int) -> HostFlowStatus:
    statuses = Listing.objects.filter(host_id=host_id).values_list("status", flat=True)
    return derive_host_flow_status(statuses)


# ===== Blocked dates =====

def blocked_dates_between(listing_id: int, start: date, end: date) -> list[date]:
    """Blocked nights of a listing in [start, end), ascending."""
    return list(
        ListingBlockedDate.objects.filter(listing_id=listing_id, date__gte=start, date__lt=end)
        .order_by("date")
        .values_list("date", flat=True)
    )


def _host_listing(listing_id: int, host_id: int) -> Listing:
    listing = Listing.objects.filter(pk=listing_id, host_id=host_id).first()
    if listing is None:
        raise NotFound(f"Listing {listing_id} not found for host {host_id}")
    return listing


@returns_result
def block_date(listing_id: int, host_id: int, day: date) -> bool:
    """
    Take one night off sale. Returns True when the date was newly blocked.

    Blocking does not touch existing bookings; it only stops new ones.
    """
    listing = _host_listing(listing_id, host_id)
    _, created = ListingBlockedDate.objects.get_or_create(listing=listing, date=day)
    if created:
        logger.info(f"Listing {listing.pk} blocked on {day.isoformat()}")
    return created


@returns_result
def unblock_date(listing_id: int, host_id: int, day: date) -> bool:
    """Put a night back on sale. Returns True when a block was removed."""
    listing = _host_listing(listing_id, host_id)
    deleted, _ = ListingBlockedDate.objects.filter(listing=listing, date=day).delete()
    if deleted:
        logger.info(f"Listing {listing.pk} unblocked on {day.isoformat()}")
    return bool(deleted)


@returns_result
def list_blocked_dates(listing_id: int, host_id: int, start: date, end: date) -> list[date]:
    if end <= start:
        raise InvalidDateRange(f"End ({end}) must be after start ({start})")
    listing = _host_listing(listing_id, host_id)
    return blocked_dates_between(listing.pk, start, end)
