"""Persistence services for booking workflows: overlap queries and conditional writes."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.listings.models import Listing

from .domain.entities import OCCUPYING_STATUSES
from .models import Booking

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def lock_listing(listing_id: int) -> Listing | None:
    """
    Load a listing, holding its row lock for the rest of the transaction.

    Serializes create/confirm for the same listing; other listings are
    unaffected. Returns None when the listing does not exist.
    """
    queryset = _lock_queryset_if_possible(Listing.objects.filter(pk=listing_id))
    return queryset.first()


def bookings_overlapping(
    listing_id: int,
    start: date,
    end: date,
    statuses: Iterable[str] = OCCUPYING_STATUSES,
    *,
    exclude_id: int | None = None,
):
    """
    Bookings of a listing whose stay window intersects [start, end).

    [a, b) and [c, d) overlap iff a < d and c < b; a stay checking out on
    the day another checks in does not overlap it.
    """
    queryset = Booking.objects.filter(
        listing_id=listing_id,
        status__in=list(statuses),
    ).filter(Q(check_in__lt=end) & Q(check_out__gt=start))

    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    return queryset


def compare_and_set_status(
    booking_id: int,
    expected: str,
    target: str,
    *,
    now: datetime,
    **fields: Any,
) -> bool:
    """
    Move a booking from ``expected`` to ``target`` in one conditional UPDATE.

    Returns False when the row is no longer in ``expected`` (another writer
    won); the caller decides whether to re-read and retry.
    """
    updated = Booking.objects.filter(pk=booking_id, status=expected).update(
        status=target,
        updated_at=now,
        **fields,
    )
    if not updated:
        logger.warning(f"Conditional update lost for booking {booking_id}: expected {expected}, wanted {target}")
    return bool(updated)
