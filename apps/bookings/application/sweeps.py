"""
Time-triggered booking sweeps.

Both sweeps are a single set-oriented conditional UPDATE: rows that a
concurrent request already moved simply stop matching the filter, and a
sweep that is interrupted leaves no partial state behind. Running a sweep
twice in a row changes nothing the second time.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from apps.bookings.domain.entities import BookingStatus, CancellationSource
from apps.bookings.models import Booking
from shared.domain.clock import ensure_utc, local_date, utc_now

logger = logging.getLogger(__name__)

EXPIRY_REASON = "Payment was not completed within the hold period"


def expire_pending_bookings(hold_hours: int | float, *, now: datetime | None = None) -> int:
    """
    Cancel every PENDING_PAYMENT booking created more than ``hold_hours`` ago.

    Returns the number of bookings cancelled.
    """
    now = ensure_utc(now) if now is not None else utc_now()
    cutoff = now - timedelta(hours=hold_hours)

    expired = Booking.objects.filter(
        status=BookingStatus.PENDING_PAYMENT,
        created_at__lt=cutoff,
    ).update(
        status=BookingStatus.CANCELLED,
        cancelled_at=now,
        cancellation_source=CancellationSource.SYSTEM,
        cancellation_reason=EXPIRY_REASON,
        updated_at=now,
    )

    if expired:
        logger.info(f"Expired {expired} pending bookings created before {cutoff.isoformat()}")
    return expired


def complete_finished_bookings(*, now: datetime | None = None) -> int:
    """Move CONFIRMED bookings whose check-out date has been reached to COMPLETED."""
    now = ensure_utc(now) if now is not None else utc_now()
    today = local_date(now)

    completed = Booking.objects.filter(
        status=BookingStatus.CONFIRMED,
        check_out__lte=today,
    ).update(
        status=BookingStatus.COMPLETED,
        completed_at=now,
        updated_at=now,
    )

    if completed:
        logger.info(f"Completed {completed} bookings with check-out on or before {today}")
    return completed
