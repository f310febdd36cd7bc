"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from shared.conf import policy_setting

from .application import sweeps

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled by CELERY_BEAT_SCHEDULE in config/settings/base.py)
# ============================================================================

@shared_task(name="bookings.expire_pending_bookings")
def expire_pending_bookings(hold_hours: int | None = None) -> dict[str, int]:
    """
    Cancel bookings whose payment hold has run out.

    Runs every 5 minutes. A failed run changes nothing; the next run picks
    up the same rows.

    Returns:
        dict: {"expired": number of bookings cancelled}
    """
    if hold_hours is None:
        hold_hours = int(policy_setting("PENDING_HOLD_HOURS"))

    expired_count = sweeps.expire_pending_bookings(hold_hours)
    logger.info(f"Expiry sweep finished: {expired_count} bookings cancelled (hold {hold_hours}h)")
    return {"expired": expired_count}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Mark confirmed bookings as completed once their check-out date is reached.

    Runs every hour.

    Returns:
        dict: {"completed": number of bookings completed}
    """
    completed_count = sweeps.complete_finished_bookings()
    logger.info(f"Completion sweep finished: {completed_count} bookings completed")
    return {"completed": completed_count}
