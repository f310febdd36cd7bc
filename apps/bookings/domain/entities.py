"""
Booking Domain Entities

- BookingStatus: FSM states for the booking lifecycle
- CancellationSource: who initiated a cancellation
- ALLOWED_TRANSITIONS: the directed graph every status change must follow
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class BookingStatus(models.TextChoices):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING_PAYMENT -> CONFIRMED (payment confirmed by the processor)
    - PENDING_PAYMENT -> CANCELLED (guest/host cancel, or hold expired)
    - CONFIRMED -> CANCELLED (guest or host, before check-out)
    - CONFIRMED -> COMPLETED (check-out date reached)
    """
    PENDING_PAYMENT = "PENDING_PAYMENT", _("Pending payment")
    CONFIRMED = "CONFIRMED", _("Confirmed")
    CANCELLED = "CANCELLED", _("Cancelled")
    COMPLETED = "COMPLETED", _("Completed")


class CancellationSource(models.TextChoices):
    GUEST = "GUEST", _("Guest")
    HOST = "HOST", _("Host")
    SYSTEM = "SYSTEM", _("System")


ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    BookingStatus.PENDING_PAYMENT: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

TERMINAL_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})

# Statuses whose stay window is exclusive: no other booking may be confirmed over it.
OCCUPYING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.COMPLETED)

# Statuses shown on the host calendar.
CALENDAR_STATUSES = (BookingStatus.PENDING_PAYMENT, BookingStatus.CONFIRMED, BookingStatus.COMPLETED)

# Statuses that produce a settlement row.
SETTLEABLE_STATUSES = OCCUPYING_STATUSES


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())
