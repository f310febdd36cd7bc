"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a new booking awaiting payment
- ConfirmPaymentCommand: Confirm payment for a booking
- CancelBookingCommand: Cancel a booking (guest, host or system)
- MarkCompletedCommand: Complete a booking once check-out is reached

Every status change is a single conditional UPDATE keyed by booking id and
expected status. When the update matches no row the handler re-reads the
booking and tries once more; a second loss is reported as StaleWrite.

The module-level functions at the bottom are the public entry points; they
return Result objects instead of raising BookingError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore

from apps.bookings.domain.entities import BookingStatus, CancellationSource
from apps.bookings.domain.errors import (
    InvalidDateRange,
    InvalidInput,
    InvalidTransition,
    ListingUnavailable,
    NotFound,
    StaleWrite,
    returns_result,
)
from apps.bookings.domain.policies import cancellation_fee_applies, free_cancellation_deadline
from apps.bookings.models import Booking
from apps.bookings.services import bookings_overlapping, compare_and_set_status, lock_listing
from apps.listings.services import blocked_dates_between
from shared.domain.clock import ensure_utc, local_date, utc_now
from shared.domain.value_objects import SUPPORTED_CURRENCIES, DateRange, Money

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2


@dataclass(frozen=True)
class TransitionOutcome:
    """Result value of a status transition."""
    booking: Booking
    changed: bool
    fee_liable: bool = False


@dataclass(frozen=True)
class _Step:
    target: str
    fields: dict[str, Any]
    fee_liable: bool = False


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    listing_id: int
    guest_id: int
    check_in: date
    check_out: date
    price_per_night: Decimal | None = None
    now: datetime | None = None
    guests_adults: int = 1
    guests_children: int = 0
    guests_infants: int = 0
    guests_pets: int = 0


@dataclass
class ConfirmPaymentCommand:
    """Command to confirm a booking after successful payment"""
    booking_id: int
    now: datetime | None = None


@dataclass
class CancelBookingCommand:
    booking_id: int
    actor: str
    reason: str = ""
    now: datetime | None = None


@dataclass
class MarkCompletedCommand:
    booking_id: int
    now: datetime | None = None


def _resolve_now(now: datetime | None) -> datetime:
    return ensure_utc(now) if now is not None else utc_now()


def _get_booking(booking_id: int) -> Booking:
    try:
        return Booking.objects.get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFound(f"Booking {booking_id} not found")


def _run_transition(
    booking_id: int,
    now: datetime,
    plan: Callable[[Booking], _Step | None],
) -> TransitionOutcome:
    """
    Read the booking, let ``plan`` pick the move, apply it conditionally.

    ``plan`` returns None when the booking is already where the caller
    wants it (no-op success) and raises InvalidTransition when the current
    status does not permit the move.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        booking = _get_booking(booking_id)
        step = plan(booking)
        if step is None:
            return TransitionOutcome(booking=booking, changed=False)

        if compare_and_set_status(booking.pk, booking.status, step.target, now=now, **step.fields):
            logger.info(f"Booking {booking.booking_code} moved {booking.status} -> {step.target}")
            booking.refresh_from_db()
            return TransitionOutcome(booking=booking, changed=True, fee_liable=step.fee_liable)

        logger.warning(f"Booking {booking.booking_code} changed concurrently (attempt {attempt}/{MAX_ATTEMPTS})")

    raise StaleWrite(f"Booking {booking_id} was modified concurrently")


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    The listing row is locked for the duration of the transaction, so the
    overlap check and the insert are serialized per listing.
    """

    def handle(self, command: CreateBookingCommand) -> Booking:
        now = _resolve_now(command.now)
        logger.info(
            f"Creating booking for listing {command.listing_id}, "
            f"guest {command.guest_id}, dates {command.check_in} - {command.check_out}"
        )

        if command.check_out <= command.check_in:
            raise InvalidDateRange(
                f"Check-out ({command.check_out}) must be after check-in ({command.check_in})"
            )
        stay = DateRange(command.check_in, command.check_out)
        self._validate_guests(command)

        with transaction.atomic():
            listing = lock_listing(command.listing_id)
            if listing is None:
                raise NotFound(f"Listing {command.listing_id} not found")
            if not get_user_model().objects.filter(pk=command.guest_id).exists():
                raise NotFound(f"Guest {command.guest_id} not found")
            if not listing.accepts_bookings:
                raise ListingUnavailable(f"Listing {listing.pk} is not open for bookings")
            if listing.currency not in SUPPORTED_CURRENCIES:
                raise InvalidInput(f"Listing {listing.pk} is priced in unsupported currency {listing.currency}")
            if bookings_overlapping(listing.pk, stay.start_date, stay.end_date).exists():
                raise ListingUnavailable(f"Listing {listing.pk} is not available for dates {stay}")
            blocked = blocked_dates_between(listing.pk, stay.start_date, stay.end_date)
            if blocked:
                raise ListingUnavailable(f"Listing {listing.pk} is blocked on {blocked[0].isoformat()}")

            nightly = listing.base_price if command.price_per_night is None else command.price_per_night
            try:
                price_per_night = Money(nightly, listing.currency)
            except (ValueError, ArithmeticError) as exc:
                raise InvalidInput(f"Invalid nightly price {nightly!r}: {exc}")
            nights = len(stay)
            total = price_per_night * nights

            booking = Booking.objects.create(
                listing=listing,
                guest_id=command.guest_id,
                host_id=listing.host_id,
                check_in=stay.start_date,
                check_out=stay.end_date,
                nights=nights,
                price_per_night=price_per_night.amount,
                total_amount=total.amount,
                currency=total.currency,
                guests_adults=command.guests_adults,
                guests_children=command.guests_children,
                guests_infants=command.guests_infants,
                guests_pets=command.guests_pets,
                status=BookingStatus.PENDING_PAYMENT,
                free_cancellation_deadline=free_cancellation_deadline(
                    stay.start_date,
                    created_at=now,
                    days=listing.free_cancellation_days,
                ),
                created_at=now,
            )

        logger.info(f"Booking created: {booking.booking_code} (ID: {booking.pk}), total {total}")
        return booking

    @staticmethod
    def _validate_guests(command: CreateBookingCommand) -> None:
        if command.guests_adults < 1:
            raise InvalidInput("A booking needs at least one adult guest")
        others = (command.guests_children, command.guests_infants, command.guests_pets)
        if any(count < 0 for count in others):
            raise InvalidInput("Guest counts cannot be negative")


class ConfirmPaymentHandler:
    """Handler for confirming booking after payment"""

    def handle(self, command: ConfirmPaymentCommand) -> TransitionOutcome:
        now = _resolve_now(command.now)
        logger.info(f"Confirming payment for booking {command.booking_id}")

        def plan(booking: Booking) -> _Step | None:
            if booking.status == BookingStatus.CONFIRMED:
                return None
            if booking.status != BookingStatus.PENDING_PAYMENT:
                raise InvalidTransition(f"Cannot confirm booking {booking.booking_code} in status {booking.status}")

            lock_listing(booking.listing_id)
            conflict = bookings_overlapping(
                booking.listing_id,
                booking.check_in,
                booking.check_out,
                exclude_id=booking.pk,
            )
            if conflict.exists():
                raise ListingUnavailable(
                    f"Dates of booking {booking.booking_code} were taken by another confirmed booking"
                )
            return _Step(BookingStatus.CONFIRMED, {"payment_confirmed_at": now})

        with transaction.atomic():
            return _run_transition(command.booking_id, now, plan)


class CancelBookingHandler:
    """
    Handler for cancelling booking

    A confirmed booking can be cancelled until its check-out date; after the
    free-cancellation deadline the cancellation is flagged as fee-liable.
    """

    def handle(self, command: CancelBookingCommand) -> TransitionOutcome:
        now = _resolve_now(command.now)
        if command.actor not in CancellationSource.values:
            raise InvalidInput(f"Unknown cancellation actor: {command.actor!r}")
        actor = CancellationSource(command.actor)
        logger.info(f"Cancelling booking {command.booking_id} by {actor.value}, reason: {command.reason}")

        def plan(booking: Booking) -> _Step | None:
            if booking.status == BookingStatus.PENDING_PAYMENT:
                fee_liable = False
            elif booking.status == BookingStatus.CONFIRMED:
                if local_date(now) >= booking.check_out:
                    raise InvalidTransition(f"Stay of booking {booking.booking_code} has already ended")
                fee_liable = cancellation_fee_applies(booking, now)
            else:
                raise InvalidTransition(f"Cannot cancel booking {booking.booking_code} in status {booking.status}")

            return _Step(
                BookingStatus.CANCELLED,
                {
                    "cancelled_at": now,
                    "cancellation_source": actor.value,
                    "cancellation_reason": command.reason[:255],
                    "cancellation_fee_applies": fee_liable,
                },
                fee_liable=fee_liable,
            )

        with transaction.atomic():
            outcome = _run_transition(command.booking_id, now, plan)

        if outcome.fee_liable:
            logger.info(f"Booking {outcome.booking.booking_code} cancelled after the free-cancellation deadline")
        return outcome


class MarkCompletedHandler:
    """Handler for completing booking (check out)"""

    def handle(self, command: MarkCompletedCommand) -> TransitionOutcome:
        now = _resolve_now(command.now)

        def plan(booking: Booking) -> _Step | None:
            if booking.status == BookingStatus.COMPLETED:
                return None
            if booking.status != BookingStatus.CONFIRMED:
                raise InvalidTransition(f"Cannot complete booking {booking.booking_code} in status {booking.status}")
            if local_date(now) < booking.check_out:
                raise InvalidTransition(f"Booking {booking.booking_code} checks out on {booking.check_out}")
            return _Step(BookingStatus.COMPLETED, {"completed_at": now})

        with transaction.atomic():
            return _run_transition(command.booking_id, now, plan)


# ===== Entry points =====

@returns_result
def create_booking(
    listing_id,
    guest_id,
    check_in,
    check_out,
    price_per_night=None,
    *,
    now=None,
    guests_adults=1,
    guests_children=0,
    guests_infants=0,
    guests_pets=0,
):
    return CreateBookingHandler().handle(
        CreateBookingCommand(
            listing_id=listing_id,
            guest_id=guest_id,
            check_in=check_in,
            check_out=check_out,
            price_per_night=price_per_night,
            now=now,
            guests_adults=guests_adults,
            guests_children=guests_children,
            guests_infants=guests_infants,
            guests_pets=guests_pets,
        )
    )


@returns_result
def confirm_payment(booking_id, *, now=None):
    return ConfirmPaymentHandler().handle(ConfirmPaymentCommand(booking_id, now))


@returns_result
def cancel_booking(booking_id, actor, *, reason="", now=None):
    return CancelBookingHandler().handle(CancelBookingCommand(booking_id, actor, reason, now))


@returns_result
def mark_completed(booking_id, *, now=None):
    return MarkCompletedHandler().handle(MarkCompletedCommand(booking_id, now))
