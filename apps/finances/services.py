"""
Settlement and payment services.

Settlement rows are a projection over CONFIRMED and COMPLETED bookings:
they are recomputed on every call and never stored. The only externally
authored input is the Payout row that marks a settlement as PAID.

Timing: a stay becomes payable SETTLEMENT_HOLD_HOURS after 00:00 local
time on its check-out date.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum

from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    ConfirmPaymentCommand,
    ConfirmPaymentHandler,
    TransitionOutcome,
)
from apps.bookings.domain.entities import SETTLEABLE_STATUSES, BookingStatus, CancellationSource
from apps.bookings.domain.errors import InvalidInput, NotFound, returns_result
from apps.bookings.models import Booking
from shared.conf import policy_setting
from shared.domain.clock import ensure_utc, local_midnight_utc, utc_now

from .fees import FeePolicy, load_fee_policy
from .models import Payment, PaymentTransaction

logger = logging.getLogger(__name__)


class SettlementStatus(str, Enum):
    PENDING = "PENDING"
    READY = "READY"
    PAID = "PAID"


@dataclass(frozen=True)
class SettlementRow:
    booking_id: int
    booking_code: str
    host_id: int
    listing_id: int
    listing_title: str
    guest_id: int
    check_in: date
    check_out: date
    nights: int
    booking_status: str
    total_amount: Decimal
    fee: Decimal
    amount_payable: Decimal
    currency: str
    ready_at: datetime
    status: SettlementStatus
    payment_status: str | None = None
    pg_tid: str = ""
    paid_at: datetime | None = None


def settlement_ready_at(check_out: date, hold_hours: int | None = None) -> datetime:
    """UTC instant at which a stay checking out on ``check_out`` becomes payable."""
    if hold_hours is None:
        hold_hours = int(policy_setting("SETTLEMENT_HOLD_HOURS"))
    return local_midnight_utc(check_out) + timedelta(hours=hold_hours)


def settlement_fee(fee_policy: FeePolicy, total: Decimal, currency: str, *, booking_code: str = "") -> Decimal:
    """
    Apply ``fee_policy`` and clamp the result to [0, total].

    A policy returning a negative fee or more than the total is logged and
    clamped so one bad row never aborts the scan.
    """
    fee = Decimal(fee_policy(total, currency))
    clamped = min(max(fee, Decimal("0")), total)
    if clamped != fee:
        logger.warning(f"Fee {fee} for booking {booking_code} outside [0, {total}] {currency}; using {clamped}")
    return clamped


def settlement_status(ready_at: datetime, as_of: datetime, paid: bool) -> SettlementStatus:
    if paid:
        return SettlementStatus.PAID
    if as_of >= ready_at:
        return SettlementStatus.READY
    return SettlementStatus.PENDING


def compute_settlement_rows(
    as_of: datetime | None = None,
    *,
    fee_policy: FeePolicy | None = None,
    host_id: int | None = None,
    hold_hours: int | None = None,
) -> list[SettlementRow]:
    """
    Build settlement rows for every CONFIRMED or COMPLETED booking.

    Rows are ordered by ready_at, then booking id. Pure read: nothing is
    written, so repeated calls with the same ``as_of`` return the same rows.
    """
    as_of = ensure_utc(as_of) if as_of is not None else utc_now()
    fee_policy = fee_policy or load_fee_policy()

    bookings = Booking.objects.filter(status__in=SETTLEABLE_STATUSES).select_related(
        "listing", "payment", "payout"
    )
    if host_id is not None:
        bookings = bookings.filter(host_id=host_id)

    rows = []
    for booking in bookings:
        total = booking.total_amount
        fee = settlement_fee(fee_policy, total, booking.currency, booking_code=booking.booking_code)
        payment = getattr(booking, "payment", None)
        payout = getattr(booking, "payout", None)
        ready_at = settlement_ready_at(booking.check_out, hold_hours)

        rows.append(
            SettlementRow(
                booking_id=booking.pk,
                booking_code=booking.booking_code,
                host_id=booking.host_id,
                listing_id=booking.listing_id,
                listing_title=booking.listing.title,
                guest_id=booking.guest_id,
                check_in=booking.check_in,
                check_out=booking.check_out,
                nights=booking.nights,
                booking_status=booking.status,
                total_amount=total,
                fee=fee,
                amount_payable=total - fee,
                currency=booking.currency,
                ready_at=ready_at,
                status=settlement_status(ready_at, as_of, paid=payout is not None),
                payment_status=payment.status if payment else None,
                pg_tid=payment.pg_tid if payment else "",
                paid_at=payout.paid_at if payout else None,
            )
        )

    rows.sort(key=lambda row: (row.ready_at, row.booking_id))
    logger.debug(f"Computed {len(rows)} settlement rows as of {as_of.isoformat()}")
    return rows


def summarize_host_settlements(
    host_id: int,
    as_of: datetime | None = None,
    *,
    fee_policy: FeePolicy | None = None,
) -> dict[str, dict[str, Decimal]]:
    """
    Payable totals for one host, per currency and settlement status.

    Example: {"KRW": {"PENDING": Decimal("300000"), "READY": Decimal("0"), "PAID": Decimal("0")}}
    """
    totals: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {status.value: Decimal("0") for status in SettlementStatus}
    )
    for row in compute_settlement_rows(as_of, fee_policy=fee_policy, host_id=host_id):
        totals[row.currency][row.status.value] += row.amount_payable
    return dict(totals)


# ===== Payment result sync =====

UNSUCCESSFUL_PAYMENT_STATUSES = (Payment.Status.FAILED, Payment.Status.CANCELLED)
RESULT_STATUSES = (Payment.Status.PAID, *UNSUCCESSFUL_PAYMENT_STATUSES)


@returns_result
def record_payment_result(
    provider_payment_id: str,
    status: str,
    *,
    pg_tid: str = "",
    now: datetime | None = None,
) -> TransitionOutcome:
    """
    Apply the processor's verdict on a payment to its booking.

    PAID confirms the booking (a repeated PAID notification is a no-op).
    FAILED or CANCELLED cancels the booking on behalf of the system while it
    is still awaiting payment.
    """
    now = ensure_utc(now) if now is not None else utc_now()
    verdict = str(status).upper()
    if verdict not in RESULT_STATUSES:
        raise InvalidInput(f"A payment result must be PAID, FAILED or CANCELLED, got {status!r}")
    status = Payment.Status(verdict)

    try:
        payment = Payment.objects.select_related("booking").get(provider_payment_id=provider_payment_id)
    except Payment.DoesNotExist:
        raise NotFound(f"Payment {provider_payment_id} not found")

    PaymentTransaction.objects.create(
        payment=payment,
        event="payment_result",
        payload={"status": status.value, "pg_tid": pg_tid},
        status=status.value,
        created_at=now,
    )
    logger.info(f"Payment {provider_payment_id} reported {status.value} for booking {payment.booking_id}")

    if status == Payment.Status.PAID:
        payment.mark_paid(pg_tid=pg_tid, paid_at=now)
        return ConfirmPaymentHandler().handle(ConfirmPaymentCommand(payment.booking_id, now))

    payment.mark_unsuccessful(status, pg_tid=pg_tid)
    booking = payment.booking
    if booking.status != BookingStatus.PENDING_PAYMENT:
        logger.info(f"Booking {booking.booking_code} is {booking.status}; {status.value} payment ignored")
        return TransitionOutcome(booking=booking, changed=False)

    return CancelBookingHandler().handle(
        CancelBookingCommand(
            payment.booking_id,
            CancellationSource.SYSTEM,
            reason=f"Payment {status.value.lower()}",
            now=now,
        )
    )
