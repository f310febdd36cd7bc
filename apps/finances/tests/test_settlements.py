"""Settlement readiness engine tests."""

from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.bookings.domain.entities import BookingStatus
from apps.bookings.models import Booking
from apps.finances.fees import fixed_fee, no_fee, percentage_fee
from apps.finances.models import Payment, Payout
from apps.finances.services import (
    SettlementStatus,
    compute_settlement_rows,
    settlement_fee,
    settlement_ready_at,
    summarize_host_settlements,
)
from apps.listings.models import Listing


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.fixture
def stay(make_booking):
    """Confirmed two-night stay checking out on 2026-02-05 (total 200000 KRW)."""
    return make_booking(date(2026, 2, 3), date(2026, 2, 5), status=BookingStatus.CONFIRMED)


def test_ready_at_is_local_midnight_of_check_out_plus_hold():
    # 2026-02-07T00:00+09:00
    assert settlement_ready_at(date(2026, 2, 5), 48) == utc(2026, 2, 6, 15)


@pytest.mark.django_db
def test_settlement_is_pending_before_ready_at(stay):
    [row] = compute_settlement_rows(utc(2026, 2, 6))

    assert row.booking_id == stay.id
    assert row.ready_at == utc(2026, 2, 6, 15)
    assert row.status == SettlementStatus.PENDING


@pytest.mark.django_db
def test_settlement_is_ready_after_ready_at(stay):
    [row] = compute_settlement_rows(utc(2026, 2, 8))
    assert row.status == SettlementStatus.READY


@pytest.mark.django_db
def test_settlement_is_ready_at_the_exact_instant(stay):
    [row] = compute_settlement_rows(utc(2026, 2, 6, 15))
    assert row.status == SettlementStatus.READY


@pytest.mark.django_db
def test_settlement_is_paid_once_a_payout_exists(stay):
    Payout.objects.create(booking=stay, amount=Decimal("200000"), reference="TRF-1", paid_at=utc(2026, 2, 9))

    [row] = compute_settlement_rows(utc(2026, 2, 6))

    assert row.status == SettlementStatus.PAID
    assert row.paid_at == utc(2026, 2, 9)


@pytest.mark.django_db
def test_only_confirmed_and_completed_bookings_settle(make_booking):
    confirmed = make_booking(date(2026, 2, 1), date(2026, 2, 3), status=BookingStatus.CONFIRMED)
    completed = make_booking(date(2026, 1, 1), date(2026, 1, 3), status=BookingStatus.COMPLETED)
    make_booking(date(2026, 3, 1), date(2026, 3, 3), status=BookingStatus.PENDING_PAYMENT)
    make_booking(date(2026, 3, 5), date(2026, 3, 7), status=BookingStatus.CANCELLED)

    rows = compute_settlement_rows(utc(2026, 4, 1))

    assert [row.booking_id for row in rows] == [completed.id, confirmed.id]


@pytest.mark.django_db
def test_rows_are_ordered_by_ready_at_then_booking_id(make_booking, other_guest):
    late = make_booking(date(2026, 3, 1), date(2026, 3, 4), status=BookingStatus.CONFIRMED)
    tie_a = make_booking(date(2026, 2, 1), date(2026, 2, 3), status=BookingStatus.CONFIRMED)
    tie_b = make_booking(date(2026, 2, 2), date(2026, 2, 3), status=BookingStatus.CONFIRMED, guest=other_guest)

    rows = compute_settlement_rows(utc(2026, 4, 1))

    assert [row.booking_id for row in rows] == [tie_a.id, tie_b.id, late.id]


@pytest.mark.django_db
@pytest.mark.parametrize(
    "fee_policy, fee, payable",
    [
        (no_fee, Decimal("0"), Decimal("200000")),
        (percentage_fee(10), Decimal("20000"), Decimal("180000")),
        (fixed_fee(5000), Decimal("5000"), Decimal("195000")),
        (fixed_fee(999999999), Decimal("200000"), Decimal("0")),
    ],
)
def test_fee_policy_is_injected(stay, fee_policy, fee, payable):
    [row] = compute_settlement_rows(utc(2026, 2, 8), fee_policy=fee_policy)

    assert row.total_amount == Decimal("200000")
    assert row.fee == fee
    assert row.amount_payable == payable


@pytest.mark.django_db
def test_default_fee_policy_reads_configuration(stay, settings):
    settings.BOOKING_POLICY = {"PLATFORM_FEE_PERCENT": "3.5", "PLATFORM_FEE_FIXED": "1000"}

    [row] = compute_settlement_rows(utc(2026, 2, 8))

    assert row.fee == Decimal("8000")
    assert row.amount_payable == Decimal("192000")


@pytest.mark.django_db
def test_settlement_hold_is_configurable(stay, settings):
    settings.BOOKING_POLICY = {"SETTLEMENT_HOLD_HOURS": 0}

    [row] = compute_settlement_rows(utc(2026, 2, 5))

    assert row.ready_at == utc(2026, 2, 4, 15)
    assert row.status == SettlementStatus.READY


@pytest.mark.django_db
def test_rows_carry_payment_metadata(stay):
    Payment.objects.create(
        booking=stay,
        provider="toss",
        provider_payment_id="pay_1",
        pg_tid="T-0001",
        amount=Decimal("200000"),
        status=Payment.Status.PAID,
    )

    [row] = compute_settlement_rows(utc(2026, 2, 8))

    assert row.payment_status == Payment.Status.PAID
    assert row.pg_tid == "T-0001"
    assert row.listing_title == stay.listing.title


@pytest.mark.django_db
def test_rows_without_payment_have_empty_metadata(stay):
    [row] = compute_settlement_rows(utc(2026, 2, 8))
    assert row.payment_status is None
    assert row.pg_tid == ""


@pytest.mark.django_db
def test_computation_is_a_pure_read(stay):
    before = stay.updated_at

    first = compute_settlement_rows(utc(2026, 2, 8))
    second = compute_settlement_rows(utc(2026, 2, 8))

    assert first == second
    stay.refresh_from_db()
    assert stay.updated_at == before
    assert stay.status == BookingStatus.CONFIRMED


@pytest.mark.django_db
def test_rows_can_be_filtered_by_host(stay, guest):
    Listing.objects.create(host=guest, title="Guest's studio", status=Listing.Status.APPROVED)

    assert compute_settlement_rows(utc(2026, 2, 8), host_id=guest.id) == []
    assert len(compute_settlement_rows(utc(2026, 2, 8), host_id=stay.host_id)) == 1


@pytest.mark.django_db
def test_host_summary_totals_by_status(make_booking, host):
    make_booking(date(2026, 2, 3), date(2026, 2, 5), status=BookingStatus.CONFIRMED)
    make_booking(date(2026, 3, 3), date(2026, 3, 6), status=BookingStatus.CONFIRMED)
    paid = make_booking(date(2026, 1, 3), date(2026, 1, 4), status=BookingStatus.COMPLETED)
    Payout.objects.create(booking=paid, amount=Decimal("100000"))

    summary = summarize_host_settlements(host.id, utc(2026, 2, 10))

    assert summary == {
        "KRW": {
            "PENDING": Decimal("300000"),
            "READY": Decimal("200000"),
            "PAID": Decimal("100000"),
        }
    }


@pytest.mark.django_db
def test_host_summary_is_empty_without_bookings(host):
    assert summarize_host_settlements(host.id, utc(2026, 2, 10)) == {}


@pytest.mark.django_db
def test_negative_fee_is_clamped_to_zero(stay, make_booking):
    make_booking(date(2026, 3, 1), date(2026, 3, 3), status=BookingStatus.CONFIRMED)

    def refund_everyone(amount, currency):
        return Decimal("-1000")

    rows = compute_settlement_rows(utc(2026, 4, 1), fee_policy=refund_everyone)

    assert len(rows) == 2
    assert all(row.fee == Decimal("0") for row in rows)
    assert all(row.amount_payable == row.total_amount for row in rows)


def test_settlement_fee_clamps_to_the_total():
    assert settlement_fee(fixed_fee(500), Decimal("300"), "USD") == Decimal("300")
    assert settlement_fee(fixed_fee(-5), Decimal("300"), "USD") == Decimal("0")
    assert settlement_fee(fixed_fee(5), Decimal("300"), "USD") == Decimal("5")


@pytest.mark.django_db
def test_unsupported_currency_row_does_not_abort_the_scan(stay, make_booking):
    odd = make_booking(date(2026, 3, 1), date(2026, 3, 3), status=BookingStatus.CONFIRMED)
    Booking.objects.filter(pk=odd.pk).update(currency="GBP")

    rows = compute_settlement_rows(utc(2026, 4, 1), fee_policy=percentage_fee(10))

    assert [row.booking_id for row in rows] == [stay.id, odd.id]
    assert rows[1].currency == "GBP"
    assert rows[1].fee == Decimal("20000.00")
    assert rows[1].amount_payable == Decimal("180000.00")
