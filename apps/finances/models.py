"""Financial domain models for Staybook."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Payment(models.Model):
    """Payment attempt for a booking, as reported by the payment processor."""

    class Status(models.TextChoices):
        INITIATED = "INITIATED", _("Initiated")
        PAID = "PAID", _("Paid")
        FAILED = "FAILED", _("Failed")
        CANCELLED = "CANCELLED", _("Cancelled")

    booking = models.OneToOneField(
        "bookings.Booking",
        on_delete=models.PROTECT,
        related_name="payment",
    )
    provider = models.CharField(max_length=50, blank=True, help_text=_("Payment processor name"))
    provider_payment_id = models.CharField(max_length=100, unique=True)
    pg_tid = models.CharField(max_length=100, blank=True, help_text=_("Processor transaction id"))
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="KRW")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.INITIATED)
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Payment")
        verbose_name_plural = _("Payments")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Payment {self.provider_payment_id} for booking {self.booking_id} ({self.status})"

    def mark_paid(self, pg_tid: str = "", paid_at=None) -> None:  # type: ignore
        self.status = self.Status.PAID
        if pg_tid:
            self.pg_tid = pg_tid
        if self.paid_at is None:
            self.paid_at = paid_at or timezone.now()
        self.save(update_fields=["status", "pg_tid", "paid_at", "updated_at"])

    def mark_unsuccessful(self, status: str, pg_tid: str = "") -> None:
        self.status = status
        if pg_tid:
            self.pg_tid = pg_tid
        self.save(update_fields=["status", "pg_tid", "updated_at"])


class PaymentTransaction(models.Model):
    """History of processor notifications (webhooks, callbacks) for a payment."""

    payment = models.ForeignKey(
        Payment,
        on_delete=models.CASCADE,
        related_name="transactions",
    )
    event = models.CharField(max_length=50)
    payload = models.JSONField(default=dict)
    status = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        verbose_name = _("Payment transaction")
        verbose_name_plural = _("Payment transactions")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.event} for payment {self.payment_id}"


class Payout(models.Model):
    """
    Money transferred to the host for one booking.

    Written by the payout operator (e.g. through the admin); the existence of
    a row is what marks the booking's settlement as PAID.
    """

    booking = models.OneToOneField(
        "bookings.Booking",
        on_delete=models.PROTECT,
        related_name="payout",
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, default="KRW")
    reference = models.CharField(max_length=100, blank=True, help_text=_("Bank transfer reference"))
    paid_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Payout")
        verbose_name_plural = _("Payouts")
        ordering = ["-paid_at"]

    def __str__(self) -> str:
        return f"Payout for booking {self.booking_id}: {self.amount} {self.currency}"
