"""Booking models for Staybook."""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.listings.models import Currency
from shared.domain.value_objects import DateRange

from .domain.entities import BookingStatus, CancellationSource


class Booking(models.Model):
    """
    A reservation of one listing for a stay window [check_in, check_out).

    Status and the lifecycle timestamps are only written through the
    conditional updates in ``apps.bookings.services``; money fields are
    fixed at creation.
    """

    Status = BookingStatus
    CancellationSource = CancellationSource

    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="hosted_bookings",
    )
    check_in = models.DateField()
    check_out = models.DateField()
    nights = models.PositiveSmallIntegerField(default=1)
    price_per_night = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Nightly price snapshot taken when the booking was created."),
    )
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.KRW)
    guests_adults = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    guests_children = models.PositiveSmallIntegerField(default=0)
    guests_infants = models.PositiveSmallIntegerField(default=0)
    guests_pets = models.PositiveSmallIntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.PENDING_PAYMENT,
    )
    free_cancellation_deadline = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Free-cancellation deadline computed at creation time."),
    )
    cancellation_source = models.CharField(
        max_length=10,
        choices=CancellationSource.choices,
        blank=True,
    )
    cancellation_reason = models.CharField(max_length=255, blank=True)
    cancellation_fee_applies = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    payment_confirmed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["listing", "check_in", "check_out"], name="booking_listing_dates_idx"),
            models.Index(fields=["status", "created_at"], name="booking_status_created_idx"),
            models.Index(fields=["status", "check_out"], name="booking_status_checkout_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_code} for listing {self.listing_id}"

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.booking_code:
            self.booking_code = self.generate_booking_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    @property
    def stay(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @property
    def is_terminal(self) -> bool:
        return self.status in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)
