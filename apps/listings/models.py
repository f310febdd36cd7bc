"""Listing models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Currency(models.TextChoices):
    KRW = "KRW", _("Korean won")
    USD = "USD", _("US dollar")
    EUR = "EUR", _("Euro")
    JPY = "JPY", _("Japanese yen")


class Listing(models.Model):
    """Lodging offered by a host for nightly stays."""

    class Status(models.TextChoices):
        DRAFT = "DRAFT", _("Draft")
        PENDING = "PENDING", _("Pending review")
        APPROVED = "APPROVED", _("Approved")
        REJECTED = "REJECTED", _("Rejected")

    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
    )
    title = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Nightly price used when a booking does not supply one."),
    )
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.KRW)
    free_cancellation_days = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text=_("Overrides the platform free-cancellation window (days before check-in)."),
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Listing")
        verbose_name_plural = _("Listings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["host", "status"], name="listing_host_status_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def accepts_bookings(self) -> bool:
        return self.status == self.Status.APPROVED


class ListingBlockedDate(models.Model):
    """A night the host has taken off sale; no booking may cover it."""

    listing = models.ForeignKey(
        Listing,
        on_delete=models.CASCADE,
        related_name="blocked_dates",
    )
    date = models.DateField()
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        verbose_name = _("Blocked date")
        verbose_name_plural = _("Blocked dates")
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(fields=["listing", "date"], name="listing_blocked_date_unique"),
        ]

    def __str__(self) -> str:
        return f"{self.listing_id} blocked on {self.date.isoformat()}"
