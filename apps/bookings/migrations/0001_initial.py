from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("listings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_code", models.CharField(editable=False, max_length=12, unique=True)),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("nights", models.PositiveSmallIntegerField(default=1)),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Nightly price snapshot taken when the booking was created.",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "currency",
                    models.CharField(
                        choices=[("KRW", "Korean won"), ("USD", "US dollar"), ("EUR", "Euro"), ("JPY", "Japanese yen")],
                        default="KRW",
                        max_length=3,
                    ),
                ),
                (
                    "guests_adults",
                    models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("guests_children", models.PositiveSmallIntegerField(default=0)),
                ("guests_infants", models.PositiveSmallIntegerField(default=0)),
                ("guests_pets", models.PositiveSmallIntegerField(default=0)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING_PAYMENT", "Pending payment"),
                            ("CONFIRMED", "Confirmed"),
                            ("CANCELLED", "Cancelled"),
                            ("COMPLETED", "Completed"),
                        ],
                        default="PENDING_PAYMENT",
                        max_length=20,
                    ),
                ),
                (
                    "free_cancellation_deadline",
                    models.DateTimeField(
                        blank=True,
                        help_text="Free-cancellation deadline computed at creation time.",
                        null=True,
                    ),
                ),
                (
                    "cancellation_source",
                    models.CharField(
                        blank=True,
                        choices=[("GUEST", "Guest"), ("HOST", "Host"), ("SYSTEM", "System")],
                        max_length=10,
                    ),
                ),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("cancellation_fee_applies", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("payment_confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "host",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="hosted_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "listing",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="listings.listing",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["listing", "check_in", "check_out"], name="booking_listing_dates_idx"),
                    models.Index(fields=["status", "created_at"], name="booking_status_created_idx"),
                    models.Index(fields=["status", "check_out"], name="booking_status_checkout_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("check_out__gt", models.F("check_in"))),
                        name="booking_valid_dates",
                    ),
                ],
            },
        ),
    ]
