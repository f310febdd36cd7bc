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
    ]

    operations = [
        migrations.CreateModel(
            name="Listing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending review"),
                            ("APPROVED", "Approved"),
                            ("REJECTED", "Rejected"),
                        ],
                        default="DRAFT",
                        max_length=20,
                    ),
                ),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Nightly price used when a booking does not supply one.",
                        max_digits=12,
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
                    "free_cancellation_days",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Overrides the platform free-cancellation window (days before check-in).",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "host",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="listings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Listing",
                "verbose_name_plural": "Listings",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["host", "status"], name="listing_host_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="ListingBlockedDate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                (
                    "listing",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocked_dates",
                        to="listings.listing",
                    ),
                ),
            ],
            options={
                "verbose_name": "Blocked date",
                "verbose_name_plural": "Blocked dates",
                "ordering": ["date"],
                "constraints": [
                    models.UniqueConstraint(fields=("listing", "date"), name="listing_blocked_date_unique"),
                ],
            },
        ),
    ]
