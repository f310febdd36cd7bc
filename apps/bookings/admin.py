"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "listing",
        "guest",
        "status",
        "check_in",
        "check_out",
        "total_amount",
        "currency",
        "created_at",
    )
    list_filter = ("status", "cancellation_source", "cancellation_fee_applies", "check_in")
    search_fields = ("booking_code", "listing__title", "guest__email", "guest__username")
    raw_id_fields = ("listing", "guest", "host")
    readonly_fields = (
        "booking_code",
        "status",
        "nights",
        "price_per_night",
        "total_amount",
        "currency",
        "free_cancellation_deadline",
        "cancellation_source",
        "cancellation_fee_applies",
        "created_at",
        "payment_confirmed_at",
        "cancelled_at",
        "completed_at",
        "updated_at",
    )
