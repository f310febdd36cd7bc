"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Input for a guest creating a booking; the domain does the rest."""

    listing = serializers.IntegerField(min_value=1)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests_adults = serializers.IntegerField(min_value=1, default=1)
    guests_children = serializers.IntegerField(min_value=0, default=0)
    guests_infants = serializers.IntegerField(min_value=0, default=0)
    guests_pets = serializers.IntegerField(min_value=0, default=0)


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    guest_id = serializers.ReadOnlyField(source="guest.id")
    host_id = serializers.ReadOnlyField(source="host.id")
    listing_id = serializers.ReadOnlyField(source="listing.id")
    listing_title = serializers.ReadOnlyField(source="listing.title")

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "guest_id",
            "host_id",
            "listing_id",
            "listing_title",
            "check_in",
            "check_out",
            "nights",
            "price_per_night",
            "total_amount",
            "currency",
            "guests_adults",
            "guests_children",
            "guests_infants",
            "guests_pets",
            "status",
            "free_cancellation_deadline",
            "cancellation_source",
            "cancellation_reason",
            "cancellation_fee_applies",
            "created_at",
            "payment_confirmed_at",
            "cancelled_at",
            "completed_at",
            "updated_at",
        ]
        read_only_fields = fields


class HostCalendarQuerySerializer(serializers.Serializer):
    listing = serializers.IntegerField(min_value=1)
    year = serializers.IntegerField(min_value=1, max_value=9999)
    month = serializers.IntegerField()


class CalendarBookingSerializer(serializers.ModelSerializer):
    guest_name = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "check_in",
            "check_out",
            "nights",
            "status",
            "total_amount",
            "currency",
            "guests_adults",
            "guests_children",
            "guests_infants",
            "guests_pets",
            "guest_name",
        ]
        read_only_fields = fields

    def get_guest_name(self, obj: Booking) -> str:
        return obj.guest.get_full_name() or obj.guest.get_username()


class HostCalendarSerializer(serializers.Serializer):
    listing_id = serializers.IntegerField(source="listing.id")
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    bookings = CalendarBookingSerializer(many=True)
    blocked_dates = serializers.ListField(child=serializers.DateField())
    occupied_dates = serializers.ListField(child=serializers.DateField())
