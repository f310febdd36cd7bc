"""FilterSet definitions for booking lists."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Filters for guest and host booking lists."""

    status = django_filters.MultipleChoiceFilter(choices=Booking.Status.choices)
    listing = django_filters.NumberFilter(field_name="listing_id", lookup_expr="exact")
    check_in_from = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_to = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "listing"]
