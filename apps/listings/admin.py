"""Admin registrations for listings."""

from __future__ import annotations

from django.contrib import admin

from .models import Listing, ListingBlockedDate


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ("title", "host", "status", "base_price", "currency", "free_cancellation_days", "created_at")
    list_filter = ("status", "currency")
    search_fields = ("title", "host__email", "host__username")


@admin.register(ListingBlockedDate)
class ListingBlockedDateAdmin(admin.ModelAdmin):
    list_display = ("listing", "date", "created_at")
    list_filter = ("date",)
    search_fields = ("listing__title",)
