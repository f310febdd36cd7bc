"""URL routing for host listing tools."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import BlockedDatesView

urlpatterns = [
    path("<int:listing_id>/blocked-dates/", BlockedDatesView.as_view(), name="listing-blocked-dates"),
]
