"""URL routing for the finance domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import HostSettlementSummaryView, PaymentResultView, PaymentViewSet, SettlementListView

router = DefaultRouter()
router.register(r"payments", PaymentViewSet, basename="payment")

urlpatterns = [
    path("settlements/", SettlementListView.as_view(), name="settlement-list"),
    path("settlements/summary/", HostSettlementSummaryView.as_view(), name="settlement-summary"),
    path("payment-results/", PaymentResultView.as_view(), name="payment-result"),
    path("", include(router.urls)),
]
