"""API views for payments and host settlements.

Settlement rows are computed on request; nothing here writes settlement
state. Payout rows (the PAID flag) are managed through the admin.
Payment results are posted by the processor integration, which
authenticates as a staff user.
"""

from __future__ import annotations

import logging

from django.db.models import Q  # type: ignore

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.serializers import BookingSerializer
from apps.bookings.views import error_response

from .models import Payment
from .serializers import (
    PaymentResultSerializer,
    PaymentSerializer,
    SettlementQuerySerializer,
    SettlementRowSerializer,
)
from .services import compute_settlement_rows, record_payment_result, summarize_host_settlements

logger = logging.getLogger(__name__)


class IsPaymentStakeholderOrAdmin(permissions.BasePermission):
    """Only the booking guest, its host or admins may read a payment."""

    def has_object_permission(self, request, view, obj: Payment) -> bool:  # type: ignore
        user = request.user
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return True
        return user.id in (obj.booking.guest_id, obj.booking.host_id)


class PaymentViewSet(viewsets.ReadOnlyModelViewSet):
    """Viewset for reading payment records."""

    queryset = Payment.objects.select_related("booking").prefetch_related("transactions").all()
    serializer_class = PaymentSerializer
    permission_classes = [permissions.IsAuthenticated, IsPaymentStakeholderOrAdmin]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return qs
        return qs.filter(Q(booking__guest=user) | Q(booking__host=user))


class PaymentResultView(APIView):
    """Receives the processor's verdict for a payment."""

    permission_classes = [permissions.IsAdminUser]

    def post(self, request):  # type: ignore
        serializer = PaymentResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = record_payment_result(data["provider_payment_id"], data["status"], pg_tid=data["pg_tid"])
        if not result.ok:
            return error_response(result.error)

        outcome = result.value
        return Response(
            {"booking": BookingSerializer(outcome.booking).data, "changed": outcome.changed},
            status=status.HTTP_200_OK,
        )


class SettlementListView(APIView):
    """Administrative settlement report across all hosts."""

    permission_classes = [permissions.IsAdminUser]

    def get(self, request):  # type: ignore
        query = SettlementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        rows = compute_settlement_rows(params.get("as_of"), host_id=params.get("host"))
        return Response(SettlementRowSerializer(rows, many=True).data)


class HostSettlementSummaryView(APIView):
    """Pending, ready and paid totals for the requesting host."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        query = SettlementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        summary = summarize_host_settlements(request.user.id, query.validated_data.get("as_of"))
        return Response(
            {currency: {key: str(value) for key, value in totals.items()} for currency, totals in summary.items()}
        )
