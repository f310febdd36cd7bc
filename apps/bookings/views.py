"""API views for the booking domain."""

from __future__ import annotations

import logging

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from .application.calendar import get_host_calendar
from .application import command_handlers
from .domain.entities import CancellationSource
from .domain.errors import BookingError, ErrorKind
from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    HostCalendarQuerySerializer,
    HostCalendarSerializer,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.LISTING_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.STALE_WRITE: status.HTTP_409_CONFLICT,
}


def error_response(error: BookingError) -> Response:
    """Translate a booking error kind into an HTTP response."""
    return Response(
        {"error": error.kind.value, "detail": error.message},
        status=ERROR_STATUS[error.kind],
    )


def _is_staff(user) -> bool:  # type: ignore
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


class IsBookingStakeholder(permissions.BasePermission):
    """Guests, hosts of the listing and staff may access a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if _is_staff(user):
            return True
        return user.id in (obj.guest_id, obj.host_id)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for creating bookings and driving their lifecycle."""

    queryset = Booking.objects.select_related("listing", "guest", "host").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["check_in", "created_at"]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if _is_staff(user):
            return qs
        return qs.filter(Q(guest=user) | Q(host=user))

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = command_handlers.create_booking(
            data["listing"],
            request.user.id,
            data["check_in"],
            data["check_out"],
            guests_adults=data["guests_adults"],
            guests_children=data["guests_children"],
            guests_infants=data["guests_infants"],
            guests_pets=data["guests_pets"],
        )
        if not result.ok:
            return error_response(result.error)

        read_serializer = BookingSerializer(result.value, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        if booking.host_id == user.id:
            actor = CancellationSource.HOST
        elif booking.guest_id == user.id:
            actor = CancellationSource.GUEST
        else:
            actor = CancellationSource.SYSTEM

        result = command_handlers.cancel_booking(booking.pk, actor, reason=serializer.validated_data["reason"])
        if not result.ok:
            return error_response(result.error)

        outcome = result.value
        return Response(
            {
                "booking": BookingSerializer(outcome.booking).data,
                "fee_liable": outcome.fee_liable,
            },
            status=status.HTTP_200_OK,
        )

    @action(
        detail=True,
        methods=["post"],
        url_path="confirm-payment",
        permission_classes=[permissions.IsAdminUser],
    )
    def confirm_payment(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        result = command_handlers.confirm_payment(booking.pk)
        if not result.ok:
            return error_response(result.error)

        outcome = result.value
        return Response(
            {
                "booking": BookingSerializer(outcome.booking).data,
                "changed": outcome.changed,
            }
        )

    @action(detail=False, methods=["get"])
    def calendar(self, request):  # type: ignore
        query = HostCalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        host_id = None if _is_staff(request.user) else request.user.id
        result = get_host_calendar(params["listing"], params["year"], params["month"], host_id=host_id)
        if not result.ok:
            return error_response(result.error)
        return Response(HostCalendarSerializer(result.value).data)
