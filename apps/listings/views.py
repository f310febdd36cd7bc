"""API views for host-managed listing availability."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.views import error_response

from .serializers import BlockedDateRangeQuerySerializer, BlockedDateSerializer
from .services import block_date, list_blocked_dates, unblock_date


class BlockedDatesView(APIView):
    """
    Nights a host has taken off sale for one of their listings.

    GET lists blocked nights in [start, end); POST blocks one night;
    DELETE (``?date=``) unblocks it. Listings of other hosts are 404.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, listing_id: int):  # type: ignore
        query = BlockedDateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        result = list_blocked_dates(listing_id, request.user.id, params["start"], params["end"])
        if not result.ok:
            return error_response(result.error)
        return Response({"listing_id": listing_id, "dates": [day.isoformat() for day in result.value]})

    def post(self, request, listing_id: int):  # type: ignore
        serializer = BlockedDateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = block_date(listing_id, request.user.id, serializer.validated_data["date"])
        if not result.ok:
            return error_response(result.error)
        return Response(
            {"date": serializer.validated_data["date"].isoformat(), "created": result.value},
            status=status.HTTP_201_CREATED if result.value else status.HTTP_200_OK,
        )

    def delete(self, request, listing_id: int):  # type: ignore
        serializer = BlockedDateSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        result = unblock_date(listing_id, request.user.id, serializer.validated_data["date"])
        if not result.ok:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)
