"""Serializers for host listing tools."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class BlockedDateRangeQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()


class BlockedDateSerializer(serializers.Serializer):
    date = serializers.DateField()
