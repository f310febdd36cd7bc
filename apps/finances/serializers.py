"""Serializers for the finance domain (payments and settlements)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Payment, PaymentTransaction


class PaymentTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentTransaction
        fields = ["id", "event", "payload", "status", "created_at"]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    """Read-only view of a payment and its processor notifications."""

    transactions = PaymentTransactionSerializer(many=True, read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "booking",
            "provider",
            "provider_payment_id",
            "pg_tid",
            "status",
            "amount",
            "currency",
            "paid_at",
            "created_at",
            "updated_at",
            "transactions",
        ]
        read_only_fields = fields


class PaymentResultSerializer(serializers.Serializer):
    provider_payment_id = serializers.CharField(max_length=100)
    status = serializers.ChoiceField(
        choices=[Payment.Status.PAID, Payment.Status.FAILED, Payment.Status.CANCELLED],
    )
    pg_tid = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")


class SettlementQuerySerializer(serializers.Serializer):
    as_of = serializers.DateTimeField(required=False)
    host = serializers.IntegerField(required=False, min_value=1)


class SettlementRowSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    booking_code = serializers.CharField()
    host_id = serializers.IntegerField()
    listing_id = serializers.IntegerField()
    listing_title = serializers.CharField()
    guest_id = serializers.IntegerField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    nights = serializers.IntegerField()
    booking_status = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    fee = serializers.DecimalField(max_digits=14, decimal_places=2)
    amount_payable = serializers.DecimalField(max_digits=14, decimal_places=2)
    currency = serializers.CharField()
    ready_at = serializers.DateTimeField()
    status = serializers.CharField(source="status.value")
    payment_status = serializers.CharField(allow_null=True)
    pg_tid = serializers.CharField(allow_blank=True)
    paid_at = serializers.DateTimeField(allow_null=True)
