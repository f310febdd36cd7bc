"""Admin registration for payments and payouts."""

from __future__ import annotations

from django.contrib import admin

from .models import Payment, PaymentTransaction, Payout


class PaymentTransactionInline(admin.TabularInline):
    model = PaymentTransaction
    extra = 0
    readonly_fields = ("event", "payload", "status", "created_at")
    can_delete = False


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("provider_payment_id", "booking", "status", "amount", "currency", "pg_tid", "paid_at")
    list_filter = ("status", "provider")
    search_fields = ("provider_payment_id", "pg_tid", "booking__booking_code")
    raw_id_fields = ("booking",)
    inlines = [PaymentTransactionInline]


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    """Recording a payout here is what marks a settlement as PAID."""

    list_display = ("booking", "amount", "currency", "reference", "paid_at")
    search_fields = ("booking__booking_code", "reference")
    raw_id_fields = ("booking",)
    date_hierarchy = "paid_at"
