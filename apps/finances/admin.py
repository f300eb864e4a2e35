"""Admin registration for payments."""

from __future__ import annotations

from django.contrib import admin

from .models import Payment, PaymentTransaction


class PaymentTransactionInline(admin.TabularInline):
    model = PaymentTransaction
    extra = 0
    readonly_fields = ("event", "status", "payload", "created_at")


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "tee_time_booking", "range_booking", "method", "status", "amount", "created_at")
    list_filter = ("status", "method")
    search_fields = ("user__email", "transaction_id", "tee_time_booking__booking_code")
    readonly_fields = ("amount", "currency", "processed_at", "refunded_at", "created_at", "updated_at")
    inlines = [PaymentTransactionInline]
