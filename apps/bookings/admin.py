"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import RangeBooking, SlotReservation, TeeTimeBooking


@admin.register(TeeTimeBooking)
class TeeTimeBookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "course",
        "user",
        "date",
        "tee_time",
        "players",
        "status",
        "payment_status",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "course", "date")
    search_fields = ("booking_code", "course__name", "user__email")
    readonly_fields = (
        "booking_code",
        "green_fee",
        "total_amount",
        "created_at",
        "updated_at",
    )


@admin.register(SlotReservation)
class SlotReservationAdmin(admin.ModelAdmin):
    list_display = ("course", "date", "tee_time", "booking", "created_at")
    list_filter = ("course", "date")
    readonly_fields = ("course", "date", "tee_time", "booking", "created_at")


@admin.register(RangeBooking)
class RangeBookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "course",
        "user",
        "date",
        "start_time",
        "bucket_size",
        "bucket_count",
        "used_buckets",
        "status",
        "total_amount",
    )
    list_filter = ("status", "bucket_size", "course")
    search_fields = ("user__email", "course__name")
    readonly_fields = ("unit_price", "total_amount", "created_at", "updated_at")
