"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import RangeBooking, TeeTimeBooking


class TeeTimeBookingCreateSerializer(serializers.Serializer):
    """Запрос на бронирование ти-тайма."""

    course_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    tee_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    players = serializers.IntegerField(min_value=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")


class RangeBookingCreateSerializer(serializers.Serializer):
    """Запрос на сессию на рейндже."""

    course_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    start_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    duration_minutes = serializers.IntegerField(min_value=15, max_value=240, default=60)
    bucket_size = serializers.ChoiceField(choices=RangeBooking.BucketSize.choices)
    bucket_count = serializers.IntegerField(min_value=1)
    bay_number = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class BucketUsageSerializer(serializers.Serializer):
    used_buckets = serializers.IntegerField()


class BookingStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TeeTimeBooking.Status.choices)
    payment_status = serializers.ChoiceField(
        choices=TeeTimeBooking.PaymentStatus.choices,
        required=False,
        allow_null=True,
    )


class TeeTimeBookingSerializer(serializers.ModelSerializer):
    """Детальный сериализатор бронирования ти-тайма."""

    user_id = serializers.ReadOnlyField(source="user.id")
    course_id = serializers.ReadOnlyField(source="course.id")
    course_name = serializers.ReadOnlyField(source="course.name")
    tee_time = serializers.TimeField(format="%H:%M", read_only=True)

    class Meta:
        model = TeeTimeBooking
        fields = [
            "id",
            "booking_code",
            "user_id",
            "course_id",
            "course_name",
            "date",
            "tee_time",
            "players",
            "status",
            "payment_status",
            "green_fee",
            "total_amount",
            "currency",
            "special_requests",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdminTeeTimeBookingSerializer(TeeTimeBookingSerializer):
    user_email = serializers.ReadOnlyField(source="user.email")

    class Meta(TeeTimeBookingSerializer.Meta):
        fields = TeeTimeBookingSerializer.Meta.fields + ["user_email"]
        read_only_fields = fields


class RangeBookingSerializer(serializers.ModelSerializer):
    user_id = serializers.ReadOnlyField(source="user.id")
    course_id = serializers.ReadOnlyField(source="course.id")
    course_name = serializers.ReadOnlyField(source="course.name")
    start_time = serializers.TimeField(format="%H:%M", read_only=True)
    remaining_buckets = serializers.IntegerField(read_only=True)

    class Meta:
        model = RangeBooking
        fields = [
            "id",
            "user_id",
            "course_id",
            "course_name",
            "date",
            "start_time",
            "duration_minutes",
            "bay_number",
            "bucket_size",
            "bucket_count",
            "used_buckets",
            "remaining_buckets",
            "unit_price",
            "total_amount",
            "currency",
            "payment_status",
            "status",
            "notes",
            "completed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
