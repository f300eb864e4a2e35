"""Serializers for the course catalogue."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Course, CourseCondition, Holiday


class CourseConditionSerializer(serializers.ModelSerializer):
    reported_by_id = serializers.ReadOnlyField(source="reported_by.id")

    class Meta:
        model = CourseCondition
        fields = [
            "id",
            "course",
            "recorded_at",
            "green_speed",
            "fairway_condition",
            "rough_condition",
            "bunker_condition",
            "weather",
            "temperature",
            "wind_speed",
            "humidity",
            "notes",
            "reported_by_id",
        ]
        read_only_fields = ["id", "course", "reported_by_id"]


class CourseSerializer(serializers.ModelSerializer):
    """Публичное представление поля."""

    open_time = serializers.TimeField(format="%H:%M")
    close_time = serializers.TimeField(format="%H:%M")
    latest_condition = serializers.SerializerMethodField()

    class Meta:
        model = Course
        fields = [
            "id",
            "name",
            "description",
            "address",
            "city",
            "state",
            "country",
            "postal_code",
            "phone",
            "email",
            "website",
            "holes",
            "par",
            "length_yards",
            "difficulty",
            "amenities",
            "green_fee_weekday",
            "green_fee_weekend",
            "green_fee_holiday",
            "cart_fee",
            "club_rental_fee",
            "member_discount",
            "is_active",
            "booking_advance_days",
            "max_players_per_slot",
            "slot_duration",
            "open_time",
            "close_time",
            "latest_condition",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "is_active", "latest_condition", "created_at", "updated_at"]

    def get_latest_condition(self, obj: Course):  # type: ignore
        condition = obj.conditions.order_by("-recorded_at").first()
        if condition is None:
            return None
        return CourseConditionSerializer(condition).data


class CourseWriteSerializer(serializers.ModelSerializer):
    """Создание и изменение поля администратором."""

    open_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"], required=False)
    close_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"], required=False)

    class Meta:
        model = Course
        fields = [
            "name",
            "description",
            "address",
            "city",
            "state",
            "country",
            "postal_code",
            "phone",
            "email",
            "website",
            "holes",
            "par",
            "length_yards",
            "difficulty",
            "amenities",
            "green_fee_weekday",
            "green_fee_weekend",
            "green_fee_holiday",
            "cart_fee",
            "club_rental_fee",
            "member_discount",
            "is_active",
            "booking_advance_days",
            "max_players_per_slot",
            "slot_duration",
            "open_time",
            "close_time",
        ]

    def validate_amenities(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Ожидается список строк.")
        return value

    def validate(self, attrs):  # type: ignore
        open_time = attrs.get("open_time", getattr(self.instance, "open_time", None))
        close_time = attrs.get("close_time", getattr(self.instance, "close_time", None))
        if open_time and close_time and open_time >= close_time:
            raise serializers.ValidationError(
                {"close_time": "Время закрытия должно быть позже времени открытия."}
            )
        for field in ("green_fee_weekday", "green_fee_weekend", "green_fee_holiday"):
            value = attrs.get(field)
            if value is not None and value < 0:
                raise serializers.ValidationError({field: "Тариф не может быть отрицательным."})
        return attrs


class HolidaySerializer(serializers.ModelSerializer):
    class Meta:
        model = Holiday
        fields = ["id", "date", "name"]
