"""Admin registration for the course catalogue."""

from __future__ import annotations

from django.contrib import admin

from .models import Course, CourseCondition, Holiday


class CourseConditionInline(admin.TabularInline):
    model = CourseCondition
    extra = 0
    fields = ("recorded_at", "green_speed", "fairway_condition", "weather", "notes")


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "city",
        "holes",
        "par",
        "difficulty",
        "green_fee_weekday",
        "green_fee_weekend",
        "is_active",
    )
    list_filter = ("is_active", "difficulty", "holes", "city")
    search_fields = ("name", "city", "address")
    inlines = [CourseConditionInline]


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ("date", "name")
    ordering = ("date",)
