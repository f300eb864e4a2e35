"""FilterSet definitions for the course catalogue."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Course


class CourseFilterSet(django_filters.FilterSet):
    """Filters used by the public course list."""

    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    difficulty = django_filters.ChoiceFilter(choices=Course.Difficulty.choices)
    holes = django_filters.NumberFilter(field_name="holes", lookup_expr="exact")
    max_weekday_fee = django_filters.NumberFilter(field_name="green_fee_weekday", lookup_expr="lte")
    max_weekend_fee = django_filters.NumberFilter(field_name="green_fee_weekend", lookup_expr="lte")

    class Meta:
        model = Course
        fields = [
            "name",
            "city",
            "difficulty",
            "holes",
        ]
