"""Course catalogue API views."""

from __future__ import annotations

from datetime import date

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import filters, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.application.command_handlers import booking_settings
from apps.bookings.services import AvailabilityEngine
from apps.users.access import Permission, can
from apps.users.api.permissions import CanManageCourses, CanManageCoursesOrReadOnly
from shared.domain.exceptions import ValidationFailed

from .filters import CourseFilterSet
from .models import Course, CourseCondition, Holiday
from .repositories import CourseRepository
from .serializers import (
    CourseConditionSerializer,
    CourseSerializer,
    CourseWriteSerializer,
    HolidaySerializer,
)


def parse_query_date(raw: str | None, param: str = "date") -> date:
    if not raw:
        raise ValidationFailed(f"Параметр {param} обязателен.", details={param: "required"})
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationFailed("Дата должна быть в формате YYYY-MM-DD.", details={param: raw})


class CourseViewSet(viewsets.ModelViewSet):
    """
    Viewset для каталога полей.

    Endpoints:
    - GET /api/v1/courses/ - активные поля (фильтры: name, city, difficulty, holes, max_weekday_fee)
    - GET /api/v1/courses/{id}/ - карточка поля
    - GET /api/v1/courses/{id}/availability/?date=YYYY-MM-DD - свободные ти-таймы
    - GET/POST /api/v1/courses/{id}/conditions/ - отчёты о состоянии поля
    - POST/PUT/PATCH/DELETE /api/v1/courses/... - управление (администратор); DELETE деактивирует
    """

    queryset = Course.objects.all()
    permission_classes = [CanManageCoursesOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = CourseFilterSet
    search_fields = ["name", "city", "description"]
    ordering_fields = ["name", "green_fee_weekday", "green_fee_weekend", "holes", "created_at"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if can(self.request.user, Permission.MANAGE_COURSES):
            return qs
        return qs.active()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return CourseWriteSerializer
        if self.action == "conditions":
            return CourseConditionSerializer
        return CourseSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        course = serializer.save()
        return Response(CourseSerializer(course).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        course = self.get_object()
        serializer = self.get_serializer(course, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        course = serializer.save()
        return Response(CourseSerializer(course).data)

    def perform_destroy(self, instance: Course) -> None:  # type: ignore
        # Бронирования ссылаются на поле, поэтому только деактивация
        instance.deactivate()

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        on_date = parse_query_date(request.query_params.get("date"))
        using = booking_settings()["DATABASE_ALIAS"]
        course = CourseRepository(using=using).get_active(pk)
        slots = AvailabilityEngine(using=using).list_available_slots(course, on_date)
        return Response(
            {
                "course_id": course.pk,
                "date": on_date.isoformat(),
                "slots": [slot.to_dict() for slot in slots],
            }
        )

    @action(detail=True, methods=["get", "post"])
    def conditions(self, request, pk=None):  # type: ignore
        course = self.get_object()
        if request.method == "GET":
            qs = CourseCondition.objects.filter(course=course).order_by("-recorded_at")
            page = self.paginate_queryset(qs)
            if page is not None:
                return self.get_paginated_response(CourseConditionSerializer(page, many=True).data)
            return Response(CourseConditionSerializer(qs, many=True).data)

        serializer = CourseConditionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        condition = serializer.save(course=course, reported_by=request.user)
        return Response(CourseConditionSerializer(condition).data, status=status.HTTP_201_CREATED)


class HolidayViewSet(viewsets.ModelViewSet):
    """Календарь праздничных дней (праздничный тариф)."""

    queryset = Holiday.objects.all()
    serializer_class = HolidaySerializer
    permission_classes = [permissions.IsAuthenticated, CanManageCourses]
    filter_backends = [filters.OrderingFilter]
    ordering_fields = ["date"]
