"""API views for the booking domain."""

from __future__ import annotations

from datetime import date

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import filters, mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import CanManageBookings, IsOwnerOrHasPermission
from shared.domain.exceptions import ValidationFailed

from .application.command_handlers import (
    CancelBookingCommand,
    CreateRangeBookingCommand,
    CreateTeeTimeBookingCommand,
    EndRangeSessionCommand,
    UpdateBookingStatusCommand,
    UpdateBucketUsageCommand,
    booking_settings,
    get_booking_service,
)
from .models import RangeBooking, TeeTimeBooking
from .repositories import RangeBookingRepository, TeeTimeBookingRepository
from .serializers import (
    AdminTeeTimeBookingSerializer,
    BookingStatusUpdateSerializer,
    BucketUsageSerializer,
    RangeBookingCreateSerializer,
    RangeBookingSerializer,
    TeeTimeBookingCreateSerializer,
    TeeTimeBookingSerializer,
)


class BookingViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Tee-time bookings of the current user.

    Endpoints:
    - GET /api/v1/bookings/ - my tee-time bookings
    - GET /api/v1/bookings/{id}/ - booking details
    - POST /api/v1/bookings/tee-time/ - book a tee time
    - POST /api/v1/bookings/range/ - open a range session
    - DELETE /api/v1/bookings/{id}/ - cancel (24h before start at the latest)
    """

    queryset = TeeTimeBooking.objects.select_related("course", "user").all()
    serializer_class = TeeTimeBookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrHasPermission]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        if self.action == "list":
            repo = TeeTimeBookingRepository(using=booking_settings()["DATABASE_ALIAS"])
            return repo.for_user(self.request.user.pk)
        return super().get_queryset()

    def destroy(self, request, pk=None):  # type: ignore
        booking = get_booking_service().cancel_booking(
            CancelBookingCommand(booking_id=pk, requested_by=request.user)
        )
        return Response(TeeTimeBookingSerializer(booking).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="tee-time")
    def tee_time(self, request):  # type: ignore
        serializer = TeeTimeBookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = get_booking_service().create_tee_time_booking(
            CreateTeeTimeBookingCommand(user=request.user, **serializer.validated_data)
        )
        return Response(TeeTimeBookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="range")
    def range_booking(self, request):  # type: ignore
        serializer = RangeBookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = get_booking_service().create_range_booking(
            CreateRangeBookingCommand(user=request.user, **serializer.validated_data)
        )
        return Response(RangeBookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class RangeBookingViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Driving-range sessions of the current user.

    Endpoints:
    - GET /api/v1/range-bookings/ - my range sessions
    - PUT /api/v1/range-bookings/{id}/usage/ - record used buckets
    - POST /api/v1/range-bookings/{id}/end/ - end the session early
    """

    queryset = RangeBooking.objects.select_related("course", "user").all()
    serializer_class = RangeBookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrHasPermission]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        if self.action == "list":
            repo = RangeBookingRepository(using=booking_settings()["DATABASE_ALIAS"])
            return repo.for_user(self.request.user.pk)
        return super().get_queryset()

    @action(detail=True, methods=["put"], url_path="usage")
    def usage(self, request, pk=None):  # type: ignore
        serializer = BucketUsageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = get_booking_service().update_bucket_usage(
            UpdateBucketUsageCommand(
                booking_id=pk,
                used_buckets=serializer.validated_data["used_buckets"],
                requested_by=request.user,
            )
        )
        return Response(RangeBookingSerializer(booking).data)

    @action(detail=True, methods=["post"], url_path="end")
    def end(self, request, pk=None):  # type: ignore
        booking = get_booking_service().end_range_session(
            EndRangeSessionCommand(booking_id=pk, requested_by=request.user)
        )
        return Response(RangeBookingSerializer(booking).data)


class AdminBookingViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Booking management for staff and administrators.

    Endpoints:
    - GET /api/v1/admin/bookings/ - all tee-time bookings (filter by status, course, date)
    - GET /api/v1/admin/bookings/by-date/?date=YYYY-MM-DD - tee sheet of one day
    - PUT /api/v1/admin/bookings/{id}/status/ - override status / payment status
    """

    queryset = TeeTimeBooking.objects.select_related("course", "user").all()
    serializer_class = AdminTeeTimeBookingSerializer
    permission_classes = [permissions.IsAuthenticated, CanManageBookings]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["status", "payment_status", "course", "date", "user"]
    search_fields = ["booking_code", "user__email", "course__name"]
    ordering_fields = ["date", "tee_time", "created_at", "total_amount"]
    lookup_value_regex = r"\d+"

    @action(detail=False, methods=["get"], url_path="by-date")
    def by_date(self, request):  # type: ignore
        raw_date = request.query_params.get("date")
        if not raw_date:
            raise ValidationFailed("Параметр date обязателен.", details={"date": "required"})
        try:
            on_date = date.fromisoformat(raw_date)
        except ValueError:
            raise ValidationFailed("Дата должна быть в формате YYYY-MM-DD.", details={"date": raw_date})

        qs = self.filter_queryset(self.get_queryset()).filter(date=on_date).order_by("tee_time")
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=["put", "patch"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = BookingStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = get_booking_service().update_booking_status(
            UpdateBookingStatusCommand(
                booking_id=pk,
                status=serializer.validated_data["status"],
                payment_status=serializer.validated_data.get("payment_status"),
                requested_by=request.user,
            )
        )
        return Response(AdminTeeTimeBookingSerializer(booking).data)
