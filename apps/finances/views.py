"""API views for payment processing.

Payments are created by members for their own bookings. Confirmation
goes through a provider stub; refunds are issued by administrators.
"""

from __future__ import annotations

import logging

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.access import Permission, can
from apps.users.api.permissions import IsOwnerOrHasPermission

from . import services
from .models import Payment
from .serializers import (
    PaymentConfirmSerializer,
    PaymentCreateSerializer,
    PaymentReasonSerializer,
    PaymentSerializer,
)

logger = logging.getLogger(__name__)


class PaymentViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Viewset for managing payment objects.

    Endpoints:
    - GET /api/v1/payments/ - my payments (administrators see all)
    - POST /api/v1/payments/ - pay for own booking
    - POST /api/v1/payments/{id}/confirm/ - provider stub confirmation
    - POST /api/v1/payments/{id}/fail/ - mark failed
    - POST /api/v1/payments/{id}/refund/ - refund (administrator)
    """

    queryset = Payment.objects.select_related("tee_time_booking", "range_booking").prefetch_related(
        "transactions"
    )
    serializer_class = PaymentSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrHasPermission]
    object_permission = Permission.PAY_BOOKING
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if can(self.request.user, Permission.MANAGE_PAYMENTS):
            return qs
        return qs.filter(user=self.request.user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = services.create_payment(
            request.user,
            method=serializer.validated_data["method"],
            tee_time_booking_id=serializer.validated_data.get("tee_time_booking"),
            range_booking_id=serializer.validated_data.get("range_booking"),
        )
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        serializer = PaymentConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = services.confirm_payment(
            pk,
            request.user,
            transaction_id=serializer.validated_data.get("transaction_id") or None,
        )
        return Response(PaymentSerializer(payment).data)

    @action(detail=True, methods=["post"])
    def fail(self, request, pk=None):  # type: ignore
        serializer = PaymentReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = services.fail_payment(pk, request.user, reason=serializer.validated_data["reason"])
        return Response(PaymentSerializer(payment).data)

    @action(detail=True, methods=["post"])
    def refund(self, request, pk=None):  # type: ignore
        serializer = PaymentReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = services.refund_payment(pk, request.user, reason=serializer.validated_data["reason"])
        return Response(PaymentSerializer(payment).data)
