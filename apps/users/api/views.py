"""API views for club administrators: user management."""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import filters, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.models import CustomUser
from apps.users.serializers import AdminUserSerializer, RoleUpdateSerializer
from shared.domain.exceptions import PreconditionFailed

from .permissions import IsAdmin

logger = logging.getLogger(__name__)


class AdminUserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for administrators to inspect users and change roles.

    Endpoints:
    - GET /api/v1/admin/users/ - list users (filter by role, search by email/name)
    - GET /api/v1/admin/users/{id}/ - user details
    - PUT /api/v1/admin/users/{id}/role/ - change role (member | staff | admin)
    """

    queryset = CustomUser.objects.all()
    serializer_class = AdminUserSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["role", "membership_type", "is_active"]
    search_fields = ["email", "first_name", "last_name", "phone"]
    ordering_fields = ["created_at", "email", "last_login"]

    @action(detail=True, methods=["put", "patch"], url_path="role")
    def role(self, request, pk=None):  # type: ignore
        """
        Change the role of a user.

        Administrators cannot demote themselves, so the platform always
        keeps at least the acting admin.
        """
        user: CustomUser = self.get_object()
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_role = serializer.validated_data["role"]

        if user.pk == request.user.pk and new_role != CustomUser.RoleChoices.ADMIN:
            raise PreconditionFailed("Нельзя снять роль администратора с самого себя.")

        old_role = user.role
        user.role = new_role
        user.save(update_fields=["role", "updated_at"])
        logger.info(f"User {user.id} role changed {old_role} -> {new_role} by {request.user.id}")
        return Response(AdminUserSerializer(user).data)
