"""DRF permission classes backed by the role/permission matrix."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from apps.users.access import Permission, can


class HasPermission(permissions.BasePermission):
    """
    Base class: allow users whose role grants ``required_permission``.

    Subclasses only set the permission; the decision itself lives in
    ``apps.users.access.can``.
    """

    required_permission: Permission | None = None

    def has_permission(self, request, view) -> bool:  # type: ignore
        if self.required_permission is None:
            return False
        return can(request.user, self.required_permission)


class IsAdmin(HasPermission):
    """Управление пользователями доступно только администраторам."""

    required_permission = Permission.MANAGE_USERS


class CanManageCourses(HasPermission):
    required_permission = Permission.MANAGE_COURSES


class CanManageBookings(HasPermission):
    """Сотрудники и администраторы управляют бронированиями клуба."""

    required_permission = Permission.MANAGE_BOOKINGS


class CanViewReports(HasPermission):
    required_permission = Permission.VIEW_REPORTS


class CanExportData(HasPermission):
    required_permission = Permission.EXPORT_DATA


class CanManageCoursesOrReadOnly(permissions.BasePermission):
    """Каталог полей читают все, изменяют только администраторы."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return can(request.user, Permission.MANAGE_COURSES)


class IsOwnerOrHasPermission(permissions.BasePermission):
    """
    Object-level permission: the resource owner or a role that grants
    the view's ``object_permission`` (defaults to VIEW_BOOKING).
    """

    owner_field = "user_id"

    def has_permission(self, request, view) -> bool:  # type: ignore
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        permission = getattr(view, "object_permission", Permission.VIEW_BOOKING)
        owner_id = getattr(obj, self.owner_field, None)
        return can(request.user, permission, owner_id=owner_id)
