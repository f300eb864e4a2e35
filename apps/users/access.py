"""Role model and the single authorisation decision for the platform.

Every entry point (DRF permission classes, booking commands, admin
views) asks :func:`can` or :func:`authorize` instead of comparing role
strings itself.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from shared.domain.exceptions import Forbidden


class Role(str, Enum):
    MEMBER = "member"
    STAFF = "staff"
    ADMIN = "admin"


class Permission(str, Enum):
    VIEW_BOOKING = "view_booking"
    CANCEL_BOOKING = "cancel_booking"
    RECORD_BUCKET_USAGE = "record_bucket_usage"
    PAY_BOOKING = "pay_booking"
    MANAGE_BOOKINGS = "manage_bookings"
    MANAGE_COURSES = "manage_courses"
    MANAGE_USERS = "manage_users"
    MANAGE_PAYMENTS = "manage_payments"
    VIEW_REPORTS = "view_reports"
    EXPORT_DATA = "export_data"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.STAFF: frozenset({
        Permission.VIEW_BOOKING,
        Permission.MANAGE_BOOKINGS,
        Permission.RECORD_BUCKET_USAGE,
        Permission.VIEW_REPORTS,
    }),
    Role.MEMBER: frozenset(),
}

# Права владельца ресурса (собственное бронирование, собственный платёж)
OWNER_PERMISSIONS: frozenset[Permission] = frozenset({
    Permission.VIEW_BOOKING,
    Permission.CANCEL_BOOKING,
    Permission.RECORD_BUCKET_USAGE,
    Permission.PAY_BOOKING,
})


def role_of(user: Any) -> Role | None:
    """Resolve the typed role of a user; anonymous users have none."""

    if user is None or not getattr(user, "is_authenticated", False):
        return None
    if getattr(user, "is_superuser", False):
        return Role.ADMIN
    try:
        return Role(getattr(user, "role", Role.MEMBER))
    except ValueError:
        return Role.MEMBER


def can(user: Any, permission: Permission, *, owner_id: Any = None) -> bool:
    """Single authorisation decision.

    A user may perform ``permission`` when their role grants it, or when
    they own the resource (``owner_id``) and the permission is an owner one.
    """

    role = role_of(user)
    if role is None:
        return False
    if permission in ROLE_PERMISSIONS[role]:
        return True
    return owner_id is not None and owner_id == user.pk and permission in OWNER_PERMISSIONS


def authorize(user: Any, permission: Permission, *, owner_id: Any = None) -> None:
    """Raise :class:`Forbidden` unless :func:`can` allows the action."""

    if not can(user, permission, owner_id=owner_id):
        raise Forbidden(
            "Недостаточно прав для выполнения операции.",
            details={"permission": permission.value},
        )
