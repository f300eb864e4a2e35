"""API tests for administrator user management and the role matrix."""

from __future__ import annotations

from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.access import Permission, Role, can, role_of
from apps.users.models import User


class AdminUserAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.staff = User.objects.create_user(
            email="staff@example.com",
            password="StaffPass123",
            role=User.RoleChoices.STAFF,
        )
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")

    def test_admin_lists_and_filters_users(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("admin-user-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)

        staff_only = self.client.get(reverse("admin-user-list"), {"role": "staff"})
        self.assertEqual([row["email"] for row in staff_only.data["results"]], [self.staff.email])

    def test_staff_and_members_are_refused(self) -> None:
        for user in (self.staff, self.member):
            with self.subTest(user=user.email):
                self.client.force_authenticate(user)
                response = self.client.get(reverse("admin-user-list"))
                self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_changes_role(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("admin-user-role", args=[self.member.id]),
            {"role": "staff"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.member.refresh_from_db()
        self.assertEqual(self.member.role, User.RoleChoices.STAFF)

    def test_admin_cannot_demote_self(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("admin-user-role", args=[self.admin.id]),
            {"role": "member"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY, response.data)
        self.admin.refresh_from_db()
        self.assertEqual(self.admin.role, User.RoleChoices.ADMIN)


class RoleMatrixTests(SimpleTestCase):
    def _user(self, role: str, pk: int = 1, **extra):
        return User(pk=pk, email=f"{role}@example.com", role=role, **extra)

    def test_roles_resolve(self) -> None:
        self.assertEqual(role_of(self._user("staff")), Role.STAFF)
        self.assertEqual(role_of(self._user("member", is_superuser=True)), Role.ADMIN)
        self.assertIsNone(role_of(None))

    def test_admin_can_do_everything(self) -> None:
        admin = self._user("admin")
        self.assertTrue(all(can(admin, permission) for permission in Permission))

    def test_staff_manages_bookings_but_not_courses(self) -> None:
        staff = self._user("staff")
        self.assertTrue(can(staff, Permission.MANAGE_BOOKINGS))
        self.assertTrue(can(staff, Permission.VIEW_REPORTS))
        self.assertFalse(can(staff, Permission.MANAGE_COURSES))
        self.assertFalse(can(staff, Permission.EXPORT_DATA))
        self.assertFalse(can(staff, Permission.CANCEL_BOOKING, owner_id=99))

    def test_member_acts_only_on_own_resources(self) -> None:
        member = self._user("member", pk=7)
        self.assertTrue(can(member, Permission.CANCEL_BOOKING, owner_id=7))
        self.assertFalse(can(member, Permission.CANCEL_BOOKING, owner_id=8))
        self.assertFalse(can(member, Permission.MANAGE_BOOKINGS, owner_id=7))
