"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "email": "golfer@example.com",
            "phone": "+15550001234",
            "first_name": "Sam",
            "last_name": "Snead",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
            "membership_type": "premium",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.MEMBER)
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_register_duplicate_email(self) -> None:
        User.objects.create_user(email="golfer@example.com", password="StrongPass123")
        payload = {
            "email": "Golfer@example.com",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["error"]["code"], "duplicate_email")

    def test_register_password_mismatch(self) -> None:
        payload = {
            "email": "golfer@example.com",
            "password": "StrongPass123",
            "password_confirm": "StrongPass124",
        }
        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_login_and_use_access_token(self) -> None:
        User.objects.create_user(email="golfer@example.com", password="StrongPass123")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "golfer@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['tokens']['access']}")
        profile = self.client.get(reverse("auth:profile"))
        self.assertEqual(profile.status_code, status.HTTP_200_OK)
        self.assertEqual(profile.data["email"], "golfer@example.com")

    def test_refresh_token(self) -> None:
        User.objects.create_user(email="golfer@example.com", password="StrongPass123")
        tokens = self.client.post(
            reverse("auth:login"),
            {"email": "golfer@example.com", "password": "StrongPass123"},
            format="json",
        ).data["tokens"]

        response = self.client.post(reverse("auth:token_refresh"), {"refresh": tokens["refresh"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)

    def test_wrong_password_is_unauthorized(self) -> None:
        User.objects.create_user(email="golfer@example.com", password="StrongPass123")
        response = self.client.post(
            reverse("auth:login"),
            {"email": "golfer@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)

    @override_settings(LOGIN_MAX_FAILED_ATTEMPTS=3, LOGIN_LOCKOUT_MINUTES=15)
    def test_login_limited_attempts(self) -> None:
        user = User.objects.create_user(email="lock@example.com", password="CorrectPassword1")

        url = reverse("auth:login")
        wrong_payload = {"email": user.email, "password": "wrong"}
        for _ in range(3):
            self.client.post(url, wrong_payload, format="json")

        user.refresh_from_db()
        self.assertTrue(user.is_locked)

        locked = self.client.post(url, {"email": user.email, "password": "CorrectPassword1"}, format="json")
        self.assertEqual(locked.status_code, status.HTTP_403_FORBIDDEN, locked.data)
        self.assertEqual(locked.data["error"]["code"], "account_locked")

        # After lock expires user can login again
        user.locked_until = timezone.now() - timedelta(minutes=1)
        user.save(update_fields=["locked_until"])
        response = self.client.post(url, {"email": user.email, "password": "CorrectPassword1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        user.refresh_from_db()
        self.assertIsNone(user.locked_until)
        self.assertEqual(user.failed_login_attempts, 0)

    def test_profile_update(self) -> None:
        user = User.objects.create_user(email="golfer@example.com", password="StrongPass123")
        self.client.force_authenticate(user)

        response = self.client.patch(
            reverse("auth:profile"),
            {"first_name": "Sam", "phone": "+15550001234", "handicap": "12.4", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user.refresh_from_db()
        self.assertEqual(user.phone, "+15550001234")
        self.assertEqual(user.role, User.RoleChoices.MEMBER)

    def test_profile_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:profile"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
