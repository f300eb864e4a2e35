"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from rest_framework import exceptions, serializers  # type: ignore

from shared.domain.exceptions import DuplicateEmail, Forbidden

from .models import PHONE_VALIDATOR

logger = logging.getLogger(__name__)

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirm = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    membership_type = serializers.ChoiceField(
        choices=User.MembershipType.choices,
        required=False,
        allow_blank=True,
    )

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.get("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Пароли не совпадают."})
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        validated_data.pop("password_confirm", None)
        if not validated_data.get("phone"):
            validated_data.pop("phone", None)
        email = validated_data["email"]
        if User.objects.filter(email__iexact=email).exists():
            raise DuplicateEmail(
                "Пользователь с таким email уже существует.",
                details={"email": email},
            )
        try:
            with transaction.atomic():
                user = User.objects.create_user(password=password, **validated_data)
        except IntegrityError as exc:
            # Параллельная регистрация с тем же email
            raise DuplicateEmail(
                "Пользователь с таким email уже существует.",
                details={"email": email},
            ) from exc
        logger.info(f"Registered user {user.id} ({user.email})")
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs.get("email", "")
        password = attrs.get("password", "")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise exceptions.AuthenticationFailed("Неверный email или пароль.")

        if user.is_locked:
            raise Forbidden(
                "Аккаунт временно заблокирован. Попробуйте позже.",
                code="account_locked",
                details={"locked_until": user.locked_until.isoformat()},
            )

        if not user.check_password(password):
            user.register_failed_attempt(
                threshold=settings.LOGIN_MAX_FAILED_ATTEMPTS,
                lock_minutes=settings.LOGIN_LOCKOUT_MINUTES,
            )
            logger.info(f"Failed login attempt for user {user.id}")
            raise exceptions.AuthenticationFailed("Неверный email или пароль.")

        if not user.is_active:
            raise exceptions.AuthenticationFailed("Аккаунт деактивирован.")

        if user.failed_login_attempts or user.locked_until:
            user.unlock()

        attrs["user"] = user
        return attrs
