"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Основной сериализатор пользователя."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "membership_type",
            "handicap",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "membership_type",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Изменение собственного профиля: имя, телефон, гандикап."""

    phone = serializers.CharField(
        validators=[PHONE_VALIDATOR],
        required=False,
        allow_null=True,
        allow_blank=True,
    )

    class Meta:
        model = User
        fields = ["username", "first_name", "last_name", "phone", "handicap"]

    def validate_phone(self, value):  # type: ignore
        if not value:
            return None
        return User.objects.normalize_phone(value)


class AdminUserSerializer(UserSerializer):
    """Пользователь в админском API, с полями безопасности."""

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + [
            "is_staff",
            "is_superuser",
            "failed_login_attempts",
            "locked_until",
        ]
        read_only_fields = fields


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.RoleChoices.choices)
