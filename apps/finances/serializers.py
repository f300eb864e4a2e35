"""Serializers for the finance domain (payments)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Payment, PaymentTransaction


class PaymentTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentTransaction
        fields = ["id", "event", "payload", "status", "created_at"]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    """Отображение платёжных записей."""

    transactions = PaymentTransactionSerializer(many=True, read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "user",
            "tee_time_booking",
            "range_booking",
            "method",
            "status",
            "amount",
            "currency",
            "transaction_id",
            "metadata",
            "processed_at",
            "refunded_at",
            "created_at",
            "updated_at",
            "transactions",
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    tee_time_booking = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    range_booking = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    method = serializers.ChoiceField(choices=Payment.Method.choices, default=Payment.Method.CARD)

    def validate(self, attrs):  # type: ignore
        if bool(attrs.get("tee_time_booking")) == bool(attrs.get("range_booking")):
            raise serializers.ValidationError(
                "Укажите ровно одно бронирование: tee_time_booking или range_booking."
            )
        return attrs


class PaymentConfirmSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=100, required=False, allow_blank=True)


class PaymentReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
