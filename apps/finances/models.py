"""Financial domain models: payments for tee-time and range bookings."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Payment(models.Model):
    """Платёж по бронированию ти-тайма или сессии на рейндже."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Создан, ожидает оплаты")
        COMPLETED = "completed", _("Оплачен")
        FAILED = "failed", _("Ошибка")
        REFUNDED = "refunded", _("Возврат")

    class Method(models.TextChoices):
        CARD = "card", _("Банковская карта")
        CASH = "cash", _("Наличные")
        TRANSFER = "transfer", _("Банковский перевод")
        WALLET = "wallet", _("Электронный кошелёк")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payments",
    )
    tee_time_booking = models.ForeignKey(
        "bookings.TeeTimeBooking",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="payments",
    )
    range_booking = models.ForeignKey(
        "bookings.RangeBooking",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="payments",
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    method = models.CharField(max_length=20, choices=Method.choices, default=Method.CARD)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    transaction_id = models.CharField(max_length=100, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    processed_at = models.DateTimeField(null=True, blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Платёж")
        verbose_name_plural = _("Платежи")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(tee_time_booking__isnull=False, range_booking__isnull=True)
                    | models.Q(tee_time_booking__isnull=True, range_booking__isnull=False)
                ),
                name="payment_targets_exactly_one_booking",
            ),
        ]

    def __str__(self) -> str:
        return f"Payment {self.pk} ({self.status})"

    @property
    def booking(self):
        return self.tee_time_booking or self.range_booking

    def _sync_booking(self, payment_status: str) -> None:
        booking = self.booking
        booking.payment_status = payment_status
        booking.save(update_fields=["payment_status", "updated_at"])

    def mark_completed(self, transaction_id: str | None = None) -> None:
        self.status = self.Status.COMPLETED
        if transaction_id:
            self.transaction_id = transaction_id
        self.processed_at = timezone.now()
        self.save(update_fields=["status", "transaction_id", "processed_at", "updated_at"])
        self._sync_booking(self.Status.COMPLETED)

    def mark_failed(self, reason: str | None = None) -> None:
        self.status = self.Status.FAILED
        if reason:
            self.metadata["failure_reason"] = reason
        self.processed_at = timezone.now()
        self.save(update_fields=["status", "metadata", "processed_at", "updated_at"])
        self._sync_booking(self.Status.FAILED)

    def mark_refunded(self, reason: str | None = None) -> None:
        self.status = self.Status.REFUNDED
        if reason:
            self.metadata["refund_reason"] = reason
        self.refunded_at = timezone.now()
        self.save(update_fields=["status", "metadata", "refunded_at", "updated_at"])
        self._sync_booking(self.Status.REFUNDED)


class PaymentTransaction(models.Model):
    """История изменений платежа (создание, подтверждение, возврат)."""

    payment = models.ForeignKey(
        Payment,
        on_delete=models.CASCADE,
        related_name="transactions",
    )
    event = models.CharField(max_length=50)
    payload = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Платёжная транзакция")
        verbose_name_plural = _("Платёжные транзакции")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.event} for payment {self.payment_id}"
