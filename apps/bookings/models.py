"""Booking domain models: tee-time bookings, slot occupancy and range sessions."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import EventRecorder

from .domain.availability import TimeSlotKey


class TeeTimeBooking(EventRecorder, models.Model):
    """Бронирование ти-тайма на поле."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Ожидает подтверждения")
        CONFIRMED = "confirmed", _("Подтверждено")
        CANCELLED = "cancelled", _("Отменено")
        COMPLETED = "completed", _("Завершено")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Ожидает оплаты")
        COMPLETED = "completed", _("Оплачено")
        FAILED = "failed", _("Ошибка оплаты")
        REFUNDED = "refunded", _("Возврат")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tee_time_bookings",
    )
    course = models.ForeignKey(
        "courses.Course",
        on_delete=models.PROTECT,
        related_name="tee_time_bookings",
    )
    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    date = models.DateField()
    tee_time = models.TimeField()
    players = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    green_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Тариф за игрока на момент бронирования."),
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    special_requests = models.TextField(blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Бронирование ти-тайма")
        verbose_name_plural = _("Бронирования ти-таймов")
        ordering = ["-date", "-tee_time"]
        indexes = [
            models.Index(fields=["course", "date"], name="bookings_te_course__0f3a1c_idx"),
            models.Index(fields=["user", "date"], name="bookings_te_user_id_5b7e2d_idx"),
            models.Index(fields=["status"], name="bookings_te_status_9c4d8e_idx"),
        ]

    def __str__(self) -> str:
        return f"Tee time #{self.booking_code} {self.date} {self.tee_time:%H:%M}"

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.booking_code:
            self.booking_code = self.generate_booking_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    @property
    def slot_key(self) -> TimeSlotKey:
        return TimeSlotKey(self.course_id, self.date, self.tee_time)

    @property
    def starts_at(self) -> datetime:
        """Aware start datetime in the club's time zone."""
        return timezone.make_aware(datetime.combine(self.date, self.tee_time))

    @property
    def holds_slot(self) -> bool:
        return self.status != self.Status.CANCELLED


class SlotReservation(models.Model):
    """
    Занятость ячейки сетки (поле, дата, время).

    Уникальный индекс по (course, date, tee_time) гарантирует, что ячейку
    удерживает не больше одного неотменённого бронирования; запись
    удаляется при отмене.
    """

    course = models.ForeignKey(
        "courses.Course",
        on_delete=models.PROTECT,
        related_name="slot_reservations",
    )
    date = models.DateField()
    tee_time = models.TimeField()
    booking = models.OneToOneField(
        TeeTimeBooking,
        on_delete=models.CASCADE,
        related_name="slot_reservation",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Занятый ти-тайм")
        verbose_name_plural = _("Занятые ти-таймы")
        ordering = ["date", "tee_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["course", "date", "tee_time"],
                name="unique_tee_time_slot",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.course_id} {self.date} {self.tee_time:%H:%M} -> {self.booking_id}"


class RangeBooking(EventRecorder, models.Model):
    """Сессия на тренировочном поле (драйвинг-рейндж) с корзинами мячей."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Активна")
        COMPLETED = "completed", _("Завершена")
        CANCELLED = "cancelled", _("Отменена")
        EXPIRED = "expired", _("Истекла")

    class BucketSize(models.TextChoices):
        SMALL = "small", _("Маленькая")
        MEDIUM = "medium", _("Средняя")
        LARGE = "large", _("Большая")
        JUMBO = "jumbo", _("Джамбо")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="range_bookings",
    )
    course = models.ForeignKey(
        "courses.Course",
        on_delete=models.PROTECT,
        related_name="range_bookings",
    )
    date = models.DateField()
    start_time = models.TimeField()
    duration_minutes = models.PositiveSmallIntegerField(default=60, validators=[MinValueValidator(15)])
    bay_number = models.PositiveSmallIntegerField(null=True, blank=True)
    bucket_size = models.CharField(max_length=10, choices=BucketSize.choices)
    bucket_count = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    used_buckets = models.PositiveSmallIntegerField(default=0)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    payment_status = models.CharField(
        max_length=20,
        choices=TeeTimeBooking.PaymentStatus.choices,
        default=TeeTimeBooking.PaymentStatus.PENDING,
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    notes = models.TextField(blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Сессия на рейндже")
        verbose_name_plural = _("Сессии на рейндже")
        ordering = ["-date", "-start_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(status="active"),
                name="one_active_range_session_per_user",
            ),
            models.CheckConstraint(
                condition=models.Q(used_buckets__lte=models.F("bucket_count")),
                name="range_used_buckets_within_count",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "date"], name="bookings_ra_status_2a6f0b_idx"),
        ]

    def __str__(self) -> str:
        return f"Range session {self.pk} ({self.bucket_count}x{self.bucket_size})"

    @property
    def starts_at(self) -> datetime:
        return timezone.make_aware(datetime.combine(self.date, self.start_time))

    @property
    def ends_at(self) -> datetime:
        return self.starts_at + timedelta(minutes=self.duration_minutes)

    @property
    def remaining_buckets(self) -> int:
        return self.bucket_count - self.used_buckets
