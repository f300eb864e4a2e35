"""Notification model.

In-app messages delivered to members about their bookings and payments.
Notifications are created by domain event handlers (booking created,
cancelled, status changed, range session finished) and by periodic
reminders. Each notification can be marked as read.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Type(models.TextChoices):
        BOOKING_CONFIRMED = "booking_confirmed", _("Бронирование подтверждено")
        BOOKING_CANCELLED = "booking_cancelled", _("Бронирование отменено")
        BOOKING_STATUS = "booking_status", _("Статус бронирования изменён")
        BOOKING_REMINDER = "booking_reminder", _("Напоминание")
        RANGE_SESSION = "range_session", _("Рейндж")
        SYSTEM = "system", _("Системное")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications'
    )
    type = models.CharField(max_length=30, choices=Type.choices, default=Type.SYSTEM)
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['user', 'is_read'], name='notificatio_user_id_3e1b7c_idx')]

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title}"

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=['is_read', 'read_at'])
