"""Notification services: email delivery, in-app notifications and event handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from .models import Notification

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.domain.events import (
        BookingCancelled,
        BookingCreated,
        BookingStatusChanged,
        RangeSessionCompleted,
    )
    from apps.bookings.models import TeeTimeBooking
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    message: str,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Универсальная функция отправки email уведомлений.

    Args:
        recipient_email: Email получателя
        subject: Тема письма
        message: Текстовая версия письма
        html_message: HTML-версия письма (опционально)

    Returns:
        bool: True если письмо отправлено успешно
    """
    if html_message and not message:
        message = strip_tags(html_message)

    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )
    except OSError as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")
    return True


def queue_email(recipient_email: str, subject: str, message: str) -> None:
    from .tasks import send_email_task

    send_email_task.delay(recipient_email, subject, message)


# ============================================================================
# IN-APP NOTIFICATIONS
# ============================================================================

def create_in_app_notification(
    user: "CustomUser",
    title: str,
    message: str,
    *,
    type: str = Notification.Type.SYSTEM,
    data: dict | None = None,
) -> Notification:
    """Создание in-app уведомления в базе данных."""

    notification = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        data=data or {},
    )
    logger.info(f"In-app notification created for {user.email}: {title}")
    return notification


def notify_user(
    user: "CustomUser",
    title: str,
    message: str,
    *,
    type: str = Notification.Type.SYSTEM,
    data: dict | None = None,
    email: bool = True,
) -> Notification:
    """In-app уведомление плюс письмо на email пользователя."""

    notification = create_in_app_notification(user, title, message, type=type, data=data)
    if email and user.email:
        queue_email(user.email, title, message)
    return notification


def _load_user(user_id):
    User = get_user_model()
    return User.objects.get(pk=user_id)


# ============================================================================
# DOMAIN EVENT HANDLERS (регистрируются в NotificationsConfig.ready)
# ============================================================================

def on_booking_created(event: "BookingCreated") -> None:
    user = _load_user(event.user_id)
    notify_user(
        user,
        title="Ти-тайм забронирован",
        message=(
            f"Ваш ти-тайм {event.date:%d.%m.%Y} в {event.tee_time:%H:%M} "
            f"на {event.players} игроков подтверждён. Сумма: {event.total_amount}."
        ),
        type=Notification.Type.BOOKING_CONFIRMED,
        data={"booking_id": event.booking_id, "course_id": event.course_id},
    )


def on_booking_cancelled(event: "BookingCancelled") -> None:
    user = _load_user(event.user_id)
    notify_user(
        user,
        title="Бронирование отменено",
        message=f"Ваш ти-тайм {event.date:%d.%m.%Y} в {event.tee_time:%H:%M} отменён.",
        type=Notification.Type.BOOKING_CANCELLED,
        data={"booking_id": event.booking_id, "cancelled_by": event.cancelled_by},
    )


def on_booking_status_changed(event: "BookingStatusChanged") -> None:
    if event.old_status == event.new_status and event.old_payment_status == event.new_payment_status:
        return
    user = _load_user(event.user_id)
    notify_user(
        user,
        title="Статус бронирования изменён",
        message=(
            f"Статус бронирования #{event.booking_id}: {event.new_status}, "
            f"оплата: {event.new_payment_status}."
        ),
        type=Notification.Type.BOOKING_STATUS,
        data={
            "booking_id": event.booking_id,
            "old_status": event.old_status,
            "new_status": event.new_status,
        },
        email=False,
    )


def on_range_session_completed(event: "RangeSessionCompleted") -> None:
    user = _load_user(event.user_id)
    create_in_app_notification(
        user,
        title="Сессия на рейндже завершена",
        message=f"Использовано корзин: {event.used_buckets} из {event.bucket_count}.",
        type=Notification.Type.RANGE_SESSION,
        data={"booking_id": event.booking_id},
    )


def notify_tee_time_reminder(booking: "TeeTimeBooking") -> Notification:
    return notify_user(
        booking.user,
        title="Напоминание о ти-тайме завтра",
        message=(
            f"Завтра в {booking.tee_time:%H:%M} вас ждут на поле {booking.course.name}. "
            f"Код брони: {booking.booking_code}."
        ),
        type=Notification.Type.BOOKING_REMINDER,
        data={"booking_id": booking.pk},
    )
