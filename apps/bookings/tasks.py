"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task  # type: ignore
from django.db import DatabaseError  # type: ignore
from django.utils import timezone  # type: ignore

from .application.command_handlers import booking_settings, get_booking_service
from .models import RangeBooking, TeeTimeBooking

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (запускаются автоматически через Celery Beat)
# ============================================================================

@shared_task(name="bookings.complete_past_tee_times")
def complete_past_tee_times() -> dict[str, int]:
    """
    Автоматическое завершение сыгранных ти-таймов.

    Подтверждённые бронирования, время начала которых уже прошло,
    переводятся в статус COMPLETED. Занятость слота не меняется:
    завершённое бронирование продолжает удерживать ячейку.

    Запускается каждый час.

    Returns:
        dict: {"completed": количество завершённых бронирований}
    """
    using = booking_settings()["DATABASE_ALIAS"]
    service = get_booking_service()
    now = timezone.localtime()
    completed_count = 0

    candidate_ids = TeeTimeBooking.objects.using(using).filter(
        status=TeeTimeBooking.Status.CONFIRMED,
        date__lte=now.date(),
    ).values_list("id", flat=True)

    for booking_id in list(candidate_ids):
        try:
            if service.complete_tee_time(booking_id, now=now):
                completed_count += 1
        except DatabaseError as e:
            logger.error(f"Error completing booking {booking_id}: {e}", exc_info=True)

    if completed_count > 0:
        logger.info(f"Completed {completed_count} tee-time bookings")

    return {"completed": completed_count}


@shared_task(name="bookings.expire_stale_range_sessions")
def expire_stale_range_sessions() -> dict[str, int]:
    """
    Истечение забытых сессий на рейндже.

    Активная сессия, конец которой прошёл более чем на
    RANGE_SESSION_EXPIRY_MINUTES минут назад, переводится в EXPIRED,
    чтобы пользователь мог открыть новую.

    Запускается каждые 15 минут.

    Returns:
        dict: {"expired": количество истёкших сессий}
    """
    config = booking_settings()
    using = config["DATABASE_ALIAS"]
    service = get_booking_service()
    cutoff = timezone.now() - timedelta(minutes=config["RANGE_SESSION_EXPIRY_MINUTES"])
    expired_count = 0

    active_ids = RangeBooking.objects.using(using).filter(
        status=RangeBooking.Status.ACTIVE,
        date__lte=timezone.localdate(),
    ).values_list("id", flat=True)

    for session_id in list(active_ids):
        try:
            if service.expire_range_session(session_id, cutoff):
                expired_count += 1
        except DatabaseError as e:
            logger.error(f"Error expiring range session {session_id}: {e}", exc_info=True)

    if expired_count > 0:
        logger.info(f"Expired {expired_count} range sessions")

    return {"expired": expired_count}


@shared_task(name="bookings.send_upcoming_tee_time_reminders")
def send_upcoming_tee_time_reminders() -> dict[str, int]:
    """
    Напоминания о ти-таймах на завтра.

    Запускается раз в сутки.

    Returns:
        dict: {"sent": количество отправленных напоминаний}
    """
    from apps.notifications.services import notify_tee_time_reminder

    using = booking_settings()["DATABASE_ALIAS"]
    tomorrow = timezone.localdate() + timedelta(days=1)
    sent_count = 0

    upcoming = TeeTimeBooking.objects.using(using).select_related("user", "course").filter(
        status=TeeTimeBooking.Status.CONFIRMED,
        date=tomorrow,
    )

    for booking in upcoming:
        notify_tee_time_reminder(booking)
        sent_count += 1
        logger.info(f"Sent reminder for booking {booking.booking_code}")

    if sent_count > 0:
        logger.info(f"Sent {sent_count} tee-time reminders")

    return {"sent": sent_count}
