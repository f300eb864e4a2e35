"""Celery tasks for notification delivery."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import send_email_notification

logger = logging.getLogger(__name__)


@shared_task(name="notifications.send_email", autoretry_for=(ConnectionError,), retry_backoff=True, max_retries=3)
def send_email_task(recipient_email: str, subject: str, message: str) -> bool:
    """Асинхронная отправка письма."""
    return send_email_notification(recipient_email, subject, message)
