import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("golf_club")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Завершение сыгранных ти-таймов - каждый час
    "complete-past-tee-times": {
        "task": "bookings.complete_past_tee_times",
        "schedule": crontab(minute=5),
    },
    # Истечение забытых сессий на рейндже - каждые 15 минут
    "expire-stale-range-sessions": {
        "task": "bookings.expire_stale_range_sessions",
        "schedule": crontab(minute="*/15"),
        "options": {"expires": 600},
    },
    # Напоминания о ти-таймах на завтра - раз в день
    "send-upcoming-tee-time-reminders": {
        "task": "bookings.send_upcoming_tee_time_reminders",
        "schedule": crontab(minute=0, hour=18),
    },
}
