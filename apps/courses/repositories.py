"""Data access for the course catalogue.

Repositories receive the database alias explicitly; nothing here reaches
for a module-level connection.
"""

from __future__ import annotations

from datetime import date

from django.db import DEFAULT_DB_ALIAS  # type: ignore

from shared.domain.exceptions import NotFound

from .models import Course, Holiday


class CourseRepository:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def get_active(self, course_id) -> Course:
        """Return an active course or raise NotFound (inactive counts as absent)."""

        try:
            return Course.objects.using(self.using).active().get(pk=course_id)
        except (Course.DoesNotExist, ValueError, TypeError):
            raise NotFound(
                "Гольф-поле не найдено или неактивно.",
                details={"course_id": course_id},
            )


class HolidayRepository:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def is_holiday(self, on_date: date) -> bool:
        return Holiday.objects.using(self.using).filter(date=on_date).exists()
