"""Availability engine for tee-time slots.

The engine is the only writer of slot occupancy. Exclusivity of a
(course, date, time) cell comes from the unique index on
``SlotReservation``: a reservation is an INSERT, and the resulting
IntegrityError is the conflict signal. No read decides a conflict.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import SlotTaken, ValidationFailed

from .domain.availability import AvailableSlot, SlotGrid, TimeSlotKey
from .repositories import SlotReservationRepository

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.courses.models import Course

    from .models import SlotReservation, TeeTimeBooking

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    """Answers "which slots are free" and adjudicates reservations."""

    def __init__(
        self,
        using: str = DEFAULT_DB_ALIAS,
        slots: SlotReservationRepository | None = None,
    ):
        self.using = using
        self.slots = slots or SlotReservationRepository(using=using)

    def list_available_slots(self, course: "Course", on_date: date) -> list[AvailableSlot]:
        """Free grid cells for a date, ordered by time; recomputed on every call."""

        now = timezone.localtime()
        if on_date < now.date() or on_date > course.last_bookable_date(now.date()):
            return []

        taken = self.slots.reserved_times(course.pk, on_date)
        grid = SlotGrid.for_course(course)
        slots = []
        for slot_time in grid.times():
            if slot_time in taken:
                continue
            if on_date == now.date() and slot_time <= now.time():
                continue
            slots.append(AvailableSlot(slot_time, course.max_players_per_slot))
        return slots

    def validate_request(self, course: "Course", on_date: date, slot_time: time, players: int) -> None:
        """Reject requests that can never be satisfied, before touching storage."""

        key = TimeSlotKey(course.pk, on_date, slot_time)
        if players < 1 or players > course.max_players_per_slot:
            raise ValidationFailed(
                f"Количество игроков должно быть от 1 до {course.max_players_per_slot}.",
                details={"players": players, "max_players": course.max_players_per_slot},
            )

        if not SlotGrid.for_course(course).contains(slot_time):
            raise ValidationFailed(
                "Время не соответствует сетке ти-таймов поля.",
                details={
                    "tee_time": slot_time.strftime("%H:%M"),
                    "open_time": course.open_time.strftime("%H:%M"),
                    "close_time": course.close_time.strftime("%H:%M"),
                    "slot_duration": course.slot_duration,
                },
            )

        now = timezone.localtime()
        starts_at = timezone.make_aware(datetime.combine(on_date, slot_time))
        if starts_at <= now:
            raise ValidationFailed(
                "Нельзя забронировать время в прошлом.",
                details={"slot": str(key)},
            )

        last_date = course.last_bookable_date(now.date())
        if on_date > last_date:
            raise ValidationFailed(
                f"Бронирование открыто не более чем на {course.booking_advance_days} дней вперёд.",
                details={"last_bookable_date": last_date.isoformat()},
            )

    def try_reserve(self, booking: "TeeTimeBooking") -> "TeeTimeBooking":
        """
        Persist the booking and claim its slot as one atomic unit.

        Raises SlotTaken when another live booking holds the cell; the
        booking row is rolled back together with the failed claim.
        """

        self.validate_request(booking.course, booking.date, booking.tee_time, booking.players)
        with transaction.atomic(using=self.using):
            booking.save(using=self.using)
            self.claim(booking)
        logger.info(f"Reserved {booking.slot_key} for booking {booking.booking_code}")
        return booking

    def claim(self, booking: "TeeTimeBooking") -> "SlotReservation":
        """Insert the occupancy row for an existing booking (savepoint-scoped)."""

        try:
            with transaction.atomic(using=self.using):
                return self.slots.insert(booking)
        except IntegrityError as exc:
            logger.info(f"Slot {booking.slot_key} already taken")
            raise SlotTaken(
                "Это время уже забронировано. Выберите другой ти-тайм.",
                details={
                    "course_id": booking.course_id,
                    "date": booking.date.isoformat(),
                    "tee_time": booking.tee_time.strftime("%H:%M"),
                },
            ) from exc

    def release(self, course_id, on_date: date, slot_time: time) -> bool:
        """Free a slot. Idempotent: releasing a free slot returns False."""

        released = self.slots.delete(course_id, on_date, slot_time) > 0
        if released:
            logger.info(f"Released {TimeSlotKey(course_id, on_date, slot_time)}")
        return released
