"""Data access for bookings and slot occupancy.

Every repository is bound to an explicit database alias at construction.
"""

from __future__ import annotations

from datetime import date, time

from django.db import DEFAULT_DB_ALIAS, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.exceptions import NotFound

from .models import RangeBooking, SlotReservation, TeeTimeBooking


def _lock_queryset_if_possible(queryset, using: str):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(using).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


class TeeTimeBookingRepository:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def get(self, booking_id, *, lock: bool = False) -> TeeTimeBooking:
        qs = TeeTimeBooking.objects.using(self.using).select_related("course", "user")
        if lock:
            qs = _lock_queryset_if_possible(qs, self.using)
        try:
            return qs.get(pk=booking_id)
        except (TeeTimeBooking.DoesNotExist, ValueError, TypeError):
            raise NotFound("Бронирование не найдено.", details={"booking_id": booking_id})

    def save(self, booking: TeeTimeBooking, update_fields: list[str] | None = None) -> None:
        if update_fields is not None and "updated_at" not in update_fields:
            update_fields = [*update_fields, "updated_at"]
        booking.save(using=self.using, update_fields=update_fields)

    def for_user(self, user_id):
        return (
            TeeTimeBooking.objects.using(self.using)
            .select_related("course", "user")
            .filter(user_id=user_id)
            .order_by("-date", "-tee_time")
        )


class SlotReservationRepository:
    """Occupancy rows; the unique (course, date, tee_time) index decides conflicts."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def reserved_times(self, course_id, on_date: date) -> set[time]:
        return set(
            SlotReservation.objects.using(self.using)
            .filter(course_id=course_id, date=on_date)
            .values_list("tee_time", flat=True)
        )

    def insert(self, booking: TeeTimeBooking) -> SlotReservation:
        """Insert the occupancy row; raises IntegrityError when the key is held."""

        return SlotReservation.objects.using(self.using).create(
            course_id=booking.course_id,
            date=booking.date,
            tee_time=booking.tee_time,
            booking=booking,
        )

    def delete(self, course_id, on_date: date, slot_time: time) -> int:
        deleted, _ = (
            SlotReservation.objects.using(self.using)
            .filter(course_id=course_id, date=on_date, tee_time=slot_time)
            .delete()
        )
        return deleted


class RangeBookingRepository:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def get(self, booking_id, *, lock: bool = False) -> RangeBooking:
        qs = RangeBooking.objects.using(self.using).select_related("course", "user")
        if lock:
            qs = _lock_queryset_if_possible(qs, self.using)
        try:
            return qs.get(pk=booking_id)
        except (RangeBooking.DoesNotExist, ValueError, TypeError):
            raise NotFound("Сессия на рейндже не найдена.", details={"booking_id": booking_id})

    def save(self, booking: RangeBooking, update_fields: list[str] | None = None) -> None:
        if update_fields is not None and "updated_at" not in update_fields:
            update_fields = [*update_fields, "updated_at"]
        booking.save(using=self.using, update_fields=update_fields)

    def for_user(self, user_id):
        return (
            RangeBooking.objects.using(self.using)
            .select_related("course", "user")
            .filter(user_id=user_id)
            .order_by("-date", "-start_time")
        )
