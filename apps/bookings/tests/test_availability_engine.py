"""Tests for slot listing, request validation and slot exclusivity."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from django.utils import timezone

from apps.bookings.models import SlotReservation, TeeTimeBooking
from apps.bookings.services import AvailabilityEngine
from apps.courses.models import Course
from apps.users.models import User
from shared.domain.exceptions import SlotTaken, ValidationFailed


class AvailabilityEngineTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="player@example.com", password="PlayerPass123")
        self.course = Course.objects.create(
            name="Ocean Links",
            green_fee_weekday=Decimal("50.00"),
            green_fee_weekend=Decimal("70.00"),
            open_time=time(7, 0),
            close_time=time(19, 0),
            slot_duration=15,
            max_players_per_slot=4,
            booking_advance_days=14,
        )
        self.engine = AvailabilityEngine()
        self.day = timezone.localdate() + timedelta(days=3)

    def _booking(self, slot_time: time = time(10, 0), players: int = 2) -> TeeTimeBooking:
        return TeeTimeBooking(
            user=self.user,
            course=self.course,
            date=self.day,
            tee_time=slot_time,
            players=players,
            green_fee=Decimal("50.00"),
            total_amount=Decimal("50.00") * players,
        )

    def test_lists_full_grid_for_empty_day(self) -> None:
        slots = self.engine.list_available_slots(self.course, self.day)

        self.assertEqual(len(slots), 48)
        self.assertEqual(slots[0].to_dict(), {"time": "07:00", "max_players": 4})
        self.assertEqual(slots[-1].time, time(18, 45))

    def test_reserved_slot_is_not_listed(self) -> None:
        self.engine.try_reserve(self._booking(time(10, 0)))

        times = [slot.time for slot in self.engine.list_available_slots(self.course, self.day)]
        self.assertNotIn(time(10, 0), times)
        self.assertEqual(len(times), 47)

    def test_past_date_has_no_slots(self) -> None:
        yesterday = timezone.localdate() - timedelta(days=1)
        self.assertEqual(self.engine.list_available_slots(self.course, yesterday), [])

    def test_today_skips_elapsed_slots(self) -> None:
        today = timezone.localdate()
        fake_now = timezone.make_aware(datetime.combine(today, time(12, 0)))
        with mock.patch("django.utils.timezone.now", return_value=fake_now):
            slots = self.engine.list_available_slots(self.course, today)

        self.assertEqual(slots[0].time, time(12, 15))

    def test_second_reservation_of_same_slot_fails(self) -> None:
        self.engine.try_reserve(self._booking(time(10, 0)))

        with self.assertRaises(SlotTaken):
            self.engine.try_reserve(self._booking(time(10, 0)))

        # The losing booking row is rolled back together with its claim
        self.assertEqual(TeeTimeBooking.objects.count(), 1)
        self.assertEqual(SlotReservation.objects.count(), 1)

    def test_release_is_idempotent(self) -> None:
        booking = self.engine.try_reserve(self._booking(time(11, 0)))

        self.assertTrue(self.engine.release(booking.course_id, booking.date, booking.tee_time))
        self.assertFalse(self.engine.release(booking.course_id, booking.date, booking.tee_time))
        self.assertFalse(SlotReservation.objects.exists())

    def test_released_slot_can_be_reserved_again(self) -> None:
        first = self.engine.try_reserve(self._booking(time(11, 0)))
        first.status = TeeTimeBooking.Status.CANCELLED
        first.save(update_fields=["status"])
        self.engine.release(first.course_id, first.date, first.tee_time)

        second = self.engine.try_reserve(self._booking(time(11, 0)))
        self.assertEqual(second.slot_reservation.tee_time, time(11, 0))

    def test_validate_rejects_off_grid_time(self) -> None:
        with self.assertRaises(ValidationFailed):
            self.engine.validate_request(self.course, self.day, time(10, 7), 2)

    def test_validate_rejects_time_outside_hours(self) -> None:
        with self.assertRaises(ValidationFailed):
            self.engine.validate_request(self.course, self.day, time(19, 0), 2)

    def test_validate_rejects_party_size(self) -> None:
        with self.assertRaises(ValidationFailed):
            self.engine.validate_request(self.course, self.day, time(10, 0), 0)
        with self.assertRaises(ValidationFailed):
            self.engine.validate_request(self.course, self.day, time(10, 0), 5)

    def test_validate_rejects_past_and_too_far_ahead(self) -> None:
        with self.assertRaises(ValidationFailed):
            self.engine.validate_request(self.course, timezone.localdate() - timedelta(days=1), time(10, 0), 2)

        too_far = timezone.localdate() + timedelta(days=self.course.booking_advance_days + 1)
        with self.assertRaises(ValidationFailed):
            self.engine.validate_request(self.course, too_far, time(10, 0), 2)

    def test_last_advance_day_is_bookable(self) -> None:
        last_day = timezone.localdate() + timedelta(days=self.course.booking_advance_days)
        self.engine.validate_request(self.course, last_day, time(10, 0), 4)

    def test_slot_of_cancelled_booking_is_listed(self) -> None:
        booking = self.engine.try_reserve(self._booking(time(9, 30)))
        booking.status = TeeTimeBooking.Status.CANCELLED
        booking.save(update_fields=["status"])
        self.engine.release(booking.course_id, booking.date, booking.tee_time)

        times = [slot.time for slot in self.engine.list_available_slots(self.course, self.day)]

        self.assertTrue(TeeTimeBooking.objects.filter(date=self.day).exists())
        self.assertIn(time(9, 30), times)
        self.assertEqual(len(times), 48)

    def test_dates_beyond_advance_window_have_no_slots(self) -> None:
        last_day = self.course.last_bookable_date()

        self.assertEqual(len(self.engine.list_available_slots(self.course, last_day)), 48)
        self.assertEqual(self.engine.list_available_slots(self.course, last_day + timedelta(days=1)), [])
