"""Concurrent reservations of one slot: exactly one request wins.

Each worker thread opens its own connection, so the test database must be
shared between connections (the file-backed SQLite of the test settings,
or PostgreSQL).
"""

from __future__ import annotations

import threading
from datetime import time, timedelta
from decimal import Decimal

from django.db import connections
from django.test import TransactionTestCase
from django.utils import timezone

from apps.bookings.application.command_handlers import (
    CreateRangeBookingCommand,
    CreateTeeTimeBookingCommand,
    get_booking_service,
)
from apps.bookings.models import RangeBooking, SlotReservation, TeeTimeBooking
from apps.courses.models import Course
from apps.users.models import User
from shared.domain.exceptions import ActiveSessionExists, SlotTaken

WORKERS = 8


class ConcurrentReservationTests(TransactionTestCase):
    def setUp(self) -> None:
        self.course = Course.objects.create(name="Ocean Links", green_fee_weekday=Decimal("50.00"))
        self.users = [
            User.objects.create_user(email=f"player{i}@example.com", password="PlayerPass123")
            for i in range(WORKERS)
        ]
        self.day = timezone.localdate() + timedelta(days=3)

    def _run_concurrently(self, target) -> tuple[list, list]:
        barrier = threading.Barrier(WORKERS)
        results: list = []
        errors: list = []
        lock = threading.Lock()

        def worker(user):
            try:
                barrier.wait()
                outcome = target(user)
                with lock:
                    results.append(outcome)
            except Exception as exc:  # collected and asserted on below
                with lock:
                    errors.append(exc)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=worker, args=(user,)) for user in self.users]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return results, errors

    def test_one_winner_per_slot(self) -> None:
        def book(user):
            return get_booking_service().create_tee_time_booking(
                CreateTeeTimeBookingCommand(
                    user=user,
                    course_id=self.course.pk,
                    date=self.day,
                    tee_time=time(10, 0),
                    players=2,
                )
            )

        results, errors = self._run_concurrently(book)

        self.assertEqual(len(results), 1)
        self.assertEqual(len(errors), WORKERS - 1)
        self.assertTrue(all(isinstance(err, SlotTaken) for err in errors), errors)
        self.assertEqual(TeeTimeBooking.objects.count(), 1)
        self.assertEqual(SlotReservation.objects.count(), 1)

    def test_one_active_range_session_per_user(self) -> None:
        player = self.users[0]

        def open_session(_user):
            return get_booking_service().create_range_booking(
                CreateRangeBookingCommand(
                    user=player,
                    course_id=self.course.pk,
                    date=timezone.localdate(),
                    start_time=time(9, 0),
                    bucket_size="small",
                    bucket_count=1,
                )
            )

        results, errors = self._run_concurrently(open_session)

        self.assertEqual(len(results), 1)
        self.assertTrue(all(isinstance(err, ActiveSessionExists) for err in errors), errors)
        self.assertEqual(RangeBooking.objects.filter(user=player, status="active").count(), 1)
