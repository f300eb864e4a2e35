"""Tests for periodic booking tasks."""

from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal

from django.core import mail
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.bookings.application.command_handlers import get_booking_service
from apps.bookings.models import RangeBooking, TeeTimeBooking
from apps.bookings.tasks import (
    complete_past_tee_times,
    expire_stale_range_sessions,
    send_upcoming_tee_time_reminders,
)
from apps.courses.models import Course
from apps.notifications.models import Notification
from apps.users.models import User


class BookingTasksTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="player@example.com", password="PlayerPass123")
        self.course = Course.objects.create(name="Ocean Links", green_fee_weekday=Decimal("50.00"))
        self.today = timezone.localdate()

    def _tee_time(self, day, status=TeeTimeBooking.Status.CONFIRMED) -> TeeTimeBooking:
        return TeeTimeBooking.objects.create(
            user=self.user,
            course=self.course,
            date=day,
            tee_time=time(10, 0),
            players=2,
            status=status,
            total_amount=Decimal("100.00"),
        )

    def test_past_confirmed_tee_times_are_completed(self) -> None:
        past = self._tee_time(self.today - timedelta(days=1))
        future = self._tee_time(self.today + timedelta(days=2))
        cancelled = self._tee_time(self.today - timedelta(days=2), status=TeeTimeBooking.Status.CANCELLED)

        result = complete_past_tee_times()

        self.assertEqual(result, {"completed": 1})
        past.refresh_from_db()
        future.refresh_from_db()
        cancelled.refresh_from_db()
        self.assertEqual(past.status, TeeTimeBooking.Status.COMPLETED)
        self.assertEqual(future.status, TeeTimeBooking.Status.CONFIRMED)
        self.assertEqual(cancelled.status, TeeTimeBooking.Status.CANCELLED)

    @override_settings(GOLF_BOOKING={"RANGE_SESSION_EXPIRY_MINUTES": 60})
    def test_stale_range_sessions_expire(self) -> None:
        stale = RangeBooking.objects.create(
            user=self.user,
            course=self.course,
            date=self.today - timedelta(days=1),
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.SMALL,
            bucket_count=2,
        )
        other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        fresh = RangeBooking.objects.create(
            user=other,
            course=self.course,
            date=self.today + timedelta(days=1),
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.SMALL,
            bucket_count=2,
        )

        result = expire_stale_range_sessions()

        self.assertEqual(result, {"expired": 1})
        stale.refresh_from_db()
        fresh.refresh_from_db()
        self.assertEqual(stale.status, RangeBooking.Status.EXPIRED)
        self.assertIsNotNone(stale.completed_at)
        self.assertEqual(fresh.status, RangeBooking.Status.ACTIVE)

    def test_reminders_for_tomorrow(self) -> None:
        self._tee_time(self.today + timedelta(days=1))
        self._tee_time(self.today + timedelta(days=1), status=TeeTimeBooking.Status.CANCELLED)
        self._tee_time(self.today + timedelta(days=3))

        result = send_upcoming_tee_time_reminders()

        self.assertEqual(result, {"sent": 1})
        reminder = Notification.objects.get(user=self.user)
        self.assertEqual(reminder.type, Notification.Type.BOOKING_REMINDER)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, [self.user.email])


class BookingMaintenanceServiceTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="player@example.com", password="PlayerPass123")
        self.course = Course.objects.create(name="Ocean Links", green_fee_weekday=Decimal("50.00"))
        self.service = get_booking_service()
        self.yesterday = timezone.localdate() - timedelta(days=1)

    def test_expiry_skips_session_completed_in_the_meantime(self) -> None:
        session = RangeBooking.objects.create(
            user=self.user,
            course=self.course,
            date=self.yesterday,
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.SMALL,
            bucket_count=2,
        )
        # Usage recorded after the task collected its candidates
        RangeBooking.objects.filter(pk=session.pk).update(
            status=RangeBooking.Status.COMPLETED,
            used_buckets=2,
        )

        expired = self.service.expire_range_session(session.pk, timezone.now())

        self.assertFalse(expired)
        session.refresh_from_db()
        self.assertEqual(session.status, RangeBooking.Status.COMPLETED)
        self.assertEqual(session.used_buckets, 2)

    def test_expiry_keeps_session_inside_grace_period(self) -> None:
        session = RangeBooking.objects.create(
            user=self.user,
            course=self.course,
            date=self.yesterday,
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.SMALL,
            bucket_count=2,
        )

        self.assertFalse(self.service.expire_range_session(session.pk, session.ends_at - timedelta(minutes=1)))
        self.assertTrue(self.service.expire_range_session(session.pk, session.ends_at))
        session.refresh_from_db()
        self.assertEqual(session.status, RangeBooking.Status.EXPIRED)

    def test_completion_skips_booking_cancelled_in_the_meantime(self) -> None:
        booking = TeeTimeBooking.objects.create(
            user=self.user,
            course=self.course,
            date=self.yesterday,
            tee_time=time(10, 0),
            players=2,
            status=TeeTimeBooking.Status.CANCELLED,
            total_amount=Decimal("100.00"),
        )

        self.assertFalse(self.service.complete_tee_time(booking.pk))
        booking.refresh_from_db()
        self.assertEqual(booking.status, TeeTimeBooking.Status.CANCELLED)
