"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateTeeTimeBookingCommand: Price and reserve a tee time
- CreateRangeBookingCommand: Open a driving-range session
- CancelBookingCommand: Cancel a tee time and release its slot
- UpdateBucketUsageCommand: Record used buckets of a range session
- EndRangeSessionCommand: Close a range session early
- UpdateBookingStatusCommand: Staff override of booking status
"""

from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Any, Optional
import logging

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, IntegrityError
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ActiveSessionExists, PreconditionFailed, ValidationFailed
from apps.courses.repositories import CourseRepository, HolidayRepository
from apps.users.access import Permission, authorize
from apps.bookings.domain import pricing
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCreated,
    BookingStatusChanged,
    RangeBookingCreated,
    RangeSessionCompleted,
)
from apps.bookings.models import RangeBooking, TeeTimeBooking
from apps.bookings.repositories import RangeBookingRepository, TeeTimeBookingRepository
from apps.bookings.services import AvailabilityEngine

logger = logging.getLogger(__name__)


def booking_settings() -> dict:
    defaults = {
        'CURRENCY': 'USD',
        'CANCELLATION_LEAD_HOURS': 24,
        'RANGE_SESSION_EXPIRY_MINUTES': 120,
        'DATABASE_ALIAS': DEFAULT_DB_ALIAS,
    }
    return {**defaults, **getattr(settings, 'GOLF_BOOKING', {})}


# ===== Commands =====

@dataclass
class CreateTeeTimeBookingCommand:
    """
    Command to book a tee time

    This is the primary entry point for creating tee-time bookings.
    """
    user: Any
    course_id: int
    date: date
    tee_time: time
    players: int
    special_requests: str = ''


@dataclass
class CreateRangeBookingCommand:
    """Command to open a driving-range session"""
    user: Any
    course_id: int
    date: date
    start_time: time
    bucket_size: str
    bucket_count: int
    duration_minutes: int = 60
    bay_number: Optional[int] = None
    notes: str = ''


@dataclass
class CancelBookingCommand:
    """Command to cancel a tee-time booking"""
    booking_id: int
    requested_by: Any


@dataclass
class UpdateBucketUsageCommand:
    """Command to record how many buckets of a range session were used"""
    booking_id: int
    used_buckets: int
    requested_by: Any


@dataclass
class EndRangeSessionCommand:
    """Command to close an active range session before all buckets are used"""
    booking_id: int
    requested_by: Any


@dataclass
class UpdateBookingStatusCommand:
    """Command for staff to override status and payment status"""
    booking_id: int
    status: str
    requested_by: Any
    payment_status: Optional[str] = None


# ===== Command Handlers =====

class CreateTeeTimeBookingHandler:
    """
    Handler for CreateTeeTimeBooking command

    Strategy:
    1. Resolve the active course (inactive counts as absent)
    2. Classify the date and price the party once
    3. Hand the booking to the availability engine, which inserts the
       booking and its slot row in one transaction
    4. A unique-index violation on the slot surfaces as SlotTaken
    5. Publish BookingCreated after commit
    """

    def __init__(self, engine, course_repo, holiday_repo, using=DEFAULT_DB_ALIAS):
        self.engine = engine
        self.course_repo = course_repo
        self.holiday_repo = holiday_repo
        self.using = using

    def handle(self, command: CreateTeeTimeBookingCommand) -> TeeTimeBooking:
        logger.info(
            f"Creating tee-time booking for course {command.course_id}, "
            f"user {command.user.pk}, {command.date} {command.tee_time:%H:%M}, "
            f"players {command.players}"
        )
        currency = booking_settings()['CURRENCY']

        course = self.course_repo.get_active(command.course_id)
        day_type = pricing.classify_day(command.date, self.holiday_repo.is_holiday(command.date))
        fee = pricing.green_fee(course, day_type, currency)
        total = pricing.tee_time_total(fee, command.players)

        with DjangoUnitOfWork(using=self.using) as uow:
            booking = TeeTimeBooking(
                user=command.user,
                course=course,
                date=command.date,
                tee_time=command.tee_time,
                players=command.players,
                special_requests=command.special_requests,
                status=TeeTimeBooking.Status.CONFIRMED,
                payment_status=TeeTimeBooking.PaymentStatus.PENDING,
                green_fee=fee.amount,
                total_amount=total.amount,
                currency=currency,
            )
            self.engine.try_reserve(booking)

            booking.add_event(BookingCreated(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                course_id=course.pk,
                date=booking.date,
                tee_time=booking.tee_time,
                players=booking.players,
                total_amount=total,
            ))
            uow.collect_events(booking)

        logger.info(
            f"Tee-time booking created: {booking.booking_code} "
            f"(ID: {booking.pk}, {day_type.value} fee {fee}, total {total})"
        )
        return booking


class CreateRangeBookingHandler:
    """
    Handler for CreateRangeBooking command

    One active session per user is enforced by a partial unique index,
    so two concurrent requests cannot both open a session.
    """

    def __init__(self, range_repo, course_repo, using=DEFAULT_DB_ALIAS):
        self.range_repo = range_repo
        self.course_repo = course_repo
        self.using = using

    def handle(self, command: CreateRangeBookingCommand) -> RangeBooking:
        logger.info(
            f"Creating range booking for user {command.user.pk}, course {command.course_id}, "
            f"{command.bucket_count}x{command.bucket_size}"
        )
        currency = booking_settings()['CURRENCY']

        unit_price = pricing.bucket_unit_price(command.bucket_size, currency)
        total = pricing.range_total(command.bucket_size, command.bucket_count, currency)
        course = self.course_repo.get_active(command.course_id)

        if command.date < timezone.localdate():
            raise ValidationFailed(
                "Нельзя забронировать рейндж на прошедшую дату.",
                details={'date': command.date.isoformat()},
            )

        booking = RangeBooking(
            user=command.user,
            course=course,
            date=command.date,
            start_time=command.start_time,
            duration_minutes=command.duration_minutes,
            bay_number=command.bay_number,
            bucket_size=command.bucket_size,
            bucket_count=command.bucket_count,
            used_buckets=0,
            unit_price=unit_price.amount,
            total_amount=total.amount,
            currency=currency,
            status=RangeBooking.Status.ACTIVE,
            notes=command.notes,
        )

        try:
            with DjangoUnitOfWork(using=self.using) as uow:
                self.range_repo.save(booking)
                booking.add_event(RangeBookingCreated(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    user_id=booking.user_id,
                    course_id=course.pk,
                    bucket_size=booking.bucket_size,
                    bucket_count=booking.bucket_count,
                    total_amount=total,
                ))
                uow.collect_events(booking)
        except IntegrityError as exc:
            logger.info(f"User {command.user.pk} already has an active range session")
            raise ActiveSessionExists(
                "У вас уже есть активная сессия на рейндже.",
                details={'user_id': command.user.pk},
            ) from exc

        logger.info(f"Range booking created: ID {booking.pk}, total {total}")
        return booking


class CancelBookingHandler:
    """Handler for cancelling a tee-time booking and releasing its slot"""

    def __init__(self, engine, booking_repo, using=DEFAULT_DB_ALIAS):
        self.engine = engine
        self.booking_repo = booking_repo
        self.using = using

    def handle(self, command: CancelBookingCommand) -> TeeTimeBooking:
        logger.info(f"Cancelling booking {command.booking_id}, requested by {command.requested_by.pk}")
        lead_hours = booking_settings()['CANCELLATION_LEAD_HOURS']

        with DjangoUnitOfWork(using=self.using) as uow:
            booking = self.booking_repo.get(command.booking_id, lock=True)
            authorize(command.requested_by, Permission.CANCEL_BOOKING, owner_id=booking.user_id)

            if booking.status in (TeeTimeBooking.Status.CANCELLED, TeeTimeBooking.Status.COMPLETED):
                raise PreconditionFailed(
                    f"Бронирование в статусе «{booking.get_status_display()}» нельзя отменить.",
                    details={'status': booking.status},
                )

            # Закрытая граница: ровно 24 часа до начала ещё можно отменить
            remaining = booking.starts_at - timezone.now()
            if remaining < timedelta(hours=lead_hours):
                raise PreconditionFailed(
                    f"Отмена возможна не позднее чем за {lead_hours} ч до начала.",
                    details={
                        'starts_at': booking.starts_at.isoformat(),
                        'lead_hours': lead_hours,
                    },
                )

            booking.status = TeeTimeBooking.Status.CANCELLED
            booking.cancelled_at = timezone.now()
            self.booking_repo.save(booking, update_fields=['status', 'cancelled_at'])
            self.engine.release(booking.course_id, booking.date, booking.tee_time)

            booking.add_event(BookingCancelled(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                course_id=booking.course_id,
                date=booking.date,
                tee_time=booking.tee_time,
                cancelled_by=command.requested_by.pk,
            ))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_code} cancelled successfully")
        return booking


class UpdateBucketUsageHandler:
    """Handler for recording used buckets of a range session"""

    def __init__(self, range_repo, using=DEFAULT_DB_ALIAS):
        self.range_repo = range_repo
        self.using = using

    def handle(self, command: UpdateBucketUsageCommand) -> RangeBooking:
        logger.info(f"Updating bucket usage of range booking {command.booking_id} to {command.used_buckets}")

        if command.used_buckets < 0:
            raise ValidationFailed(
                "Количество использованных корзин не может быть отрицательным.",
                details={'used_buckets': command.used_buckets},
            )

        with DjangoUnitOfWork(using=self.using) as uow:
            booking = self.range_repo.get(command.booking_id, lock=True)
            authorize(command.requested_by, Permission.RECORD_BUCKET_USAGE, owner_id=booking.user_id)

            if booking.status != RangeBooking.Status.ACTIVE:
                raise PreconditionFailed(
                    "Сессия на рейндже не активна.",
                    details={'status': booking.status},
                )
            if command.used_buckets > booking.bucket_count:
                raise PreconditionFailed(
                    "Нельзя использовать больше корзин, чем забронировано.",
                    details={
                        'used_buckets': command.used_buckets,
                        'bucket_count': booking.bucket_count,
                    },
                )

            booking.used_buckets = command.used_buckets
            update_fields = ['used_buckets']
            if booking.used_buckets >= booking.bucket_count:
                booking.status = RangeBooking.Status.COMPLETED
                booking.completed_at = timezone.now()
                update_fields += ['status', 'completed_at']
                booking.add_event(RangeSessionCompleted(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    user_id=booking.user_id,
                    used_buckets=booking.used_buckets,
                    bucket_count=booking.bucket_count,
                ))
            self.range_repo.save(booking, update_fields=update_fields)
            uow.collect_events(booking)

        return booking


class EndRangeSessionHandler:
    """Handler for closing an active range session early"""

    def __init__(self, range_repo, using=DEFAULT_DB_ALIAS):
        self.range_repo = range_repo
        self.using = using

    def handle(self, command: EndRangeSessionCommand) -> RangeBooking:
        with DjangoUnitOfWork(using=self.using) as uow:
            booking = self.range_repo.get(command.booking_id, lock=True)
            authorize(command.requested_by, Permission.RECORD_BUCKET_USAGE, owner_id=booking.user_id)

            if booking.status != RangeBooking.Status.ACTIVE:
                raise PreconditionFailed(
                    "Сессия на рейндже не активна.",
                    details={'status': booking.status},
                )

            booking.status = RangeBooking.Status.COMPLETED
            booking.completed_at = timezone.now()
            self.range_repo.save(booking, update_fields=['status', 'completed_at'])
            booking.add_event(RangeSessionCompleted(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                used_buckets=booking.used_buckets,
                bucket_count=booking.bucket_count,
            ))
            uow.collect_events(booking)

        logger.info(f"Range session {booking.pk} ended with {booking.used_buckets}/{booking.bucket_count} buckets")
        return booking


class UpdateBookingStatusHandler:
    """
    Handler for the staff status override

    Any status may move to any status. Slot occupancy still goes through
    the engine: entering "cancelled" releases the slot, leaving it
    re-claims the slot and may fail with SlotTaken.
    """

    def __init__(self, engine, booking_repo, using=DEFAULT_DB_ALIAS):
        self.engine = engine
        self.booking_repo = booking_repo
        self.using = using

    def handle(self, command: UpdateBookingStatusCommand) -> TeeTimeBooking:
        if command.status not in TeeTimeBooking.Status.values:
            raise ValidationFailed(
                "Недопустимый статус бронирования.",
                details={'status': command.status, 'allowed': TeeTimeBooking.Status.values},
            )
        if command.payment_status and command.payment_status not in TeeTimeBooking.PaymentStatus.values:
            raise ValidationFailed(
                "Недопустимый статус оплаты.",
                details={
                    'payment_status': command.payment_status,
                    'allowed': TeeTimeBooking.PaymentStatus.values,
                },
            )

        with DjangoUnitOfWork(using=self.using) as uow:
            authorize(command.requested_by, Permission.MANAGE_BOOKINGS)
            booking = self.booking_repo.get(command.booking_id, lock=True)
            old_status, old_payment_status = booking.status, booking.payment_status
            was_live = booking.holds_slot

            booking.status = command.status
            if command.payment_status:
                booking.payment_status = command.payment_status
            update_fields = ['status', 'payment_status']

            if was_live and not booking.holds_slot:
                booking.cancelled_at = timezone.now()
                update_fields.append('cancelled_at')
                self.engine.release(booking.course_id, booking.date, booking.tee_time)
            elif not was_live and booking.holds_slot:
                booking.cancelled_at = None
                update_fields.append('cancelled_at')
                self.engine.claim(booking)

            self.booking_repo.save(booking, update_fields=update_fields)

            booking.add_event(BookingStatusChanged(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=booking.user_id,
                old_status=old_status,
                new_status=booking.status,
                old_payment_status=old_payment_status,
                new_payment_status=booking.payment_status,
            ))
            uow.collect_events(booking)

        logger.info(
            f"Booking {booking.booking_code} status {old_status} -> {booking.status}, "
            f"payment {old_payment_status} -> {booking.payment_status} "
            f"by user {command.requested_by.pk}"
        )
        return booking


# ===== Service facade =====

class BookingService:
    """
    Entry point used by the HTTP layer and background tasks

    Wires handlers to repositories and the availability engine that all
    share one database alias.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS, engine: Optional[AvailabilityEngine] = None):
        self.using = using
        self.engine = engine or AvailabilityEngine(using=using)
        self.bookings = TeeTimeBookingRepository(using=using)
        self.ranges = RangeBookingRepository(using=using)
        self.courses = CourseRepository(using=using)
        self.holidays = HolidayRepository(using=using)

    def create_tee_time_booking(self, command: CreateTeeTimeBookingCommand) -> TeeTimeBooking:
        return CreateTeeTimeBookingHandler(
            self.engine, self.courses, self.holidays, using=self.using
        ).handle(command)

    def create_range_booking(self, command: CreateRangeBookingCommand) -> RangeBooking:
        return CreateRangeBookingHandler(self.ranges, self.courses, using=self.using).handle(command)

    def cancel_booking(self, command: CancelBookingCommand) -> TeeTimeBooking:
        return CancelBookingHandler(self.engine, self.bookings, using=self.using).handle(command)

    def update_bucket_usage(self, command: UpdateBucketUsageCommand) -> RangeBooking:
        return UpdateBucketUsageHandler(self.ranges, using=self.using).handle(command)

    def end_range_session(self, command: EndRangeSessionCommand) -> RangeBooking:
        return EndRangeSessionHandler(self.ranges, using=self.using).handle(command)

    def update_booking_status(self, command: UpdateBookingStatusCommand) -> TeeTimeBooking:
        return UpdateBookingStatusHandler(self.engine, self.bookings, using=self.using).handle(command)

    def complete_tee_time(self, booking_id, now=None) -> bool:
        """
        Mark a played tee time completed.

        The row is locked and re-checked, so a booking cancelled in the
        meantime is left alone. The slot stays held by the completed booking.
        """
        now = now or timezone.localtime()
        with DjangoUnitOfWork(using=self.using):
            booking = self.bookings.get(booking_id, lock=True)
            if booking.status != TeeTimeBooking.Status.CONFIRMED or booking.starts_at > now:
                return False
            booking.status = TeeTimeBooking.Status.COMPLETED
            self.bookings.save(booking, update_fields=['status'])

        logger.info(f"Booking {booking.booking_code} completed")
        return True

    def expire_range_session(self, booking_id, cutoff) -> bool:
        """Expire an active session whose end lies before ``cutoff``."""
        with DjangoUnitOfWork(using=self.using):
            session = self.ranges.get(booking_id, lock=True)
            if session.status != RangeBooking.Status.ACTIVE or session.ends_at > cutoff:
                return False
            session.status = RangeBooking.Status.EXPIRED
            session.completed_at = timezone.now()
            self.ranges.save(session, update_fields=['status', 'completed_at'])

        logger.info(f"Range session {session.pk} expired automatically")
        return True


def get_booking_service() -> BookingService:
    """Service bound to the configured booking database alias."""
    return BookingService(using=booking_settings()['DATABASE_ALIAS'])
