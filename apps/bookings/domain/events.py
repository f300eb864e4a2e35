"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money


# ===== Tee-time events =====

@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A tee-time booking was created (slot reserved)

    Triggers:
    - Confirmation notification and email to the player
    """
    booking_id: int
    user_id: int
    course_id: int
    date: date
    tee_time: time
    players: int
    total_amount: Money


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: A tee-time booking was cancelled and its slot released

    Triggers:
    - Cancellation notification to the player
    - Refund of a completed payment
    """
    booking_id: int
    user_id: int
    course_id: int
    date: date
    tee_time: time
    cancelled_by: Optional[int]


@dataclass
class BookingStatusChanged(DomainEvent):
    """
    Event: Staff overrode the status of a tee-time booking

    Triggers:
    - Status notification to the player
    """
    booking_id: int
    user_id: int
    old_status: str
    new_status: str
    old_payment_status: str
    new_payment_status: str


# ===== Driving-range events =====

@dataclass
class RangeBookingCreated(DomainEvent):
    """Event: A driving-range session was opened"""
    booking_id: int
    user_id: int
    course_id: int
    bucket_size: str
    bucket_count: int
    total_amount: Money


@dataclass
class RangeSessionCompleted(DomainEvent):
    """Event: All booked buckets were used or the session was ended"""
    booking_id: int
    user_id: int
    used_buckets: int
    bucket_count: int
