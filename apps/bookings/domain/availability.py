"""
Tee-Time Slot Grid

Pure helpers describing the discrete tee-time grid of a course:
- TimeSlotKey: (course, date, time) identity of one bookable cell
- SlotGrid: the half-open [open, close) grid in fixed steps
- AvailableSlot: one free cell as returned to clients
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator


@dataclass(frozen=True)
class TimeSlotKey:
    """Identity of one tee-time cell; at most one live booking per key"""
    course_id: int
    date: date
    time: time

    def __str__(self):
        return f"course={self.course_id} {self.date.isoformat()} {self.time:%H:%M}"


@dataclass(frozen=True)
class AvailableSlot:
    time: time
    max_players: int

    def to_dict(self) -> dict:
        return {
            'time': self.time.strftime('%H:%M'),
            'max_players': self.max_players,
        }


@dataclass(frozen=True)
class SlotGrid:
    """
    Deterministic tee-time grid for one course

    Slots start at every step t with open_time <= t < close_time, so a
    07:00-19:00 window in 15-minute steps yields 48 slots.
    """
    open_time: time
    close_time: time
    step_minutes: int

    def __post_init__(self):
        if self.step_minutes <= 0:
            raise ValueError("Slot step must be positive")
        if self.open_time >= self.close_time:
            raise ValueError("Close time must be after open time")

    @classmethod
    def for_course(cls, course) -> 'SlotGrid':
        return cls(
            open_time=course.open_time,
            close_time=course.close_time,
            step_minutes=course.slot_duration,
        )

    def times(self) -> Iterator[time]:
        """Yield slot start times in ascending order"""
        anchor = date.min
        current = datetime.combine(anchor, self.open_time)
        end = datetime.combine(anchor, self.close_time)
        step = timedelta(minutes=self.step_minutes)
        while current < end:
            yield current.time()
            current += step

    def contains(self, slot_time: time) -> bool:
        """True when slot_time is exactly one of the grid's start times"""
        if slot_time.second or slot_time.microsecond:
            return False
        if not (self.open_time <= slot_time < self.close_time):
            return False
        offset = (
            datetime.combine(date.min, slot_time) - datetime.combine(date.min, self.open_time)
        )
        return (offset.total_seconds() / 60) % self.step_minutes == 0

    def __len__(self):
        return sum(1 for _ in self.times())
