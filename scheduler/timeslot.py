"""
Time Slot Module
Weekly meeting intervals and the overlap predicate every other stage relies on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

MINUTES_PER_DAY = 24 * 60


class Day(str, Enum):
    """Day of the week, ordered Monday first."""
    MON = 'MON'
    TUE = 'TUE'
    WED = 'WED'
    THU = 'THU'
    FRI = 'FRI'
    SAT = 'SAT'
    SUN = 'SUN'

    @property
    def position(self) -> int:
        return DAY_ORDER.index(self)


DAY_ORDER = list(Day)
WEEKDAYS = DAY_ORDER[:5]


def parse_clock_strict(value: str) -> int:
    """Parse 'HH:MM' (24h) into minutes since midnight."""
    try:
        hours, minutes = value.split(':')
        hours, minutes = int(hours), int(minutes)
    except (AttributeError, ValueError):
        raise ValueError(f'Invalid time format: {value!r}')
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f'Invalid time format: {value!r}')
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as 'HH:MM'."""
    return f'{minutes // 60:02d}:{minutes % 60:02d}'


@dataclass(frozen=True)
class TimeSlot:
    """One weekly meeting: a half-open [start, end) minute range on a day."""
    day: Day
    start: int
    end: int

    @classmethod
    def from_strings(cls, day, start: str, end: str) -> 'TimeSlot':
        if not isinstance(day, Day):
            day = Day(str(day).strip().upper())
        slot = cls(day, parse_clock_strict(start), parse_clock_strict(end))
        if not slot.is_valid:
            raise ValueError(f'Start must be before end: {start}-{end}')
        return slot

    @property
    def is_valid(self) -> bool:
        return (
            isinstance(self.day, Day)
            and isinstance(self.start, int)
            and isinstance(self.end, int)
            and 0 <= self.start < self.end <= MINUTES_PER_DAY
        )

    @property
    def duration(self) -> int:
        return self.end - self.start

    def to_dict(self):
        return {
            'day': self.day.value,
            'startTime': format_minutes(self.start),
            'endTime': format_minutes(self.end),
        }

    def __str__(self):
        return f'{self.day.value} {format_minutes(self.start)}-{format_minutes(self.end)}'


def overlaps(a: TimeSlot, b: TimeSlot) -> bool:
    """Same day and intersecting; touching boundaries do not overlap."""
    if a.day != b.day:
        return False
    return a.start < b.end and b.start < a.end


def slots_conflict(slots_a: Iterable[TimeSlot], slots_b: Iterable[TimeSlot]) -> bool:
    """True if any slot of the first group overlaps any slot of the second."""
    slots_b = list(slots_b)
    for a in slots_a:
        for b in slots_b:
            if overlaps(a, b):
                return True
    return False


def courses_conflict(course1, course2) -> bool:
    """Check if two courses have overlapping meeting times."""
    return slots_conflict(course1.meeting_times, course2.meeting_times)


def overlaps_window(slot: TimeSlot, start: int, end: int, day: Optional[Day] = None) -> bool:
    """Check a slot against a daily [start, end) window, on any day unless one is given."""
    if day is not None and slot.day != day:
        return False
    return slot.start < end and start < slot.end
