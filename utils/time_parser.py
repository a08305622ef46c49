"""
Meeting-time text parsing.
Turns catalog schedule strings like 'MON 09:00-10:30' or '월/수 09:00-10:30'
into engine TimeSlot values.
"""

import logging
import re
from typing import List, Optional, Tuple

from scheduler.timeslot import Day, TimeSlot, format_minutes

logger = logging.getLogger(__name__)

DAY_NAMES = {
    'mon': Day.MON, 'monday': Day.MON, '월': Day.MON, '월요일': Day.MON,
    'tue': Day.TUE, 'tuesday': Day.TUE, '화': Day.TUE, '화요일': Day.TUE,
    'wed': Day.WED, 'wednesday': Day.WED, '수': Day.WED, '수요일': Day.WED,
    'thu': Day.THU, 'thursday': Day.THU, '목': Day.THU, '목요일': Day.THU,
    'fri': Day.FRI, 'friday': Day.FRI, '금': Day.FRI, '금요일': Day.FRI,
    'sat': Day.SAT, 'saturday': Day.SAT, '토': Day.SAT, '토요일': Day.SAT,
    'sun': Day.SUN, 'sunday': Day.SUN, '일': Day.SUN, '일요일': Day.SUN,
}

# Front-end grids number days from Monday
DAY_NUMBERS = {i: day for i, day in enumerate([Day.MON, Day.TUE, Day.WED, Day.THU, Day.FRI, Day.SAT, Day.SUN])}

CLOCK_RE = re.compile(r'^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$', re.IGNORECASE)
# 'MON/WED 09:00-10:30' or '수(15:00-17:00)'
PART_RE = re.compile(r'^(?P<days>[^\s(]+)\s*(?:\((?P<paren>[^)]*)\)|\s+(?P<plain>.+))$')


def parse_day(value) -> Optional[Day]:
    """Parse a day name or number (0 = Monday). Returns None when unknown."""
    if isinstance(value, Day):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return DAY_NUMBERS.get(value)
    if not isinstance(value, str):
        return None
    return DAY_NAMES.get(value.strip().lower())


def parse_clock(value: str) -> Optional[int]:
    """Parse '9', '09:00', '9시', '9:30 PM' into minutes since midnight."""
    if not value or not isinstance(value, str):
        return None
    text = value.replace('시', ':').replace('분', '').strip().rstrip(':').strip()
    text = re.sub(r'\s*:\s*', ':', text)
    match = CLOCK_RE.match(text)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    meridiem = (match.group(3) or '').lower()

    if meridiem:
        if not 1 <= hours <= 12:
            return None
        if meridiem == 'pm' and hours != 12:
            hours += 12
        elif meridiem == 'am' and hours == 12:
            hours = 0

    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def parse_time_range(value: str) -> Optional[Tuple[int, int]]:
    """Parse '09:00-10:30' or '09:00~10:30' into (start, end) minutes."""
    if not value:
        return None
    parts = [p.strip() for p in re.split(r'\s*[-~–]\s*', value.strip())]
    if len(parts) != 2:
        return None
    start, end = parse_clock(parts[0]), parse_clock(parts[1])
    if start is None or end is None or start >= end:
        return None
    return start, end


def _split_days(text: str) -> List[Optional[Day]]:
    text = text.strip()
    if '/' in text:
        return [parse_day(p) for p in text.split('/')]
    day = parse_day(text)
    if day:
        return [day]
    # Compact Korean runs such as '월수'
    if all(ch in DAY_NAMES for ch in text):
        return [DAY_NAMES[ch] for ch in text]
    return [None]


def parse_meeting_times(text: str) -> List[TimeSlot]:
    """
    Parse a schedule string into time slots.

    Accepts comma or semicolon separated parts, each a day (or days joined
    by '/') followed by a time range, optionally in parentheses.
    Parts that cannot be parsed are skipped.
    """
    if not text or not isinstance(text, str):
        return []

    slots: List[TimeSlot] = []
    for part in re.split(r'[,;]', text):
        part = part.strip()
        if not part:
            continue

        match = PART_RE.match(part)
        if not match:
            logger.debug('Skipping schedule part without a day: %r', part)
            continue

        time_range = parse_time_range(match.group('paren') or match.group('plain') or '')
        if not time_range:
            logger.debug('Skipping schedule part with bad time range: %r', part)
            continue

        days = _split_days(match.group('days'))
        if not all(days):
            logger.debug('Skipping schedule part with unknown day: %r', part)
            continue

        for day in days:
            slots.append(TimeSlot(day, time_range[0], time_range[1]))

    return slots


def minutes_to_clock(minutes: int) -> str:
    return format_minutes(minutes)
