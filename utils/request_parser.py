"""
Recommendation request parsing.
Validates the JSON body of POST /api/recommend and converts it into engine inputs.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from scheduler.constraints import ConstraintSet
from scheduler.entities import BlockedInterval, FixedCommitment, Strategy
from scheduler.timeslot import TimeSlot
from utils.constraint_parser import ConstraintParseError, parse_constraints
from utils.time_parser import parse_clock, parse_day, parse_meeting_times

CREDIT_RANGE_RE = re.compile(r'^\s*(\d+)\s*[~-]\s*(\d+)\s*$')

# Timetable grid used by the front end: row 0 is 09:00, durations count half hours
GRID_START_MINUTES = 9 * 60
GRID_STEP_MINUTES = 60
DURATION_UNIT_MINUTES = 30


class InvalidRequest(Exception):
    """Malformed request body. Answered with HTTP 400."""

    def __init__(self, message: str, field_name: str = None):
        super().__init__(message)
        self.message = message
        self.field_name = field_name

    def to_dict(self):
        error = {'code': 'INVALID_REQUEST', 'message': self.message}
        if self.field_name:
            error['field'] = self.field_name
        return error


@dataclass
class RecommendRequest:
    target_credits: int
    fixed_commitments: List[FixedCommitment] = field(default_factory=list)
    blocked_intervals: List[BlockedInterval] = field(default_factory=list)
    constraints: ConstraintSet = field(default_factory=ConstraintSet)
    strategy: Strategy = Strategy.MIX
    tracks: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    top_n: Optional[int] = None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_target_credits(value, default: int) -> int:
    """Accept 18, "18" or a range like "15~18" (its minimum). Missing or <= 0 gives the default."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        raise InvalidRequest('targetCredits must be a number', 'targetCredits')
    if _is_number(value):
        credits = int(value)
    elif isinstance(value, str):
        match = CREDIT_RANGE_RE.match(value)
        if match:
            credits = min(int(match.group(1)), int(match.group(2)))
        elif value.strip().isdigit():
            credits = int(value.strip())
        else:
            raise InvalidRequest(f'Invalid targetCredits: {value!r}', 'targetCredits')
    else:
        raise InvalidRequest('targetCredits must be a number', 'targetCredits')
    return credits if credits > 0 else default


def _parse_clock_field(value, field_name: str) -> int:
    minutes = parse_clock(value) if isinstance(value, str) else None
    if minutes is None:
        raise InvalidRequest(f'Invalid time: {value!r}', field_name)
    return minutes


def _parse_day_field(value, field_name: str):
    day = parse_day(value)
    if day is None:
        raise InvalidRequest(f'Invalid day: {value!r}', field_name)
    return day


def _grid_minutes(value, field_name: str) -> int:
    if not _is_number(value):
        raise InvalidRequest(f'Invalid grid time: {value!r}', field_name)
    return GRID_START_MINUTES + int(round(value * GRID_STEP_MINUTES))


def parse_slot(item: Dict[str, Any], field_name: str) -> TimeSlot:
    """
    One meeting/blocked slot. Accepted shapes:
      {day, startTime: "09:00", endTime: "10:30"}
      {day, start: 0, end: 2}               (grid rows, 0 = 09:00)
      {day: 4, startHour: 0, duration: 3}   (grid row and half-hour units)
      {day: "월", startHour: 9, duration: 2} (clock hour and hours)
    """
    if not isinstance(item, dict):
        raise InvalidRequest('Time entries must be objects', field_name)

    day = _parse_day_field(item.get('day'), field_name)

    if 'startTime' in item or 'endTime' in item:
        start = _parse_clock_field(item.get('startTime'), field_name)
        end = _parse_clock_field(item.get('endTime'), field_name)
    elif 'start' in item and 'end' in item:
        if _is_number(item['start']) and _is_number(item['end']):
            start = _grid_minutes(item['start'], field_name)
            end = _grid_minutes(item['end'], field_name)
        else:
            start = _parse_clock_field(item['start'], field_name)
            end = _parse_clock_field(item['end'], field_name)
    elif 'startHour' in item and 'duration' in item:
        if not _is_number(item['duration']):
            raise InvalidRequest('duration must be a number', field_name)
        if _is_number(item['day']):
            start = _grid_minutes(item['startHour'], field_name)
            end = start + int(item['duration'] * DURATION_UNIT_MINUTES)
        else:
            # Named days carry a clock hour and a duration in hours
            if not _is_number(item['startHour']):
                raise InvalidRequest(f"Invalid startHour: {item['startHour']!r}", field_name)
            start = int(round(item['startHour'] * 60))
            end = start + int(round(item['duration'] * 60))
    else:
        raise InvalidRequest('Missing start/end time', field_name)

    if start >= end:
        raise InvalidRequest('Start time must be before end time', field_name)
    return TimeSlot(day, start, end)


def _as_list(value, field_name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidRequest(f'{field_name} must be a list', field_name)
    return value


def parse_fixed_lectures(items) -> List[FixedCommitment]:
    fixed = []
    for item in _as_list(items, 'fixedLectures'):
        if not isinstance(item, dict):
            raise InvalidRequest('fixedLectures entries must be objects', 'fixedLectures')

        code = item.get('code') or item.get('courseId')
        if not code or not isinstance(code, str):
            raise InvalidRequest('Each fixed lecture needs a code', 'fixedLectures')

        credits = item.get('credits', 0)
        if not _is_number(credits) or credits < 0:
            raise InvalidRequest(f'Invalid credits for {code}', 'fixedLectures')

        if 'meetingTimes' in item:
            slots = [parse_slot(m, 'fixedLectures') for m in _as_list(item['meetingTimes'], 'fixedLectures')]
        elif 'schedule' in item:
            slots = parse_meeting_times(item['schedule'])
        else:
            slots = [parse_slot(item, 'fixedLectures')]

        if not slots:
            raise InvalidRequest(f'No meeting times for fixed lecture {code}', 'fixedLectures')
        fixed.append(FixedCommitment(code, tuple(slots), int(credits)))
    return fixed


def parse_blocked_times(items) -> List[BlockedInterval]:
    blocked = []
    for item in _as_list(items, 'blockedTimes'):
        slot = parse_slot(item, 'blockedTimes')
        blocked.append(BlockedInterval(slot.day, slot.start, slot.end, item.get('label') or ''))
    return blocked


def _parse_strings(value, field_name: str) -> List[str]:
    items = _as_list(value, field_name)
    if not all(isinstance(v, str) for v in items):
        raise InvalidRequest(f'{field_name} must be a list of strings', field_name)
    return [v.strip() for v in items if v.strip()]


def parse_recommend_request(data, default_target: int = 18) -> RecommendRequest:
    if not isinstance(data, dict):
        raise InvalidRequest('Request body must be a JSON object')

    strategy = data.get('strategy') or Strategy.MIX.value
    try:
        strategy = Strategy(str(strategy).upper())
    except ValueError:
        raise InvalidRequest(f'Unknown strategy: {strategy!r}', 'strategy')

    try:
        constraints = parse_constraints(data.get('constraints'))
    except ConstraintParseError as e:
        raise InvalidRequest(str(e), 'constraints')

    top_n = data.get('topN')
    if top_n is not None and (not isinstance(top_n, int) or isinstance(top_n, bool) or top_n <= 0):
        raise InvalidRequest('topN must be a positive integer', 'topN')

    # 'basket' is the older name for fixed lectures
    fixed_items = _as_list(data.get('fixedLectures'), 'fixedLectures') + _as_list(data.get('basket'), 'basket')

    return RecommendRequest(
        target_credits=parse_target_credits(data.get('targetCredits'), default_target),
        fixed_commitments=parse_fixed_lectures(fixed_items),
        blocked_intervals=parse_blocked_times(data.get('blockedTimes')),
        constraints=constraints,
        strategy=strategy,
        tracks=_parse_strings(data.get('tracks'), 'tracks'),
        interests=_parse_strings(data.get('interests'), 'interests'),
        top_n=top_n,
    )
