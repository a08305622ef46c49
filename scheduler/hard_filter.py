"""
Hard Filter Module
Removes courses that can never appear in a valid timetable before the search starts.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .constraints import ConstraintSet
from .entities import BlockedInterval, Course, FixedCommitment
from .rules import exceeds_hard_daily_limits, is_morning, overlaps_lunch
from .settings import EngineSettings
from .timeslot import TimeSlot, slots_conflict


class RemovalReason(str, Enum):
    NO_MEETING_TIMES = 'NO_MEETING_TIMES'
    INVALID_MEETING_TIME = 'INVALID_MEETING_TIME'
    INVALID_CREDITS = 'INVALID_CREDITS'
    ALREADY_FIXED = 'ALREADY_FIXED'
    FIXED_OVERLAP = 'FIXED_OVERLAP'
    BLOCKED_OVERLAP = 'BLOCKED_OVERLAP'
    HARD_RULE = 'HARD_RULE'


@dataclass
class FilterResult:
    valid_courses: List[Course]
    removed: Dict[str, RemovalReason] = field(default_factory=dict)

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    def reason_counts(self) -> Dict[str, int]:
        counts = Counter(reason.value for reason in self.removed.values())
        return dict(sorted(counts.items()))


def violates_hard_rule(course: Course, constraints: ConstraintSet, settings: EngineSettings) -> bool:
    """Check the single-course part of every hard preference."""
    avoid_days = constraints.hard('avoid_days')
    if avoid_days and any(slot.day in avoid_days for slot in course.meeting_times):
        return True

    if constraints.hard('avoid_morning'):
        if any(is_morning(slot, settings) for slot in course.meeting_times):
            return True

    if constraints.hard('keep_lunch_time'):
        if any(overlaps_lunch(slot, settings) for slot in course.meeting_times):
            return True

    if constraints.hard('avoid_team_projects') and course.is_team_project:
        return True

    online_only_days = constraints.hard('prefer_online_only_days')
    if online_only_days and not course.is_online:
        if any(slot.day in online_only_days for slot in course.meeting_times):
            return True

    # A course that breaks a daily limit on its own can never be part of a valid set
    if exceeds_hard_daily_limits(list(course.meeting_times), constraints, settings):
        return True

    return False


def removal_reason(
    course: Course,
    fixed_ids: set,
    fixed_slots: List[TimeSlot],
    blocked_slots: List[TimeSlot],
    constraints: ConstraintSet,
    settings: EngineSettings,
) -> Optional[RemovalReason]:
    """First hard rule the course breaks, or None if it stays in the pool."""
    if not course.meeting_times:
        return RemovalReason.NO_MEETING_TIMES

    if not all(isinstance(slot, TimeSlot) and slot.is_valid for slot in course.meeting_times):
        return RemovalReason.INVALID_MEETING_TIME

    if isinstance(course.credits, bool) or not isinstance(course.credits, int) or course.credits <= 0:
        return RemovalReason.INVALID_CREDITS

    if course.course_id in fixed_ids:
        return RemovalReason.ALREADY_FIXED

    if slots_conflict(course.meeting_times, fixed_slots):
        return RemovalReason.FIXED_OVERLAP

    if slots_conflict(course.meeting_times, blocked_slots):
        return RemovalReason.BLOCKED_OVERLAP

    if violates_hard_rule(course, constraints, settings):
        return RemovalReason.HARD_RULE

    return None


def filter_courses(
    courses: Sequence[Course],
    fixed_commitments: Sequence[FixedCommitment],
    blocked_intervals: Sequence[BlockedInterval],
    constraints: ConstraintSet,
    settings: EngineSettings,
) -> FilterResult:
    """
    Split the catalog into courses eligible for the search and removed ones.

    Soft preferences never remove anything here. Input order is preserved and
    this never raises; an empty result is a valid outcome.
    """
    fixed_ids = {f.course_id for f in fixed_commitments}
    fixed_slots = [slot for f in fixed_commitments for slot in f.meeting_times]
    blocked_slots = [b.slot for b in blocked_intervals]

    result = FilterResult(valid_courses=[])
    seen = set()

    for course in courses:
        # Catalog ids are unique; a repeated id is ignored rather than searched twice
        if course.course_id in seen:
            continue
        seen.add(course.course_id)

        reason = removal_reason(course, fixed_ids, fixed_slots, blocked_slots, constraints, settings)
        if reason is None:
            result.valid_courses.append(course)
        else:
            result.removed[course.course_id] = reason

    return result
