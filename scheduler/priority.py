"""
Priority Sorter Module
Orders the eligible pool so the search meets the most promising courses first.
"""

from typing import List, Sequence, Tuple

from .constraints import ConstraintSet
from .entities import Course, Strategy
from .rules import is_morning, overlaps_lunch
from .settings import EngineSettings


def strategy_alignment(course: Course, strategy: Strategy, tracks: List[str], interests: List[str]) -> int:
    if strategy == Strategy.MAJOR_FOCUS:
        return sum(1 for track in tracks if track and course.matches_tracks([track]))
    if strategy == Strategy.INTEREST_FOCUS:
        return course.matches_interests(interests)
    # MIX: every course counts, bigger ones more
    return course.credits


def soft_alignment(course: Course, constraints: ConstraintSet, settings: EngineSettings) -> int:
    """How many active preferences the course satisfies on its own."""
    bonus = 0

    if constraints.active('avoid_team_projects') and not course.is_team_project:
        bonus += 1

    if constraints.active('avoid_morning'):
        if not any(is_morning(slot, settings) for slot in course.meeting_times):
            bonus += 1

    if constraints.active('keep_lunch_time'):
        if not any(overlaps_lunch(slot, settings) for slot in course.meeting_times):
            bonus += 1

    avoid_days = constraints.active('avoid_days')
    if avoid_days and not (course.days & avoid_days):
        bonus += 1

    if constraints.active('prefer_online_classes') and course.is_online:
        bonus += 1

    online_only_days = constraints.active('prefer_online_only_days')
    if online_only_days and (course.is_online or not (course.days & online_only_days)):
        bonus += 1

    return bonus


def priority_key(
    course: Course,
    constraints: ConstraintSet,
    strategy: Strategy,
    tracks: List[str],
    interests: List[str],
    settings: EngineSettings,
) -> Tuple[int, int, int, str]:
    return (
        -strategy_alignment(course, strategy, tracks, interests),
        -soft_alignment(course, constraints, settings),
        -course.credits,
        course.course_id,
    )


def prioritize(
    courses: Sequence[Course],
    constraints: ConstraintSet,
    strategy: Strategy,
    tracks: List[str],
    interests: List[str],
    settings: EngineSettings,
) -> List[Course]:
    """
    Sort descending by strategy alignment, soft-preference alignment and
    credits, then by course id. Only changes which combinations are found
    before the cap; nothing is dropped.
    """
    return sorted(
        courses,
        key=lambda c: priority_key(c, constraints, strategy, tracks, interests, settings),
    )
