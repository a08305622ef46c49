"""
Response builder.
Turns engine results into the JSON the timetable front end renders.
"""

from typing import Any, Dict, List

from scheduler import engine as factors
from scheduler import scorer as codes
from scheduler.constraints import ConstraintSet
from scheduler.engine import EngineResult, InfeasibilityReport
from scheduler.entities import Candidate, Course
from scheduler.timeslot import Day

PASTEL_COLORS = [
    '#FFB3BA', '#BAFFC9', '#BAE1FF', '#FFFFBA', '#FFDFBA',
    '#E0BBE4', '#FEC8C1', '#FFCCCB', '#B4E4FF', '#C7CEEA',
    '#F8BBD0', '#B5EAD7', '#FFD3A5', '#FD9853', '#A8E6CF',
    '#DDA0DD', '#98D8C8', '#F7DC6F', '#BB8FCE', '#85C1E2',
]

DAY_LABELS = {
    Day.MON: 'Monday', Day.TUE: 'Tuesday', Day.WED: 'Wednesday', Day.THU: 'Thursday',
    Day.FRI: 'Friday', Day.SAT: 'Saturday', Day.SUN: 'Sunday',
}

WARNING_MESSAGES = {
    codes.CREDITS_OFF_TARGET: 'Total credits ({credits}) differ from the target ({target}).',
    codes.TEAM_PROJECT_INCLUDED: 'Includes a team-project course.',
    codes.ONLINE_ONLY_DAY_MISSED: '{day} is not online-only.',
    codes.AVOID_DAY_VIOLATED: 'Has classes on {day}, which you asked to avoid.',
    codes.LUNCH_NOT_CLEAR: 'Lunch time is not free on {day}.',
    codes.MORNING_CLASSES: 'Includes morning classes.',
    codes.TOO_MANY_CLASSES: '{day} has more classes than your daily limit.',
    codes.CONSECUTIVE_LIMIT_EXCEEDED: 'Some days exceed your consecutive class limit.',
}

FACTOR_LABELS = {
    factors.NO_COURSES: 'No courses are available in the catalog',
    factors.BLOCKED_TIMES: 'Blocked times',
    factors.HARD_AVOID_DAYS: 'Days to avoid (required)',
    factors.HARD_AVOID_MORNING: 'No morning classes (required)',
    factors.HARD_KEEP_LUNCH: 'Free lunch time (required)',
    factors.HARD_AVOID_TEAM_PROJECTS: 'No team projects (required)',
    factors.HARD_ONLINE_ONLY_DAYS: 'Online-only days (required)',
    factors.HARD_DAILY_LIMITS: 'Daily class limits (required)',
    factors.FIXED_COMMITMENTS: 'Fixed lectures',
    factors.TARGET_EXCEEDS_SUPPLY: 'Not enough eligible credits for the target',
    factors.FIXED_EXCEEDS_TARGET: 'Fixed lectures already exceed the target',
}

FACTOR_SUGGESTIONS = {
    factors.BLOCKED_TIMES: 'Reduce or adjust your blocked times',
    factors.HARD_AVOID_DAYS: 'Make the days to avoid a preference instead of a requirement',
    factors.HARD_AVOID_MORNING: 'Allow some morning classes',
    factors.HARD_KEEP_LUNCH: 'Allow classes over lunch on some days',
    factors.HARD_AVOID_TEAM_PROJECTS: 'Allow team-project courses',
    factors.HARD_ONLINE_ONLY_DAYS: 'Make online-only days a preference',
    factors.HARD_DAILY_LIMITS: 'Raise the daily class limits',
    factors.FIXED_COMMITMENTS: 'Release one fixed lecture',
    factors.FIXED_EXCEEDS_TARGET: 'Raise the target credits or release a fixed lecture',
}

DEFAULT_SUGGESTIONS = [
    'Relax some constraints',
    'Lower the target credits',
    'Reduce the number of fixed lectures',
]

INFEASIBLE_REASON = 'No timetable satisfies all required constraints.'


def warning_message(code: str, candidate: Candidate, target_credits: int) -> str:
    """Readable text for one warning code such as 'AVOID_DAY_VIOLATED:MON'."""
    base, _, day_value = code.partition(':')
    template = WARNING_MESSAGES.get(base)
    if template is None:
        return code
    day = DAY_LABELS[Day(day_value)] if day_value in Day.__members__ else day_value
    return template.format(day=day, credits=candidate.total_credits, target=target_credits)


def explain(candidate: Candidate, target_credits: int, constraints: ConstraintSet) -> str:
    """One or two sentences summarising the timetable."""
    parts = []
    diff = candidate.total_credits - target_credits
    if abs(diff) <= 1:
        parts.append(f'Meets the target of {target_credits} credits.')
    elif diff < 0:
        parts.append(f'{-diff} credits short of the target.')
    else:
        parts.append(f'{diff} credits over the target.')

    satisfied = []
    warning_bases = {w.partition(':')[0] for w in candidate.warnings}
    if constraints.active('avoid_days') and codes.AVOID_DAY_VIOLATED not in warning_bases:
        satisfied.append('avoids the days you asked for')
    if constraints.active('keep_lunch_time') and codes.LUNCH_NOT_CLEAR not in warning_bases:
        satisfied.append('keeps lunch time free')
    if constraints.active('avoid_morning') and codes.MORNING_CLASSES not in warning_bases:
        satisfied.append('has no morning classes')

    if satisfied:
        parts.append('It ' + ' and '.join(satisfied) + '.')
    elif not candidate.warnings:
        parts.append('A balanced timetable.')
    return ' '.join(parts)


def course_entry(course: Course, color: str) -> Dict[str, Any]:
    first = course.meeting_times[0]
    return {
        'id': course.course_id,
        'code': course.course_id,
        'name': course.name or course.course_id,
        'credits': course.credits,
        'professor': course.instructor or '',
        'type': course.delivery_type.value,
        'day': first.day.position,
        'startHour': round(first.start / 60, 2),
        'duration': round(first.duration / 60, 2),
        'color': color,
        'meetingTimes': [slot.to_dict() for slot in course.meeting_times],
    }


def build_recommendations(
    result: EngineResult,
    target_credits: int,
    constraints: ConstraintSet,
) -> List[Dict[str, Any]]:
    recommendations = []
    for rank, candidate in enumerate(result.candidates):
        courses = [
            course_entry(course, PASTEL_COLORS[(rank * 10 + i) % len(PASTEL_COLORS)])
            for i, course in enumerate(candidate.courses)
        ]
        recommendations.append({
            'rank': rank + 1,
            'totalCredits': candidate.total_credits,
            'score': round(candidate.score, 2),
            'explanation': explain(candidate, target_credits, constraints),
            'warnings': [warning_message(w, candidate, target_credits) for w in candidate.warnings],
            'warningCodes': list(candidate.warnings),
            'courses': courses,
        })
    return recommendations


def build_success_response(result: EngineResult, target_credits: int, constraints: ConstraintSet,
                           debug: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'recommendations': build_recommendations(result, target_credits, constraints),
        'debug': debug,
    }


def suggestions_for(report: InfeasibilityReport) -> List[str]:
    suggestions = [FACTOR_SUGGESTIONS[f] for f in report.factors if f in FACTOR_SUGGESTIONS]
    if factors.TARGET_EXCEEDS_SUPPLY in report.factors or report.target_credits > 15:
        suggestions.append(f'Lower the target to {max(1, report.target_credits - 3)} credits')
    return suggestions or list(DEFAULT_SUGGESTIONS)


def build_failure_response(report: InfeasibilityReport, debug: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'error': 'HARD_CONSTRAINT_CONFLICT',
        'details': {
            'reason': INFEASIBLE_REASON,
            'factors': list(report.factors),
            'conflictingConstraints': [FACTOR_LABELS.get(f, f) for f in report.factors],
            'suggestions': suggestions_for(report),
        },
        'debug': debug,
    }

