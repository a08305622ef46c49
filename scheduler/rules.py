"""
Per-day timetable analysis shared by the filter, the search and the scorer.
"""

from typing import Dict, Iterable, List

from .settings import EngineSettings
from .timeslot import Day, DAY_ORDER, TimeSlot, overlaps_window


def group_by_day(slots: Iterable[TimeSlot]) -> Dict[Day, List[TimeSlot]]:
    """Slots per day, each day's list sorted by start time. Days come out in week order."""
    by_day: Dict[Day, List[TimeSlot]] = {}
    for slot in slots:
        by_day.setdefault(slot.day, []).append(slot)
    return {
        day: sorted(by_day[day], key=lambda s: (s.start, s.end))
        for day in DAY_ORDER if day in by_day
    }


def classes_per_day(slots: Iterable[TimeSlot]) -> Dict[Day, int]:
    return {day: len(day_slots) for day, day_slots in group_by_day(slots).items()}


def consecutive_runs(day_slots: List[TimeSlot], gap_minutes: int) -> List[int]:
    """
    Lengths of back-to-back runs in one day's sorted slots.
    A gap of at most gap_minutes keeps the run going; a larger gap starts a new one.
    """
    if not day_slots:
        return []
    runs = []
    run = 1
    for prev, curr in zip(day_slots, day_slots[1:]):
        if curr.start - prev.end <= gap_minutes:
            run += 1
        else:
            runs.append(run)
            run = 1
    runs.append(run)
    return runs


def consecutive_violations(slots: Iterable[TimeSlot], limit: int, gap_minutes: int) -> Dict[Day, int]:
    """Per day, the sum of (run - limit) over every run longer than limit."""
    violations = {}
    for day, day_slots in group_by_day(slots).items():
        excess = sum(run - limit for run in consecutive_runs(day_slots, gap_minutes) if run > limit)
        if excess:
            violations[day] = excess
    return violations


def is_morning(slot: TimeSlot, settings: EngineSettings) -> bool:
    return slot.start < settings.morning_cutoff


def overlaps_lunch(slot: TimeSlot, settings: EngineSettings) -> bool:
    return overlaps_window(slot, settings.lunch_start, settings.lunch_end)


def exceeds_hard_daily_limits(slots: List[TimeSlot], constraints, settings: EngineSettings) -> bool:
    """Check the hard per-day and back-to-back limits. Both only grow as slots are added."""
    max_per_day = constraints.hard('max_classes_per_day')
    if max_per_day is not None:
        if any(count > max_per_day for count in classes_per_day(slots).values()):
            return True

    max_consecutive = constraints.hard('max_consecutive_classes')
    if max_consecutive is not None:
        if consecutive_violations(slots, max_consecutive, settings.consecutive_gap_minutes):
            return True

    return False
