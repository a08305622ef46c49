"""
Scorer Module
Multi-criteria scoring of generated candidates. Soft preferences only move
the score and add warning codes; nothing is removed here.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .constraints import ConstraintSet
from .entities import Candidate, FixedCommitment, Strategy
from .rules import classes_per_day, consecutive_violations, group_by_day, is_morning, overlaps_lunch
from .settings import EngineSettings
from .timeslot import DAY_ORDER, WEEKDAYS

# Warning codes; day-specific ones get a ':<DAY>' suffix
CREDITS_OFF_TARGET = 'CREDITS_OFF_TARGET'
TEAM_PROJECT_INCLUDED = 'TEAM_PROJECT_INCLUDED'
ONLINE_ONLY_DAY_MISSED = 'ONLINE_ONLY_DAY_MISSED'
AVOID_DAY_VIOLATED = 'AVOID_DAY_VIOLATED'
LUNCH_NOT_CLEAR = 'LUNCH_NOT_CLEAR'
MORNING_CLASSES = 'MORNING_CLASSES'
TOO_MANY_CLASSES = 'TOO_MANY_CLASSES'
CONSECUTIVE_LIMIT_EXCEEDED = 'CONSECUTIVE_LIMIT_EXCEEDED'


@dataclass(frozen=True)
class ScoringWeights:
    base: float = 100.0
    credit_diff_penalty: float = 5.0      # per credit away from target
    major_match_bonus: float = 10.0       # MAJOR_FOCUS, per matching course
    interest_match_bonus: float = 10.0    # INTEREST_FOCUS, per matching course
    mix_course_bonus: float = 5.0         # MIX, per course
    empty_weekday_bonus: float = 3.0
    team_project_penalty: float = 5.0
    online_course_bonus: float = 5.0
    online_only_day_bonus: float = 8.0
    avoid_day_penalty: float = 8.0
    lunch_overlap_penalty: float = 5.0    # per day
    morning_slot_penalty: float = 3.0
    extra_class_penalty: float = 6.0      # per class over max_classes_per_day
    consecutive_penalty: float = 5.0      # per consecutive-run violation
    credit_warning_threshold: int = 1


def day_code(code: str, day) -> str:
    return f'{code}:{day.value}'


class Scorer:
    """Score candidates against the target, the strategy and the soft preferences."""

    def __init__(self, settings: EngineSettings = None, weights: ScoringWeights = None):
        self.settings = settings or EngineSettings()
        self.weights = weights or ScoringWeights()

    def strategy_bonus(self, candidate: Candidate, strategy: Strategy, tracks: List[str], interests: List[str]) -> float:
        w = self.weights
        if strategy == Strategy.MAJOR_FOCUS:
            matching = [c for c in candidate.courses if c.matches_tracks(tracks)]
            return len(matching) * w.major_match_bonus
        if strategy == Strategy.INTEREST_FOCUS:
            matching = [c for c in candidate.courses if c.matches_interests(interests)]
            return len(matching) * w.interest_match_bonus
        return len(candidate.courses) * w.mix_course_bonus

    def soft_deltas(
        self,
        candidate: Candidate,
        constraints: ConstraintSet,
        fixed_commitments: Sequence[FixedCommitment],
    ) -> Tuple[float, List[str]]:
        """Score delta and warnings for every preference present on the request."""
        w = self.weights
        settings = self.settings
        delta = 0.0
        warnings: List[str] = []

        course_slots = candidate.meeting_times()
        fixed_slots = [slot for f in fixed_commitments for slot in f.meeting_times]
        all_slots = course_slots + fixed_slots

        if constraints.active('avoid_team_projects'):
            team_courses = [c for c in candidate.courses if c.is_team_project]
            if team_courses:
                delta -= len(team_courses) * w.team_project_penalty
                warnings.append(TEAM_PROJECT_INCLUDED)

        if constraints.active('prefer_online_classes'):
            online = [c for c in candidate.courses if c.is_online]
            delta += len(online) * w.online_course_bonus

        online_only_days = constraints.active('prefer_online_only_days')
        if online_only_days:
            fixed_days = {slot.day for slot in fixed_slots}
            for day in DAY_ORDER:
                if day not in online_only_days:
                    continue
                on_day = [c for c in candidate.courses if day in c.days]
                if day not in fixed_days and all(c.is_online for c in on_day):
                    delta += w.online_only_day_bonus
                else:
                    warnings.append(day_code(ONLINE_ONLY_DAY_MISSED, day))

        avoid_days = constraints.active('avoid_days')
        if avoid_days:
            used_days = {slot.day for slot in course_slots}
            for day in DAY_ORDER:
                if day in avoid_days and day in used_days:
                    delta -= w.avoid_day_penalty
                    warnings.append(day_code(AVOID_DAY_VIOLATED, day))

        if constraints.active('keep_lunch_time'):
            lunch_days = {slot.day for slot in course_slots if overlaps_lunch(slot, settings)}
            for day in DAY_ORDER:
                if day in lunch_days:
                    delta -= w.lunch_overlap_penalty
                    warnings.append(day_code(LUNCH_NOT_CLEAR, day))

        if constraints.active('avoid_morning'):
            morning = [slot for slot in course_slots if is_morning(slot, settings)]
            if morning:
                delta -= len(morning) * w.morning_slot_penalty
                warnings.append(MORNING_CLASSES)

        max_per_day = constraints.active('max_classes_per_day')
        if max_per_day:
            for day, count in classes_per_day(all_slots).items():
                if count > max_per_day:
                    delta -= (count - max_per_day) * w.extra_class_penalty
                    warnings.append(day_code(TOO_MANY_CLASSES, day))

        max_consecutive = constraints.active('max_consecutive_classes')
        if max_consecutive:
            violations = count_consecutive_violations(all_slots, max_consecutive, settings.consecutive_gap_minutes)
            if violations > 0:
                delta -= violations * w.consecutive_penalty
                warnings.append(CONSECUTIVE_LIMIT_EXCEEDED)

        return delta, warnings

    def score(
        self,
        candidate: Candidate,
        target_credits: int,
        constraints: ConstraintSet,
        strategy: Strategy,
        tracks: List[str],
        interests: List[str],
        fixed_commitments: Sequence[FixedCommitment] = (),
    ) -> Candidate:
        """Return a copy of the candidate with its score and warnings filled in."""
        w = self.weights
        warnings: List[str] = []

        credit_diff = abs(candidate.total_credits - target_credits)
        score = w.base - credit_diff * w.credit_diff_penalty
        if credit_diff > w.credit_warning_threshold:
            warnings.append(CREDITS_OFF_TARGET)

        score += self.strategy_bonus(candidate, strategy, tracks, interests)

        fixed_slots = [slot for f in fixed_commitments for slot in f.meeting_times]
        busy_days = group_by_day(candidate.meeting_times() + fixed_slots)
        empty_weekdays = [day for day in WEEKDAYS if day not in busy_days]
        score += len(empty_weekdays) * w.empty_weekday_bonus

        delta, soft_warnings = self.soft_deltas(candidate, constraints, fixed_commitments)
        score += delta
        warnings.extend(soft_warnings)

        return candidate.scored(max(0.0, score), warnings)


def count_consecutive_violations(slots, max_consecutive: int, gap_minutes: int = 30) -> int:
    """Total (run - limit) over every back-to-back run longer than the limit, all days."""
    return sum(consecutive_violations(slots, max_consecutive, gap_minutes).values())
