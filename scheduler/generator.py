"""
Candidate Generator Module
Bounded backtracking over the prioritized pool, producing non-overlapping
course sets whose total credits land in the accepted window.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .constraints import ConstraintSet
from .entities import Candidate, Course, FixedCommitment
from .rules import exceeds_hard_daily_limits
from .settings import EngineSettings
from .timeslot import TimeSlot, courses_conflict, slots_conflict


@dataclass
class GenerationResult:
    candidates: List[Candidate] = field(default_factory=list)
    cap_hit: bool = False
    search_exhausted: bool = False   # Node budget ran out before the search finished
    nodes_visited: int = 0


class CandidateGenerator:
    """
    Suffix-only backtracking search.

    Each recursion only looks at courses after the last one picked, so every
    course set is produced at most once. Selections are passed down as
    tuples; nothing is pushed or popped.

    Stops on every branch once max_candidates results exist or the node
    budget is spent.
    """

    def __init__(
        self,
        settings: EngineSettings,
        constraints: ConstraintSet,
        fixed_commitments: Sequence[FixedCommitment] = (),
    ):
        self.settings = settings
        self.constraints = constraints
        self.fixed_commitments = list(fixed_commitments)
        self.fixed_credits = sum(f.credits for f in self.fixed_commitments)
        self._fixed_slots: List[TimeSlot] = [
            slot for f in self.fixed_commitments for slot in f.meeting_times
        ]
        self._has_hard_daily_limits = (
            constraints.hard('max_classes_per_day') is not None
            or constraints.hard('max_consecutive_classes') is not None
        )

    def credit_window(self, target_credits: int) -> Tuple[int, int]:
        """Accepted total credits, fixed commitments included."""
        return target_credits, target_credits + self.settings.credit_slack

    def _selection_slots(self, selected: Sequence[Course]) -> List[TimeSlot]:
        slots = list(self._fixed_slots)
        for course in selected:
            slots.extend(course.meeting_times)
        return slots

    def _breaks_daily_limits(self, selected: Sequence[Course]) -> bool:
        if not self._has_hard_daily_limits:
            return False
        return exceeds_hard_daily_limits(self._selection_slots(selected), self.constraints, self.settings)

    def is_valid_selection(self, selected: Sequence[Course]) -> bool:
        """Full re-check of a finished selection before it is emitted."""
        ids = [c.course_id for c in selected]
        if len(ids) != len(set(ids)):
            return False

        for i, course in enumerate(selected):
            if slots_conflict(course.meeting_times, self._fixed_slots):
                return False
            for other in selected[i + 1:]:
                if courses_conflict(course, other):
                    return False

        return not self._breaks_daily_limits(selected)

    def generate(self, courses: Sequence[Course], target_credits: int) -> GenerationResult:
        """
        Enumerate candidates from a prioritized course list.

        Args:
            courses: Eligible courses, already in priority order
            target_credits: Total credit target, fixed commitments included

        Returns:
            GenerationResult with candidates in discovery order
        """
        courses = list(courses)
        low, high = self.credit_window(target_credits)
        max_candidates = self.settings.max_candidates
        node_budget = self.settings.max_search_nodes
        fixed_credits = self.fixed_credits

        result = GenerationResult()

        def should_stop() -> bool:
            if len(result.candidates) >= max_candidates:
                result.cap_hit = True
                return True
            if node_budget and result.nodes_visited >= node_budget:
                result.search_exhausted = True
                return True
            return False

        def backtrack(start: int, selected: Tuple[Course, ...], credits: int) -> None:
            if should_stop():
                return
            result.nodes_visited += 1

            total = fixed_credits + credits
            if total >= low:
                # Reached the target: emit and do not extend this branch further
                if total <= high and self.is_valid_selection(selected):
                    result.candidates.append(Candidate(courses=selected, fixed_credits=fixed_credits))
                return

            for j in range(start, len(courses)):
                if should_stop():
                    return

                course = courses[j]
                if total + course.credits > high:
                    continue

                if any(courses_conflict(course, picked) for picked in selected):
                    continue

                extended = selected + (course,)
                if self._breaks_daily_limits(extended):
                    continue

                backtrack(j + 1, extended, credits + course.credits)

        backtrack(0, (), 0)
        if len(result.candidates) >= max_candidates:
            result.cap_hit = True
        return result
