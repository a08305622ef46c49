"""
Timetable Engine
Single entry point wiring filter, sort, search, scoring and ranking for one request.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .constraints import ConstraintSet
from .entities import BlockedInterval, Candidate, Course, FixedCommitment, Strategy
from .generator import CandidateGenerator
from .hard_filter import filter_courses
from .priority import prioritize
from .ranker import rank_candidates
from .scorer import Scorer, ScoringWeights
from .settings import EngineSettings

# Infeasibility factors
NO_COURSES = 'NO_COURSES'
BLOCKED_TIMES = 'BLOCKED_TIMES'
HARD_AVOID_DAYS = 'HARD_AVOID_DAYS'
HARD_AVOID_MORNING = 'HARD_AVOID_MORNING'
HARD_KEEP_LUNCH = 'HARD_KEEP_LUNCH'
HARD_AVOID_TEAM_PROJECTS = 'HARD_AVOID_TEAM_PROJECTS'
HARD_ONLINE_ONLY_DAYS = 'HARD_ONLINE_ONLY_DAYS'
HARD_DAILY_LIMITS = 'HARD_DAILY_LIMITS'
FIXED_COMMITMENTS = 'FIXED_COMMITMENTS'
TARGET_EXCEEDS_SUPPLY = 'TARGET_EXCEEDS_SUPPLY'
FIXED_EXCEEDS_TARGET = 'FIXED_EXCEEDS_TARGET'

HARD_RULE_FACTORS = {
    'avoid_days': HARD_AVOID_DAYS,
    'avoid_morning': HARD_AVOID_MORNING,
    'keep_lunch_time': HARD_KEEP_LUNCH,
    'avoid_team_projects': HARD_AVOID_TEAM_PROJECTS,
    'prefer_online_only_days': HARD_ONLINE_ONLY_DAYS,
    'max_classes_per_day': HARD_DAILY_LIMITS,
    'max_consecutive_classes': HARD_DAILY_LIMITS,
}


@dataclass
class InfeasibilityReport:
    """Why nothing could be recommended, limited to what the inputs show."""
    factors: List[str]
    valid_courses: int
    available_credits: int
    target_credits: int

    def to_dict(self):
        return {
            'factors': list(self.factors),
            'validCourses': self.valid_courses,
            'availableCredits': self.available_credits,
            'targetCredits': self.target_credits,
        }


@dataclass
class Diagnostics:
    generated: int = 0
    removed_by_hard_filter: int = 0
    removal_reasons: Dict[str, int] = field(default_factory=dict)
    valid_courses: int = 0
    cap_hit: bool = False
    search_exhausted: bool = False
    nodes_visited: int = 0
    infeasibility: Optional[InfeasibilityReport] = None

    def to_dict(self):
        return {
            'candidatesGenerated': self.generated,
            'removedByHardFilter': self.removed_by_hard_filter,
            'removalReasons': dict(self.removal_reasons),
            'validCourses': self.valid_courses,
            'capHit': self.cap_hit,
            'searchExhausted': self.search_exhausted,
            'nodesVisited': self.nodes_visited,
            'infeasibility': self.infeasibility.to_dict() if self.infeasibility else None,
        }


@dataclass
class EngineResult:
    candidates: List[Candidate]
    diagnostics: Diagnostics

    @property
    def feasible(self) -> bool:
        return bool(self.candidates)


class TimetableEngine:
    """
    Stateless recommendation engine. Build one per process and share it;
    every call works only on its own inputs.
    """

    def __init__(self, settings: EngineSettings = None, weights: ScoringWeights = None):
        self.settings = settings or EngineSettings()
        self.scorer = Scorer(self.settings, weights)

    def generate_candidates(
        self,
        courses: Sequence[Course],
        fixed_commitments: Sequence[FixedCommitment],
        blocked_intervals: Sequence[BlockedInterval],
        target_credits: int,
        constraints: ConstraintSet = None,
        strategy: Strategy = Strategy.MIX,
        tracks: Sequence[str] = (),
        interests: Sequence[str] = (),
        top_n: int = None,
    ) -> EngineResult:
        """
        Recommend up to top_n timetables.

        Pipeline: hard filter -> priority sort -> bounded search -> score every
        candidate -> rank and dedup -> top N. When nothing survives, the
        diagnostics carry an infeasibility report instead.
        """
        settings = self.settings
        constraints = constraints or ConstraintSet()
        strategy = Strategy(strategy)
        tracks = list(tracks)
        interests = list(interests)
        top_n = settings.top_n if top_n is None else top_n

        filtered = filter_courses(courses, fixed_commitments, blocked_intervals, constraints, settings)
        ordered = prioritize(filtered.valid_courses, constraints, strategy, tracks, interests, settings)

        generator = CandidateGenerator(settings, constraints, fixed_commitments)
        generation = generator.generate(ordered, target_credits)

        scored = [
            self.scorer.score(c, target_credits, constraints, strategy, tracks, interests, fixed_commitments)
            for c in generation.candidates
        ]
        ranked = rank_candidates(scored, top_n)

        diagnostics = Diagnostics(
            generated=len(generation.candidates),
            removed_by_hard_filter=filtered.removed_count,
            removal_reasons=filtered.reason_counts(),
            valid_courses=len(filtered.valid_courses),
            cap_hit=generation.cap_hit,
            search_exhausted=generation.search_exhausted,
            nodes_visited=generation.nodes_visited,
        )

        if not ranked:
            diagnostics.infeasibility = self.explain_infeasibility(
                courses, filtered.valid_courses, fixed_commitments, blocked_intervals,
                target_credits, constraints,
            )

        return EngineResult(candidates=ranked, diagnostics=diagnostics)

    def explain_infeasibility(
        self,
        courses: Sequence[Course],
        valid_courses: Sequence[Course],
        fixed_commitments: Sequence[FixedCommitment],
        blocked_intervals: Sequence[BlockedInterval],
        target_credits: int,
        constraints: ConstraintSet,
    ) -> InfeasibilityReport:
        """List the hard factors present on the request; no guessing beyond the inputs."""
        factors: List[str] = []

        if not courses:
            factors.append(NO_COURSES)

        if blocked_intervals:
            factors.append(BLOCKED_TIMES)

        for name in constraints.hard_rule_names():
            factor = HARD_RULE_FACTORS.get(name)
            if factor and factor not in factors:
                factors.append(factor)

        fixed_credits = sum(f.credits for f in fixed_commitments)
        if fixed_commitments:
            factors.append(FIXED_COMMITMENTS)
        if fixed_credits > target_credits + self.settings.credit_slack:
            factors.append(FIXED_EXCEEDS_TARGET)

        available = fixed_credits + sum(c.credits for c in valid_courses)
        if available < target_credits:
            factors.append(TARGET_EXCEEDS_SUPPLY)

        return InfeasibilityReport(
            factors=factors,
            valid_courses=len(valid_courses),
            available_credits=available,
            target_credits=target_credits,
        )


def generate_candidates(courses, fixed_commitments, blocked_intervals, target_credits,
                        constraints=None, strategy=Strategy.MIX, tracks=(), interests=(),
                        settings: EngineSettings = None) -> EngineResult:
    """Convenience wrapper for one-off calls with default weights."""
    return TimetableEngine(settings).generate_candidates(
        courses, fixed_commitments, blocked_intervals, target_credits,
        constraints, strategy, tracks, interests,
    )
