from .timeslot import Day, TimeSlot, overlaps, courses_conflict, slots_conflict, format_minutes
from .entities import BlockedInterval, Candidate, Course, DeliveryType, FixedCommitment, Strategy
from .constraints import ConstraintSet, Rule
from .settings import EngineSettings
from .hard_filter import FilterResult, RemovalReason, filter_courses
from .priority import prioritize
from .generator import CandidateGenerator, GenerationResult
from .scorer import Scorer, ScoringWeights
from .ranker import rank_candidates
from .engine import Diagnostics, EngineResult, InfeasibilityReport, TimetableEngine, generate_candidates

__all__ = [
    'Day', 'TimeSlot', 'overlaps', 'courses_conflict', 'slots_conflict', 'format_minutes',
    'BlockedInterval', 'Candidate', 'Course', 'DeliveryType', 'FixedCommitment', 'Strategy',
    'ConstraintSet', 'Rule', 'EngineSettings',
    'FilterResult', 'RemovalReason', 'filter_courses', 'prioritize',
    'CandidateGenerator', 'GenerationResult', 'Scorer', 'ScoringWeights', 'rank_candidates',
    'Diagnostics', 'EngineResult', 'InfeasibilityReport', 'TimetableEngine', 'generate_candidates',
]
