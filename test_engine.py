from scheduler import engine as factors
from scheduler.constraints import ConstraintSet, Rule
from scheduler.engine import TimetableEngine, generate_candidates
from scheduler.entities import BlockedInterval, Course, FixedCommitment, Strategy
from scheduler.settings import EngineSettings
from scheduler.timeslot import Day, TimeSlot, courses_conflict, slots_conflict


def _mk_course(course_id, credits, *slots, **kwargs):
    return Course(course_id, credits, tuple(TimeSlot.from_strings(*s) for s in slots), **kwargs)


def _catalog():
    return [
        _mk_course('MKT201', 3, ('MON', '09:00', '10:30'), ('WED', '09:00', '10:30'), major='Business', track='Marketing'),
        _mk_course('MKT310', 3, ('TUE', '10:30', '12:00'), ('THU', '10:30', '12:00'), major='Business', track='Marketing'),
        _mk_course('FIN210', 3, ('MON', '13:00', '14:30'), ('WED', '13:00', '14:30'), major='Business', track='Finance'),
        _mk_course('FIN315', 3, ('TUE', '15:00', '16:30'), ('THU', '15:00', '16:30'), major='Business', track='Finance'),
        _mk_course('CSE205', 3, ('MON', '10:00', '11:30'), ('WED', '10:00', '11:30'), name='Data Structures'),
        _mk_course('GEN101', 2, ('FRI', '14:00', '16:00'), name='Academic Writing'),
        _mk_course('GEN120', 3, ('THU', '09:00', '12:00'), name='Statistics', tags=frozenset(['data'])),
        _mk_course('GEN130', 2, ('FRI', '09:00', '11:00'), name='Global Culture'),
    ]


def test_returns_ranked_conflict_free_timetables():
    result = TimetableEngine().generate_candidates(_catalog(), [], [], 12)

    assert result.feasible
    assert 1 <= len(result.candidates) <= 3
    scores = [c.score for c in result.candidates]
    assert scores == sorted(scores, reverse=True)
    for candidate in result.candidates:
        assert 12 <= candidate.total_credits <= 15
        for i, a in enumerate(candidate.courses):
            for b in candidate.courses[i + 1:]:
                assert not courses_conflict(a, b)
    assert len({c.signature for c in result.candidates}) == len(result.candidates)


def test_engine_is_deterministic():
    engine = TimetableEngine()
    constraints = ConstraintSet(avoid_morning=Rule(True), max_classes_per_day=Rule(2))

    first = engine.generate_candidates(_catalog(), [], [], 12, constraints, Strategy.MAJOR_FOCUS, ['Marketing'])
    second = engine.generate_candidates(_catalog(), [], [], 12, constraints, Strategy.MAJOR_FOCUS, ['Marketing'])

    assert [(c.course_ids, c.score, c.warnings) for c in first.candidates] == \
        [(c.course_ids, c.score, c.warnings) for c in second.candidates]


def test_all_courses_blocked_reports_blocked_times():
    courses = [
        _mk_course('A', 3, ('MON', '09:00', '10:00')),
        _mk_course('B', 3, ('MON', '10:00', '11:00')),
    ]
    blocked = [BlockedInterval(Day.MON, 8 * 60, 12 * 60, 'work')]

    result = TimetableEngine().generate_candidates(courses, [], blocked, 6)

    assert result.candidates == []
    assert not result.feasible
    diagnostics = result.diagnostics
    assert diagnostics.valid_courses == 0
    assert diagnostics.removed_by_hard_filter == 2
    assert factors.BLOCKED_TIMES in diagnostics.infeasibility.factors
    assert factors.TARGET_EXCEEDS_SUPPLY in diagnostics.infeasibility.factors


def test_empty_catalog_reports_no_courses():
    result = TimetableEngine().generate_candidates([], [], [], 18)

    assert result.diagnostics.infeasibility.factors == [factors.NO_COURSES, factors.TARGET_EXCEEDS_SUPPLY]


def test_hard_rules_are_listed_as_factors():
    constraints = ConstraintSet(
        avoid_days=Rule(frozenset([Day.MON, Day.TUE, Day.WED, Day.THU, Day.FRI]), hard=True),
        avoid_morning=Rule(True, hard=True),
        keep_lunch_time=Rule(True),
    )

    result = TimetableEngine().generate_candidates(_catalog(), [], [], 12, constraints)

    report = result.diagnostics.infeasibility
    assert report is not None
    assert factors.HARD_AVOID_DAYS in report.factors
    assert factors.HARD_AVOID_MORNING in report.factors
    assert factors.HARD_KEEP_LUNCH not in report.factors
    assert report.valid_courses == 0


def test_hard_constraints_hold_on_every_result():
    constraints = ConstraintSet(
        avoid_days=Rule(frozenset([Day.FRI]), hard=True),
        avoid_morning=Rule(True, hard=True),
    )

    result = TimetableEngine().generate_candidates(_catalog(), [], [], 6, constraints)

    assert result.feasible
    for candidate in result.candidates:
        for slot in candidate.meeting_times():
            assert slot.day != Day.FRI
            assert slot.start >= 12 * 60


def test_fixed_lecture_is_respected():
    fixed = [FixedCommitment('LAB100', (TimeSlot.from_strings('MON', '09:00', '12:00'),), 3)]

    result = TimetableEngine().generate_candidates(_catalog(), fixed, [], 9)

    assert result.feasible
    assert result.diagnostics.removal_reasons.get('FIXED_OVERLAP') == 2
    for candidate in result.candidates:
        assert candidate.fixed_credits == 3
        assert not slots_conflict(candidate.meeting_times(), fixed[0].meeting_times)


def test_fixed_credits_above_window_are_reported():
    fixed = [FixedCommitment('BIG', (TimeSlot.from_strings('SAT', '09:00', '18:00'),), 12)]

    result = TimetableEngine().generate_candidates(_catalog(), fixed, [], 6)

    assert not result.feasible
    assert factors.FIXED_EXCEEDS_TARGET in result.diagnostics.infeasibility.factors


def test_soft_violation_still_returned_with_warning():
    courses = [
        _mk_course('A', 3, ('MON', '09:00', '10:00')),
        _mk_course('B', 3, ('MON', '13:00', '14:00')),
        _mk_course('C', 3, ('MON', '16:00', '17:00')),
    ]
    constraints = ConstraintSet(max_classes_per_day=Rule(2))

    result = TimetableEngine().generate_candidates(courses, [], [], 9, constraints)

    assert len(result.candidates) == 1
    assert 'TOO_MANY_CLASSES:MON' in result.candidates[0].warnings


def test_top_n_and_diagnostics():
    settings = EngineSettings(max_candidates=4)

    result = TimetableEngine(settings).generate_candidates(_catalog(), [], [], 6, top_n=2)

    assert len(result.candidates) == 2
    assert result.diagnostics.generated == 4
    assert result.diagnostics.cap_hit
    assert result.diagnostics.to_dict()['candidatesGenerated'] == 4


def test_module_level_wrapper():
    result = generate_candidates(_catalog(), [], [], 6)

    assert result.feasible
    assert len(result.candidates) == 3
