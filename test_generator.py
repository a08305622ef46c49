from scheduler.constraints import ConstraintSet, Rule
from scheduler.entities import Course, FixedCommitment
from scheduler.generator import CandidateGenerator
from scheduler.settings import EngineSettings
from scheduler.timeslot import TimeSlot, courses_conflict, slots_conflict

DAYS = ['MON', 'TUE', 'WED', 'THU', 'FRI']


def _mk_course(course_id, credits, day, start, end):
    return Course(course_id, credits, (TimeSlot.from_strings(day, start, end),))


def _mk_pool(size, credits=3):
    """Non-overlapping courses spread over the week, two hours apart."""
    courses = []
    for i in range(size):
        day = DAYS[i % 5]
        hour = 9 + 2 * (i // 5)
        courses.append(_mk_course(f'C{i:02d}', credits, day, f'{hour:02d}:00', f'{hour + 1:02d}:00'))
    return courses


def _generate(courses, target, settings=None, constraints=None, fixed=()):
    generator = CandidateGenerator(settings or EngineSettings(), constraints or ConstraintSet(), fixed)
    return generator.generate(courses, target)


def test_two_compatible_courses_make_exactly_one_candidate():
    a = _mk_course('A', 3, 'MON', '09:00', '10:30')
    b = _mk_course('B', 3, 'TUE', '09:00', '10:30')

    result = _generate([a, b], 6)

    assert len(result.candidates) == 1
    assert sorted(result.candidates[0].course_ids) == ['A', 'B']
    assert result.candidates[0].total_credits == 6
    assert not result.cap_hit


def test_overlapping_courses_never_share_a_candidate():
    a = _mk_course('A', 3, 'MON', '09:00', '10:30')
    b = _mk_course('B', 3, 'MON', '10:00', '11:00')
    c = _mk_course('C', 3, 'TUE', '09:00', '10:30')

    result = _generate([a, b, c], 6)

    assert sorted(tuple(sorted(c.course_ids)) for c in result.candidates) == [('A', 'C'), ('B', 'C')]
    for candidate in result.candidates:
        for i, x in enumerate(candidate.courses):
            for y in candidate.courses[i + 1:]:
                assert not courses_conflict(x, y)


def test_every_candidate_lands_in_the_credit_window():
    courses = [
        _mk_course('A', 1, 'MON', '09:00', '10:00'),
        _mk_course('B', 2, 'TUE', '09:00', '10:00'),
        _mk_course('C', 3, 'WED', '09:00', '10:00'),
        _mk_course('D', 4, 'THU', '09:00', '10:00'),
        _mk_course('E', 3, 'FRI', '09:00', '10:00'),
    ]

    result = _generate(courses, 7)

    assert result.candidates
    assert all(7 <= c.total_credits <= 10 for c in result.candidates)


def test_cap_stops_the_search():
    settings = EngineSettings(max_candidates=5)

    result = _generate(_mk_pool(20), 9, settings=settings)

    assert len(result.candidates) == 5
    assert result.cap_hit


def test_no_duplicate_course_sets():
    result = _generate(_mk_pool(10), 9)

    signatures = [c.signature for c in result.candidates]
    assert len(signatures) == len(set(signatures))
    for candidate in result.candidates:
        assert len(set(candidate.course_ids)) == len(candidate.course_ids)


def test_same_input_gives_same_output():
    pool = _mk_pool(15)

    first = _generate(pool, 12)
    second = _generate(pool, 12)

    assert [c.course_ids for c in first.candidates] == [c.course_ids for c in second.candidates]


def test_node_budget_marks_search_exhausted():
    settings = EngineSettings(max_candidates=10000, max_search_nodes=50)

    result = _generate(_mk_pool(25), 15, settings=settings)

    assert result.search_exhausted
    assert result.nodes_visited <= 50


def test_fixed_commitments_count_toward_credits_and_block_time():
    fixed = [FixedCommitment('FIX', (TimeSlot.from_strings('MON', '09:00', '12:00'),), 3)]
    courses = [
        _mk_course('A', 3, 'MON', '10:00', '11:00'),
        _mk_course('B', 3, 'TUE', '09:00', '10:00'),
        _mk_course('C', 3, 'WED', '09:00', '10:00'),
    ]

    result = _generate(courses, 6, fixed=fixed)

    ids = sorted(tuple(sorted(c.course_ids)) for c in result.candidates)
    assert ids == [('B',), ('C',)]
    for candidate in result.candidates:
        assert candidate.total_credits == 6
        assert not slots_conflict(candidate.meeting_times(), fixed[0].meeting_times)


def test_hard_daily_limit_prunes_combinations():
    courses = [
        _mk_course('A', 3, 'MON', '09:00', '10:00'),
        _mk_course('B', 3, 'MON', '13:00', '14:00'),
        _mk_course('C', 3, 'MON', '16:00', '17:00'),
        _mk_course('D', 3, 'TUE', '09:00', '10:00'),
    ]
    constraints = ConstraintSet(max_classes_per_day=Rule(2, hard=True))

    result = _generate(courses, 9, constraints=constraints)

    assert result.candidates
    for candidate in result.candidates:
        monday = [c for c in candidate.courses if c.meeting_times[0].day.value == 'MON']
        assert len(monday) <= 2


def test_no_candidates_when_supply_is_short():
    result = _generate(_mk_pool(2), 18)

    assert result.candidates == []
    assert not result.cap_hit
    assert not result.search_exhausted
