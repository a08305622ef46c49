import pytest

from scheduler.entities import Strategy
from scheduler.timeslot import Day, TimeSlot
from utils.request_parser import (
    InvalidRequest, parse_blocked_times, parse_fixed_lectures, parse_recommend_request, parse_target_credits,
)


@pytest.mark.parametrize('value, expected', [
    (15, 15), ('15', 15), ('15~18', 15), ('18-21', 18), (None, 18), ('', 18), (0, 18), (-3, 18),
])
def test_parse_target_credits(value, expected):
    assert parse_target_credits(value, 18) == expected


@pytest.mark.parametrize('value', [True, 'lots', [18]])
def test_parse_target_credits_rejects_garbage(value):
    with pytest.raises(InvalidRequest):
        parse_target_credits(value, 18)


def test_fixed_lectures_accept_meeting_times_schedule_and_grid():
    fixed = parse_fixed_lectures([
        {'code': 'A', 'credits': 3, 'meetingTimes': [{'day': 'MON', 'startTime': '09:00', 'endTime': '10:30'}]},
        {'code': 'B', 'schedule': '화/목 13:00-14:30'},
        {'code': 'C', 'credits': 2, 'day': 4, 'startHour': 1, 'duration': 3},
    ])

    assert fixed[0].meeting_times == (TimeSlot(Day.MON, 540, 630),)
    assert fixed[0].credits == 3
    assert fixed[1].meeting_times == (TimeSlot(Day.TUE, 780, 870), TimeSlot(Day.THU, 780, 870))
    assert fixed[1].credits == 0
    assert fixed[2].meeting_times == (TimeSlot(Day.FRI, 600, 690),)


@pytest.mark.parametrize('items', [
    [{'credits': 3, 'schedule': 'MON 09:00-10:00'}],
    [{'code': 'A', 'schedule': 'sometime'}],
    [{'code': 'A', 'meetingTimes': [{'day': 'MON', 'startTime': '10:00', 'endTime': '09:00'}]}],
    [{'code': 'A', 'credits': -1, 'schedule': 'MON 09:00-10:00'}],
    'not a list',
])
def test_fixed_lectures_reject_malformed(items):
    with pytest.raises(InvalidRequest):
        parse_fixed_lectures(items)


def test_blocked_times_accept_clock_and_grid_forms():
    blocked = parse_blocked_times([
        {'day': '수', 'startTime': '18:00', 'endTime': '22:00', 'label': 'part-time job'},
        {'day': 0, 'start': 0, 'end': 3},
    ])

    assert blocked[0].slot == TimeSlot(Day.WED, 1080, 1320)
    assert blocked[0].label == 'part-time job'
    assert blocked[1].slot == TimeSlot(Day.MON, 540, 720)


def test_blocked_time_without_range_is_rejected():
    with pytest.raises(InvalidRequest) as excinfo:
        parse_blocked_times([{'day': 'MON'}])
    assert excinfo.value.to_dict()['field'] == 'blockedTimes'


def test_full_request():
    req = parse_recommend_request({
        'targetCredits': '15~18',
        'strategy': 'major_focus',
        'tracks': ['Marketing', ' '],
        'interests': ['data'],
        'constraints': {'hard': ['MON'], 'soft': ['keep_lunch_time']},
        'basket': [{'code': 'OLD', 'schedule': 'FRI 09:00-10:00'}],
        'topN': 5,
    })

    assert req.target_credits == 15
    assert req.strategy == Strategy.MAJOR_FOCUS
    assert req.tracks == ['Marketing']
    assert req.constraints.hard('avoid_days') == frozenset([Day.MON])
    assert [f.course_id for f in req.fixed_commitments] == ['OLD']
    assert req.top_n == 5


def test_basket_with_named_day_uses_clock_hours():
    req = parse_recommend_request({
        'basket': [
            {'code': 'X', 'day': '월', 'startHour': 9, 'duration': 2},
            {'code': 'Y', 'day': 2, 'startHour': 4, 'duration': 2},
        ],
    })

    assert req.fixed_commitments[0].meeting_times == (TimeSlot(Day.MON, 540, 660),)
    assert req.fixed_commitments[1].meeting_times == (TimeSlot(Day.WED, 780, 840),)


def test_defaults():
    req = parse_recommend_request({}, default_target=18)

    assert req.target_credits == 18
    assert req.strategy == Strategy.MIX
    assert req.fixed_commitments == [] and req.blocked_intervals == []
    assert req.top_n is None


@pytest.mark.parametrize('body', [
    [],
    {'strategy': 'RANDOM'},
    {'constraints': {'avoidDays': ['Funday']}},
    {'topN': 0},
    {'tracks': 'Marketing'},
])
def test_bad_requests(body):
    with pytest.raises(InvalidRequest):
        parse_recommend_request(body)
