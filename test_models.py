from data.seed_data import COURSES_DATA, seed_database
from models import Course, MeetingTime
from scheduler.entities import DeliveryType
from scheduler.timeslot import Day, TimeSlot


def test_to_engine_builds_immutable_course(app, add_course):
    add_course('BUS3300-01', 3, '수(15:00-18:00)', tags='startup, 팀플', delivery_type='hybrid',
               major='Business', track='Strategy')

    course = Course.query.filter_by(course_id='BUS3300-01').one().to_engine()

    assert course.meeting_times == (TimeSlot(Day.WED, 900, 1080),)
    assert course.delivery_type == DeliveryType.HYBRID
    assert course.tags == frozenset(['startup', '팀플'])
    assert course.is_team_project
    assert course.track == 'Strategy'


def test_bad_stored_day_is_left_for_the_filter(app, add_course):
    course = add_course('ODD-01', 3, 'MON 09:00-10:00')
    course.meeting_times.append(MeetingTime(day='XX', start_min=600, end_min=660))

    engine_course = course.to_engine()

    assert not engine_course.meeting_times[1].is_valid


def test_seed_database_loads_every_sample_course(app):
    count = seed_database()

    assert count == len(COURSES_DATA)
    assert Course.query.count() == count
    marketing = Course.query.filter_by(course_id='BUS2001-02').one()
    assert [m.day for m in marketing.meeting_times] == ['TUE', 'THU']


def test_seed_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed'])

    assert 'Seeded' in result.output
    assert Course.query.count() == len(COURSES_DATA)
