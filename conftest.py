import os

# Must be set before config.py is imported by app
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ.setdefault('LOG_LEVEL', 'WARNING')

import pytest

from app import app as flask_app
from models import db, Course, MeetingTime
from utils.time_parser import parse_meeting_times


@pytest.fixture
def app():
    flask_app.config['TESTING'] = True
    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        flask_app.extensions['course_catalog'].clear_cache()
        yield flask_app
        db.session.remove()
        db.drop_all()
    flask_app.extensions['course_catalog'].clear_cache()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_course(app):
    """Insert a catalog course from schedule text, e.g. add_course('A-01', 3, 'MON 09:00-10:30')."""
    def _add(course_id, credits=3, schedule='MON 09:00-10:00', **fields):
        fields.setdefault('name', f'Course {course_id}')
        course = Course(course_id=course_id, credits=credits, **fields)
        for slot in parse_meeting_times(schedule):
            course.meeting_times.append(
                MeetingTime(day=slot.day.value, start_min=slot.start, end_min=slot.end)
            )
        db.session.add(course)
        db.session.commit()
        app.extensions['course_catalog'].clear_cache()
        return course
    return _add
