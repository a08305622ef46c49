"""Seed data script to populate the database with a sample course catalog."""

import logging

from models import db, Course, MeetingTime
from utils.time_parser import parse_meeting_times

logger = logging.getLogger(__name__)

COURSES_DATA = [
    {
        'course_id': 'BUS2001-01', 'name': 'Principles of Marketing', 'credits': 3,
        'major': 'Business', 'track': 'Marketing', 'category': 'Major required',
        'tags': 'marketing', 'delivery_type': 'OFFLINE', 'instructor': 'Kim Jiyoung',
        'schedule': 'MON 09:00-10:30, WED 09:00-10:30', 'location': 'Business Hall 203',
    },
    {
        'course_id': 'BUS2001-02', 'name': 'Principles of Marketing', 'credits': 3,
        'major': 'Business', 'track': 'Marketing', 'category': 'Major required',
        'tags': 'marketing', 'delivery_type': 'OFFLINE', 'instructor': 'Park Minho',
        'schedule': '화/목 13:00-14:30', 'location': 'Business Hall 105',
    },
    {
        'course_id': 'BUS3010-01', 'name': 'Consumer Behavior', 'credits': 3,
        'major': 'Business', 'track': 'Marketing', 'category': 'Major elective',
        'tags': 'marketing, psychology, team', 'delivery_type': 'OFFLINE', 'instructor': 'Lee Sora',
        'schedule': 'TUE 10:30-12:00, THU 10:30-12:00', 'location': 'Business Hall 301',
    },
    {
        'course_id': 'BUS3020-01', 'name': 'Digital Marketing Analytics', 'credits': 3,
        'major': 'Business', 'track': 'Marketing', 'category': 'Major elective',
        'tags': 'marketing, data', 'delivery_type': 'ONLINE', 'instructor': 'Choi Eunji',
        'schedule': 'FRI 10:00-13:00', 'location': 'Online',
    },
    {
        'course_id': 'BUS2100-01', 'name': 'Financial Accounting', 'credits': 3,
        'major': 'Business', 'track': 'Finance', 'category': 'Major required',
        'tags': 'accounting', 'delivery_type': 'OFFLINE', 'instructor': 'Jung Hoon',
        'schedule': 'MON 13:00-14:30, WED 13:00-14:30', 'location': 'Business Hall 202',
    },
    {
        'course_id': 'BUS3150-01', 'name': 'Corporate Finance', 'credits': 3,
        'major': 'Business', 'track': 'Finance', 'category': 'Major elective',
        'tags': 'finance', 'delivery_type': 'HYBRID', 'instructor': 'Han Seojin',
        'schedule': 'TUE 15:00-16:30, THU 15:00-16:30', 'location': 'Business Hall 401',
    },
    {
        'course_id': 'BUS3300-01', 'name': 'Startup Project', 'credits': 3,
        'major': 'Business', 'track': 'Strategy', 'category': 'Major elective',
        'tags': 'startup, 팀플', 'delivery_type': 'OFFLINE', 'instructor': 'Yoon Daeho',
        'schedule': '수(15:00-18:00)', 'location': 'Startup Lab',
        'team_project': True,
    },
    {
        'course_id': 'CSE2010-01', 'name': 'Data Structures', 'credits': 3,
        'major': 'Computer Science', 'track': 'Software', 'category': 'Major required',
        'tags': 'programming', 'delivery_type': 'OFFLINE', 'instructor': 'Kang Minsu',
        'schedule': 'MON 10:30-12:00, WED 10:30-12:00', 'location': 'Engineering 501',
    },
    {
        'course_id': 'CSE3050-01', 'name': 'Introduction to Machine Learning', 'credits': 3,
        'major': 'Computer Science', 'track': 'AI', 'category': 'Major elective',
        'tags': 'ai, data, python', 'delivery_type': 'OFFLINE', 'instructor': 'Shin Yuna',
        'schedule': 'TUE 13:00-14:30, THU 13:00-14:30', 'location': 'Engineering 305',
    },
    {
        'course_id': 'GEN1001-01', 'name': 'Academic Writing', 'credits': 2,
        'major': '', 'track': None, 'category': 'General',
        'tags': 'writing', 'delivery_type': 'ONLINE', 'instructor': 'Oh Jisu',
        'schedule': 'FRI 14:00-16:00', 'location': 'Online',
    },
    {
        'course_id': 'GEN1100-01', 'name': 'Psychology and Everyday Life', 'credits': 3,
        'major': '', 'track': None, 'category': 'General',
        'tags': 'psychology', 'delivery_type': 'OFFLINE', 'instructor': 'Baek Hana',
        'schedule': '월/수 16:30-18:00', 'location': 'Humanities 110',
    },
    {
        'course_id': 'GEN1200-01', 'name': 'Introduction to Statistics', 'credits': 3,
        'major': '', 'track': None, 'category': 'General',
        'tags': 'data, statistics', 'delivery_type': 'ONLINE', 'instructor': 'Seo Junho',
        'schedule': 'THU 09:00-12:00', 'location': 'Online',
    },
    {
        'course_id': 'GEN1300-01', 'name': 'Global Culture Seminar', 'credits': 2,
        'major': '', 'track': None, 'category': 'General',
        'tags': 'culture', 'delivery_type': 'OFFLINE', 'instructor': 'Moon Yerin',
        'schedule': '금 09:00-11:00', 'location': 'Humanities 204',
    },
    {
        'course_id': 'GEN1400-01', 'name': 'Physical Education: Tennis', 'credits': 1,
        'major': '', 'track': None, 'category': 'General',
        'tags': 'sports', 'delivery_type': 'OFFLINE', 'instructor': 'Kwon Taeyang',
        'schedule': 'TUE 17:00-19:00', 'location': 'Tennis Court',
    },
]


def seed_database():
    """Replace the catalog with the sample courses. Returns the number of courses added."""

    # Clear existing data
    MeetingTime.query.delete()
    Course.query.delete()

    count = 0
    for c_data in COURSES_DATA:
        c_data = dict(c_data)
        schedule = c_data.pop('schedule')
        location = c_data.pop('location', None)

        slots = parse_meeting_times(schedule)
        if not slots:
            logger.warning('Skipping %s: unreadable schedule %r', c_data['course_id'], schedule)
            continue

        course = Course(**c_data)
        for slot in slots:
            course.meeting_times.append(MeetingTime(
                day=slot.day.value,
                start_min=slot.start,
                end_min=slot.end,
                location=location
            ))
        db.session.add(course)
        count += 1

    db.session.commit()
    logger.info('Seeded %d courses', count)
    return count


if __name__ == '__main__':
    from app import app
    with app.app_context():
        print(f'Seeded {seed_database()} courses.')
