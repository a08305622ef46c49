from .database import db
from .course import Course
from .meeting_time import MeetingTime

__all__ = ['db', 'Course', 'MeetingTime']
