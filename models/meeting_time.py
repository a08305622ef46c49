from .database import db

from scheduler.timeslot import Day, TimeSlot, format_minutes


class MeetingTime(db.Model):
    """One weekly meeting of a course: day, start/end minutes and room."""

    __tablename__ = 'meeting_times'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    day = db.Column(db.String(3), nullable=False)  # MON ... SUN
    start_min = db.Column(db.Integer, nullable=False)  # Minutes since midnight
    end_min = db.Column(db.Integer, nullable=False)
    location = db.Column(db.String(100), nullable=True)  # e.g. "Business Hall 203"

    def __repr__(self):
        return f'<MeetingTime {self.day} {format_minutes(self.start_min)}-{format_minutes(self.end_min)}>'

    def to_slot(self) -> TimeSlot:
        """
        Engine slot for this row. A bad day code is passed through as-is so the
        engine's filter drops the course instead of failing the whole catalog.
        """
        try:
            day = Day(self.day.upper())
        except (AttributeError, ValueError):
            day = self.day
        return TimeSlot(day, self.start_min, self.end_min)

    def to_dict(self):
        return {
            'day': self.day,
            'startTime': format_minutes(self.start_min),
            'endTime': format_minutes(self.end_min),
            'startMin': self.start_min,
            'endMin': self.end_min,
            'location': self.location,
        }
