from datetime import datetime
from .database import db

from scheduler.entities import Course as EngineCourse, DeliveryType


class Course(db.Model):
    """Catalog course offered this term."""

    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.String(40), nullable=False, unique=True, index=True)  # e.g. "CSE3010-01"
    name = db.Column(db.String(200), nullable=False)
    credits = db.Column(db.Integer, nullable=False, default=3)
    major = db.Column(db.String(100), nullable=False, default='')
    track = db.Column(db.String(100), nullable=True)
    category = db.Column(db.String(50), nullable=False, default='')  # Major required, elective, general...
    tags = db.Column(db.String(300), nullable=False, default='')  # Comma separated
    delivery_type = db.Column(db.String(10), nullable=False, default='OFFLINE')  # ONLINE, OFFLINE, HYBRID
    team_project = db.Column(db.Boolean, nullable=False, default=False)
    instructor = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationship to weekly meetings
    meeting_times = db.relationship(
        'MeetingTime', backref='course', lazy='selectin',
        cascade="all, delete-orphan", order_by='MeetingTime.id'
    )

    def __repr__(self):
        return f'<Course {self.course_id}: {self.name}>'

    def get_tags(self):
        """Parse 'ai, data,team' into ['ai', 'data', 'team']."""
        return [t.strip() for t in (self.tags or '').split(',') if t.strip()]

    def to_engine(self) -> EngineCourse:
        """Immutable value handed to the recommendation engine."""
        return EngineCourse(
            course_id=self.course_id,
            credits=self.credits,
            meeting_times=tuple(m.to_slot() for m in self.meeting_times),
            delivery_type=DeliveryType.parse(self.delivery_type),
            tags=frozenset(self.get_tags()),
            major=self.major or '',
            track=self.track,
            team_project=bool(self.team_project),
            name=self.name,
            instructor=self.instructor,
            category=self.category or '',
        )

    def to_dict(self):
        return {
            'id': self.id,
            'courseId': self.course_id,
            'name': self.name,
            'credits': self.credits,
            'major': self.major,
            'track': self.track,
            'category': self.category,
            'tags': self.get_tags(),
            'deliveryType': self.delivery_type,
            'teamProject': self.team_project,
            'instructor': self.instructor,
            'meetingTimes': [m.to_dict() for m in self.meeting_times],
        }
