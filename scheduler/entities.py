"""Domain values the engine reads and produces."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple, FrozenSet

from .timeslot import TimeSlot, Day

# Tag fragments that mark a course as involving a team project
TEAM_PROJECT_MARKERS = ('team', '팀플', '프로젝트')


class DeliveryType(str, Enum):
    ONLINE = 'ONLINE'
    OFFLINE = 'OFFLINE'
    HYBRID = 'HYBRID'

    @classmethod
    def parse(cls, value) -> 'DeliveryType':
        """Lenient parse; anything unknown is treated as OFFLINE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or '').strip().upper())
        except ValueError:
            return cls.OFFLINE


class Strategy(str, Enum):
    MAJOR_FOCUS = 'MAJOR_FOCUS'
    MIX = 'MIX'
    INTEREST_FOCUS = 'INTEREST_FOCUS'


@dataclass(frozen=True)
class Course:
    """A catalog course as seen by the engine. Read-only for one request."""
    course_id: str
    credits: int
    meeting_times: Tuple[TimeSlot, ...] = ()
    delivery_type: DeliveryType = DeliveryType.OFFLINE
    tags: FrozenSet[str] = frozenset()
    major: str = ''
    track: Optional[str] = None
    team_project: bool = False
    name: str = ''
    instructor: Optional[str] = None
    category: str = ''

    @property
    def is_online(self) -> bool:
        return self.delivery_type == DeliveryType.ONLINE

    @property
    def is_team_project(self) -> bool:
        if self.team_project:
            return True
        return any(
            marker in tag.lower()
            for tag in self.tags
            for marker in TEAM_PROJECT_MARKERS
        )

    @property
    def days(self) -> FrozenSet[Day]:
        return frozenset(slot.day for slot in self.meeting_times)

    def matches_tracks(self, tracks: List[str]) -> bool:
        """Major/track affinity: course major, track or a tag names a requested track."""
        for track in tracks:
            if not track:
                continue
            if track in self.major or track == self.track or track in self.tags:
                return True
        return False

    def matches_interests(self, interests: List[str]) -> int:
        """Number of requested interests found in the name or tags (case-insensitive)."""
        name = self.name.lower()
        tags = [t.lower() for t in self.tags]
        count = 0
        for interest in interests:
            needle = interest.strip().lower()
            if not needle:
                continue
            if needle in name or any(needle in tag for tag in tags):
                count += 1
        return count

    def to_dict(self):
        return {
            'courseId': self.course_id,
            'name': self.name,
            'credits': self.credits,
            'major': self.major,
            'track': self.track,
            'category': self.category,
            'tags': sorted(self.tags),
            'deliveryType': self.delivery_type.value,
            'teamProject': self.is_team_project,
            'instructor': self.instructor,
            'meetingTimes': [slot.to_dict() for slot in self.meeting_times],
        }


@dataclass(frozen=True)
class FixedCommitment:
    """A course (or course-like block) the user already locked in."""
    course_id: str
    meeting_times: Tuple[TimeSlot, ...] = ()
    credits: int = 0


@dataclass(frozen=True)
class BlockedInterval:
    """A hard-unavailable window, e.g. a part-time job."""
    day: Day
    start: int
    end: int
    label: Optional[str] = None

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(self.day, self.start, self.end)


@dataclass(frozen=True)
class Candidate:
    """One feasible combination. Score and warnings are filled in by the Scorer."""
    courses: Tuple[Course, ...]
    fixed_credits: int = 0
    score: float = 0.0
    warnings: Tuple[str, ...] = ()

    @property
    def total_credits(self) -> int:
        return self.fixed_credits + sum(c.credits for c in self.courses)

    @property
    def course_ids(self) -> List[str]:
        return [c.course_id for c in self.courses]

    @property
    def signature(self) -> Tuple[str, ...]:
        """Order-independent identity of the course set."""
        return tuple(sorted(self.course_ids))

    def meeting_times(self) -> List[TimeSlot]:
        slots = []
        for course in self.courses:
            slots.extend(course.meeting_times)
        return slots

    def scored(self, score: float, warnings: List[str]) -> 'Candidate':
        return replace(self, score=score, warnings=tuple(warnings))
