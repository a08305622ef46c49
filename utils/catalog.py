"""
Course catalog provider.
Reads the catalog tables once per TTL and hands the engine immutable Course values.
"""

import logging
import threading
import time
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from models import db, Course
from scheduler.entities import Course as EngineCourse

logger = logging.getLogger(__name__)


class CourseCatalog:
    """Cached snapshot of the catalog. Safe to share across request threads."""

    def __init__(self, ttl: int = 300):
        self.ttl = ttl
        self._lock = threading.Lock()
        self._snapshot: Optional[List[EngineCourse]] = None
        self._loaded_at = 0.0

    def _load(self) -> List[EngineCourse]:
        rows = Course.query.order_by(Course.course_id).all()
        return [row.to_engine() for row in rows]

    def _courses(self) -> List[EngineCourse]:
        with self._lock:
            now = time.monotonic()
            if self._snapshot is None or now - self._loaded_at > self.ttl:
                self._snapshot = self._load()
                self._loaded_at = now
                logger.info('Catalog loaded: %d courses', len(self._snapshot))
            return self._snapshot

    def get_courses(self, major: str = None, query: str = None) -> List[EngineCourse]:
        """
        Catalog courses, optionally narrowed to a major and a search text
        matched against id and name. Returns [] when the database is unavailable.
        """
        try:
            courses = self._courses()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Catalog unavailable: %s', e)
            return []

        if major:
            major = major.strip().lower()
            courses = [c for c in courses if (c.major or '').lower() == major]

        if query:
            query = query.strip().lower()
            courses = [
                c for c in courses
                if query in c.course_id.lower() or query in (c.name or '').lower()
            ]

        return list(courses)

    def clear_cache(self):
        with self._lock:
            self._snapshot = None
            self._loaded_at = 0.0
