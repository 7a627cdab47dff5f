"""
Course catalog service for CourseHub.

Keyed access to course documents by their public numeric id, plus the
administrative content operations. Routes and the progress tracker share
one instance per request.
"""

import logging
from copy import deepcopy
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models.course import Course


logger = logging.getLogger(__name__)


class CourseCatalog:
    """Read/write access to courses through a database session."""

    def __init__(self, db: Session):
        self.db = db

    def list_courses(self) -> List[Course]:
        return self.db.query(Course).order_by(Course.pk).all()

    def find(self, course_id: int) -> Optional[Course]:
        return self.db.query(Course).filter(Course.id == int(course_id)).first()

    def get(self, course_id: int) -> Course:
        course = self.find(course_id)
        if not course:
            raise NotFoundError("Course not found")
        return course

    def find_many(self, course_ids: Iterable[int]) -> Dict[int, Course]:
        """Courses for ``course_ids`` keyed by id; missing ids are absent."""
        ids = [int(course_id) for course_id in course_ids]
        if not ids:
            return {}
        courses = self.db.query(Course).filter(Course.id.in_(ids)).all()
        return {course.id: course for course in courses}

    def total_lessons(self, course_id: int) -> int:
        """Lesson count across modules; 0 when the course does not exist."""
        course = self.find(course_id)
        return course.total_lessons if course else 0

    def stats_cards(self) -> List[Dict[str, Any]]:
        """Stats cards from the first course document that carries any."""
        for course in self.list_courses():
            if course.stats_cards:
                return course.stats_cards
        raise NotFoundError("Stats cards not found")

    # Administration

    def create(self, data: Dict[str, Any]) -> Course:
        if self.find(data["id"]):
            raise ConflictError("Course with this ID already exists")

        course = Course(**data)
        self.db.add(course)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Course with this ID already exists")
        self.db.refresh(course)
        logger.info(f"Course created: {course.id} '{course.title}'")
        return course

    def delete(self, course_id: int) -> None:
        course = self.get(course_id)
        self.db.delete(course)
        self.db.commit()
        logger.info(f"Course removed: {course_id}")

    def add_modules(self, course_id: int, modules: List[Dict[str, Any]]) -> Course:
        course = self.get(course_id)
        course.modules = (course.modules or []) + modules
        self.db.commit()
        self.db.refresh(course)
        return course

    def add_lessons(self, course_id: int, module_id: str, lessons: List[Dict[str, Any]]) -> Dict[str, Any]:
        course = self.get(course_id)
        modules = deepcopy(course.modules or [])
        module = next((m for m in modules if m.get("id") == module_id), None)
        if module is None:
            raise NotFoundError("Module not found")

        module["lessons"] = (module.get("lessons") or []) + lessons
        course.modules = modules
        self.db.commit()
        return module

    def add_subtopics(self, course_id: int, subtopics: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        course = self.get(course_id)
        course.curriculum = (course.curriculum or []) + subtopics
        self.db.commit()
        return course.curriculum

    def set_lesson_video(self, course_id: int, lesson_id: str, youtube_url: str) -> None:
        """Set a lesson's video URL in its module and in the mirrored current lesson."""
        course = self.get(course_id)
        found = False

        modules = deepcopy(course.modules or [])
        for module in modules:
            for lesson in module.get("lessons") or []:
                if lesson.get("id") == lesson_id:
                    lesson["youtube_url"] = youtube_url
                    found = True
        if found:
            course.modules = modules

        if course.current_lesson and course.current_lesson.get("id") == lesson_id:
            course.current_lesson = {**course.current_lesson, "youtube_url": youtube_url}
            found = True

        if not found:
            raise NotFoundError("Lesson not found")
        self.db.commit()
