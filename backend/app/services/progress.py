"""
User progress tracker for CourseHub.

Records purchases, reconciles lesson progress into the user's analytics
document, and builds the watched-videos view. The tracker only mutates the
in-memory ``User``; the caller commits once, so a failure part-way through
leaves the stored row unchanged.
"""

import logging
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from app.core.config import Settings, settings as app_settings
from app.core.exceptions import ConflictError, NotFoundError
from app.models.user import User
from app.services.catalog import CourseCatalog
from app.utils.analytics import (
    build_watched_videos,
    calendar_date,
    default_analytics,
    find_purchase,
    merge_completed_lessons,
    new_purchase,
    recompute_derived_analytics,
    record_study_session,
    register_study_day,
    summarize_watch_metrics,
    update_learning_hours_chart,
)


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProgressTracker:
    """
    Purchase and progress operations for one user record at a time.

    Args:
        catalog: Course lookups used for existence and lesson totals
        clock: Returns the current time; injectable for tests
        config: Settings providing the analytics constants
    """

    def __init__(
        self,
        catalog: CourseCatalog,
        clock: Callable[[], datetime] = utcnow,
        config: Optional[Settings] = None
    ):
        self.catalog = catalog
        self.clock = clock
        self.config = config or app_settings

    def purchase_course(self, user: User, course_id: int, course_title: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Append a purchase record for ``course_id``.

        Raises:
            ConflictError: The course is already purchased
            NotFoundError: The course is not in the catalog
        """
        purchases = deepcopy(user.purchased_courses or [])
        if find_purchase(purchases, course_id) is not None:
            raise ConflictError("Course already purchased")

        course = self.catalog.get(course_id)
        purchases.append(new_purchase(course.id, course_title or course.title, self.clock()))
        user.purchased_courses = purchases

        logger.info(f"User {user.id} purchased course {course.id}")
        return purchases

    def update_progress(
        self,
        user: User,
        course_id: int,
        completed_lessons: Optional[List[str]] = None,
        current_lesson: Optional[Dict[str, Any]] = None,
        study_hours: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        """
        Record completed lessons and the current lesson, then fold the
        activity into the user's analytics.

        Analytics change only when new lessons were completed or positive
        ``study_hours`` were reported.

        Raises:
            NotFoundError: The course is not among the user's purchases
        """
        purchases = deepcopy(user.purchased_courses or [])
        index = find_purchase(purchases, course_id)
        if index is None:
            raise NotFoundError("Course not found in purchased courses")

        now = self.clock()
        purchase = purchases[index]
        progress = purchase.setdefault("progress", {"completed_lessons": [], "current_lesson": None})

        new_count = merge_completed_lessons(progress, completed_lessons or [], now)
        if current_lesson:
            progress["current_lesson"] = current_lesson

        if new_count > 0 or (study_hours and study_hours > 0):
            analytics = deepcopy(user.analytics or default_analytics())
            hours = study_hours or new_count * self.config.HOURS_PER_LESSON

            register_study_day(analytics, now)
            record_study_session(analytics, hours, now)
            analytics["learning_hours_chart"] = update_learning_hours_chart(
                analytics.get("learning_hours_chart") or [],
                calendar_date(now),
                hours,
                self.config.LEARNING_CHART_DAYS
            )
            recompute_derived_analytics(analytics, len(purchases), self.config.ATTENDANCE_WINDOW_DAYS)
            self._check_completion(purchase, analytics, now)

            user.analytics = analytics

        user.purchased_courses = purchases
        return purchases

    def _check_completion(self, purchase: Dict[str, Any], analytics: Dict[str, Any], now: datetime) -> None:
        total = self.catalog.total_lessons(purchase["course_id"])
        done = len(purchase["progress"]["completed_lessons"])
        if total == 0 or done < total:
            return

        if purchase.get("completed") and not self.config.RECOUNT_COMPLETED_COURSES:
            return

        if not purchase.get("completed"):
            purchase["completed"] = True
            purchase["completed_at"] = now.isoformat()
        analytics["completed_courses"] = analytics.get("completed_courses", 0) + 1
        analytics["certificates"] = analytics.get("certificates", 0) + 1
        logger.info(f"Course {purchase['course_id']} completed, certificate issued")

    def watched_videos(self, user: User) -> Dict[str, Any]:
        """Lesson-level watch status for every purchased course, with metrics."""
        now = self.clock()
        purchases = user.purchased_courses or []
        courses = self.catalog.find_many(p["course_id"] for p in purchases)

        videos = build_watched_videos(
            purchases,
            {course_id: {"modules": course.modules} for course_id, course in courses.items()},
            now,
            self.config.DEFAULT_IN_PROGRESS_PERCENT
        )
        metrics = summarize_watch_metrics(
            user.analytics or default_analytics(),
            videos,
            calendar_date(now),
            self.config.DEFAULT_SESSION_MINUTES
        )
        return {
            "videos": videos,
            "metrics": metrics,
            "courses": [
                {"id": p["course_id"], "title": p.get("course_title")}
                for p in purchases
            ],
        }
