"""
Courses router for CourseHub.

Handles user-facing course endpoints: the public catalog, course details,
stats cards, the caller's purchased courses, and owner-only learning content.
"""

from typing import List, Dict, Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ForbiddenError
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.course import (
    CourseCard,
    CourseDetail,
    CourseLearning,
    MyCourse,
    StatsCardsResponse
)
from app.services.catalog import CourseCatalog
from app.utils.analytics import course_progress_summary


router = APIRouter()


def get_course_catalog(db: Session = Depends(get_db)) -> CourseCatalog:
    return CourseCatalog(db)


@router.get("", response_model=List[CourseCard])
async def list_courses(
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> List[Dict[str, Any]]:
    """
    List all courses for the explore tab.
    """
    return [course.to_card() for course in catalog.list_courses()]


# Static paths must be registered before /{course_id}
@router.get("/stats/cards", response_model=StatsCardsResponse)
async def get_stats_cards(
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Get the dashboard stats cards.
    """
    return {"stats_cards": catalog.stats_cards()}


@router.get("/my-courses", response_model=List[MyCourse])
async def get_my_courses(
    current_user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> List[Dict[str, Any]]:
    """
    Get course cards for the caller's purchased courses, with progress.
    """
    purchases = current_user.purchased_courses or []
    courses = catalog.find_many(p["course_id"] for p in purchases)

    my_courses = []
    for purchase in purchases:
        course = courses.get(purchase["course_id"])
        if not course:
            continue

        total_lessons = course.total_lessons or course.lessons_count
        completed = len(purchase["progress"]["completed_lessons"])

        my_courses.append({
            "id": course.id,
            "title": course.title,
            "level": course.level,
            "level_color": course.level_color,
            "image": course.image,
            "rating": course.rating,
            "students": course.students,
            "background_gradient": course.background_gradient,
            "background_image": course.background_image,
            "button_style": course.button_style,
            "button_text": course.button_text,
            **course_progress_summary(completed, total_lessons)
        })

    return my_courses


@router.get("/{course_id}", response_model=CourseDetail)
async def get_course(
    course_id: int,
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Get detailed information about a specific course.
    """
    return catalog.get(course_id).to_dict()


@router.get("/{course_id}/learning", response_model=CourseLearning)
async def get_course_learning(
    course_id: int,
    current_user: User = Depends(get_current_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Get modules and curriculum for a course the caller has purchased.
    """
    if not current_user.has_purchased(course_id):
        raise ForbiddenError("Access denied. Course not purchased.")

    return catalog.get(course_id).to_learning_dict()
