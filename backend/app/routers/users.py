"""
Users router for CourseHub.

Handles the caller's profile and settings, course purchases, progress
updates, and the watched-videos dashboard.
"""

from copy import deepcopy
from typing import Dict, Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ConflictError
from app.models.user import User
from app.routers.auth import get_current_user
from app.routers.courses import get_course_catalog
from app.schemas.user import (
    UserProfile,
    ProfileUpdate,
    PurchaseRequest,
    ProgressUpdate,
    PurchasedCoursesResponse,
    WatchedVideosResponse,
    SettingsUpdate,
    SettingsResponse
)
from app.services.catalog import CourseCatalog
from app.services.progress import ProgressTracker
from app.utils.analytics import default_settings


router = APIRouter()


def get_progress_tracker(
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> ProgressTracker:
    return ProgressTracker(catalog)


@router.get("/profile", response_model=UserProfile)
async def get_profile(
    current_user: User = Depends(get_current_user)
) -> Dict[str, Any]:
    """
    Get the caller's profile, purchases and analytics.
    """
    return current_user.to_dict()


@router.put("/profile", response_model=UserProfile)
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Update name, email and bio. Omitted or empty fields keep their value.
    """
    if profile.email and profile.email != current_user.email:
        taken = db.query(User).filter(User.email == profile.email).first()
        if taken:
            raise ConflictError("Email already in use")
        current_user.email = profile.email

    current_user.first_name = profile.first_name or current_user.first_name
    current_user.last_name = profile.last_name or current_user.last_name
    current_user.name = f"{current_user.first_name or ''} {current_user.last_name or ''}".strip()
    current_user.bio = profile.bio or current_user.bio

    db.commit()
    db.refresh(current_user)
    return current_user.to_dict()


@router.post("/purchase-course", response_model=PurchasedCoursesResponse)
async def purchase_course(
    purchase: PurchaseRequest,
    current_user: User = Depends(get_current_user),
    tracker: ProgressTracker = Depends(get_progress_tracker),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Purchase a course.
    """
    purchased = tracker.purchase_course(current_user, purchase.course_id, purchase.course_title)
    db.commit()

    return {
        "message": "Course purchased successfully",
        "purchased_courses": purchased
    }


@router.put("/course-progress", response_model=PurchasedCoursesResponse)
async def update_course_progress(
    update: ProgressUpdate,
    current_user: User = Depends(get_current_user),
    tracker: ProgressTracker = Depends(get_progress_tracker),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Record completed lessons and the current lesson for a purchased course.
    """
    purchased = tracker.update_progress(
        current_user,
        update.course_id,
        completed_lessons=update.completed_lessons,
        current_lesson=update.current_lesson.model_dump(exclude_none=True) if update.current_lesson else None,
        study_hours=update.study_hours
    )
    db.commit()

    return {
        "message": "Progress updated successfully",
        "purchased_courses": purchased
    }


@router.get("/watched-videos", response_model=WatchedVideosResponse)
async def get_watched_videos(
    current_user: User = Depends(get_current_user),
    tracker: ProgressTracker = Depends(get_progress_tracker)
) -> Dict[str, Any]:
    """
    Get watch status for every lesson of the caller's purchased courses.
    """
    return tracker.watched_videos(current_user)


@router.put("/settings", response_model=SettingsResponse)
async def update_settings(
    update: SettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Merge notification, security and appearance preferences.
    """
    user_settings = deepcopy(current_user.settings or default_settings())
    for section, values in update.model_dump(exclude_none=True).items():
        user_settings[section] = {**user_settings.get(section, {}), **values}

    current_user.settings = user_settings
    db.commit()

    return {
        "message": "Settings updated successfully",
        "settings": current_user.settings
    }
