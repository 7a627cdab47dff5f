"""
Admin courses router for CourseHub.

Handles course creation and deletion, and appending modules, lessons and
curriculum subtopics to existing courses.
"""

from typing import Dict, Any
from fastapi import APIRouter, Depends, status

from app.models.user import User
from app.routers.auth import get_current_admin_user
from app.routers.courses import get_course_catalog
from app.schemas.course import (
    CourseCreate,
    CourseDetail,
    ModulesAdd,
    LessonsAdd,
    SubtopicsAdd,
    LessonVideoUpdate,
    ModuleResponse,
    CurriculumResponse
)
from app.services.catalog import CourseCatalog


router = APIRouter()


@router.post("", response_model=CourseDetail, status_code=status.HTTP_201_CREATED)
async def create_course(
    course_data: CourseCreate,
    current_admin: User = Depends(get_current_admin_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Create a new course.
    """
    course = catalog.create(course_data.model_dump(exclude_none=True))
    return course.to_dict()


@router.delete("/{course_id}")
async def delete_course(
    course_id: int,
    current_admin: User = Depends(get_current_admin_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, str]:
    """
    Delete a course. Purchase records pointing at it are left in place.
    """
    catalog.delete(course_id)
    return {"message": "Course removed"}


@router.post("/{course_id}/modules", response_model=CourseDetail)
async def add_modules(
    course_id: int,
    payload: ModulesAdd,
    current_admin: User = Depends(get_current_admin_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Append modules to a course.
    """
    modules = [module.model_dump(exclude_none=True) for module in payload.modules]
    return catalog.add_modules(course_id, modules).to_dict()


@router.post("/{course_id}/modules/{module_id}/lessons", response_model=ModuleResponse)
async def add_lessons(
    course_id: int,
    module_id: str,
    payload: LessonsAdd,
    current_admin: User = Depends(get_current_admin_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Append lessons to one module of a course.
    """
    lessons = [lesson.model_dump(exclude_none=True) for lesson in payload.lessons]
    module = catalog.add_lessons(course_id, module_id, lessons)
    return {"message": "Lessons added successfully", "module": module}


@router.post("/{course_id}/subtopics", response_model=CurriculumResponse)
async def add_subtopics(
    course_id: int,
    payload: SubtopicsAdd,
    current_admin: User = Depends(get_current_admin_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, Any]:
    """
    Append subtopics to a course's curriculum.
    """
    curriculum = catalog.add_subtopics(course_id, payload.subtopics)
    return {"message": "Subtopics added successfully", "curriculum": curriculum}


@router.put("/{course_id}/lessons/{lesson_id}/video")
async def update_lesson_video(
    course_id: int,
    lesson_id: str,
    payload: LessonVideoUpdate,
    current_admin: User = Depends(get_current_admin_user),
    catalog: CourseCatalog = Depends(get_course_catalog)
) -> Dict[str, str]:
    """
    Set the video URL of a lesson.
    """
    catalog.set_lesson_video(course_id, lesson_id, payload.youtube_url)
    return {"message": "Lesson video URL updated successfully"}
