"""
Admin routers for CourseHub.

This module contains all admin-specific API endpoints:
- courses: Admin course management (create, delete, content appends)
"""

from fastapi import APIRouter, Depends

from app.routers.auth import get_current_admin_user

from .courses import router as courses_router


# Create admin router
admin_router = APIRouter()

# Admin course routes share the public /courses prefix
admin_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["admin-courses"],
    dependencies=[Depends(get_current_admin_user)]
)
