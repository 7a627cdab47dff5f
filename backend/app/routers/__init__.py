"""
HTTP routers for CourseHub, mounted under ``settings.API_V1_STR``.

- /auth: registration and login
- /courses: catalog, learning content and the caller's courses
- /users: profile, settings, purchases, progress and watched videos
- /courses (admin): course authoring, admin role required
"""

from fastapi import APIRouter

from .admin import admin_router
from .auth import router as auth_router
from .courses import router as courses_router
from .users import router as users_router


api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])
api_router.include_router(courses_router, prefix="/courses", tags=["courses"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(admin_router)

__all__ = ["api_router"]
