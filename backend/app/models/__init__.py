"""
Database models for CourseHub.

This module contains all SQLAlchemy models for the application:
- User model for accounts, purchases, analytics and settings
- Course model for catalog metadata and curriculum
"""

from app.core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .course import Course

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Course"
]
