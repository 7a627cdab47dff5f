"""
User model for CourseHub.

Defines the User table with authentication fields, profile information,
and the document-shaped purchase, analytics and settings columns.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from sqlalchemy import Integer, String, DateTime, Text, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base
from app.utils.analytics import default_analytics, default_settings


class UserRole(str, Enum):
    """Roles a user account can hold."""
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    User model for authentication, profile and learning progress.

    ``purchased_courses``, ``analytics`` and ``settings`` are JSON documents.
    They are never mutated in place: callers build a modified copy and
    assign it back so the change is flushed.
    """
    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Profile fields
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # Authentication fields
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.USER.value,
        nullable=False
    )

    # Learning documents
    purchased_courses: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    analytics: Mapped[Dict[str, Any]] = mapped_column(JSON, default=default_analytics, nullable=False)
    settings: Mapped[Dict[str, Any]] = mapped_column(JSON, default=default_settings, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    __table_args__ = (
        Index("idx_user_email_role", "email", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def purchased_course_ids(self) -> List[int]:
        """Course ids in purchase order."""
        return [purchase["course_id"] for purchase in self.purchased_courses or []]

    def has_purchased(self, course_id: int) -> bool:
        return int(course_id) in self.purchased_course_ids

    def to_dict(self) -> dict:
        """Convert user to the profile projection returned by the API."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "bio": self.bio,
            "purchased_courses": self.purchased_courses or [],
            "analytics": self.analytics or default_analytics(),
        }
