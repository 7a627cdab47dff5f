"""
Course model for CourseHub.

A course is stored as one row: catalog metadata in plain columns and the
curriculum (modules, lessons, subtopics, stats cards) in JSON columns.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import Boolean, Integer, String, DateTime, Text, Float, JSON, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base
from app.utils.analytics import count_course_lessons


class Course(Base):
    """
    Course model keyed by an externally-assigned numeric ``id``.

    ``pk`` is the store's own surrogate key and is never exposed.
    """
    __tablename__ = "courses"

    # Internal primary key
    pk: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Public identity
    id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)

    # Catalog information
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    category_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    level_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    students: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    lessons_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_bookmarked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Card presentation
    background_gradient: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    background_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    button_style: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    button_text: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Content structure
    modules: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    curriculum: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    current_lesson: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    stats_cards: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)

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
        CheckConstraint("rating >= 0 AND rating <= 5", name="check_course_rating"),
        CheckConstraint("price >= 0", name="check_course_price_positive"),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title='{self.title}')>"

    @property
    def total_lessons(self) -> int:
        """Number of lessons across all modules."""
        return count_course_lessons(self.modules)

    def to_card(self) -> dict:
        """Catalog listing projection."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "category_color": self.category_color,
            "lessons_count": self.lessons_count,
            "level": self.level,
            "price": self.price,
            "rating": self.rating,
            "students": self.students,
            "image": self.image,
            "is_bookmarked": self.is_bookmarked,
        }

    def to_dict(self) -> dict:
        """Full course document."""
        data = self.to_card()
        data.update({
            "description": self.description,
            "level_color": self.level_color,
            "background_gradient": self.background_gradient,
            "background_image": self.background_image,
            "button_style": self.button_style,
            "button_text": self.button_text,
            "modules": self.modules or [],
            "curriculum": self.curriculum or [],
            "current_lesson": self.current_lesson,
            "stats_cards": self.stats_cards or [],
        })
        return data

    def to_learning_dict(self) -> dict:
        """Learning-content projection for course owners."""
        return {
            "id": self.id,
            "title": self.title,
            "modules": self.modules or [],
            "curriculum": self.curriculum or [],
            "current_lesson": self.current_lesson,
        }
