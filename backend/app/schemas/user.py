"""
User schemas for CourseHub: profile, purchases, progress, analytics
and settings payloads.
"""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class CompletedLesson(BaseModel):
    lesson_id: str
    completed_at: datetime


class CurrentLesson(BaseModel):
    lesson_id: str
    module_title: Optional[str] = None
    progress: Optional[int] = Field(None, ge=0, le=100)


class CourseProgress(BaseModel):
    completed_lessons: List[CompletedLesson] = []
    current_lesson: Optional[CurrentLesson] = None


class PurchasedCourse(BaseModel):
    course_id: int
    course_title: str
    purchase_date: datetime
    completed: bool = False
    completed_at: Optional[datetime] = None
    progress: CourseProgress


class StudySession(BaseModel):
    date: datetime
    hours: float


class ChartEntry(BaseModel):
    date: str
    hours: float


class Analytics(BaseModel):
    total_hours: float = 0
    days_studied: int = 0
    last_study_date: Optional[datetime] = None
    study_sessions: List[StudySession] = []
    attendance: float = 0
    avg_marks: float = 0
    daily_hours: float = 0
    total_courses: int = 0
    completed_courses: int = 0
    certificates: int = 0
    learning_hours_chart: List[ChartEntry] = []


class UserProfile(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: str
    email: str
    role: str
    bio: str = ""
    purchased_courses: List[PurchasedCourse] = []
    analytics: Analytics


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    bio: Optional[str] = None


# Purchases and progress

class PurchaseRequest(BaseModel):
    course_id: int
    course_title: Optional[str] = None


class ProgressUpdate(BaseModel):
    course_id: int
    completed_lessons: List[str] = []
    current_lesson: Optional[CurrentLesson] = None
    study_hours: Optional[float] = Field(None, ge=0)


class PurchasedCoursesResponse(BaseModel):
    message: str
    purchased_courses: List[PurchasedCourse]


# Watched videos

class WatchedVideo(BaseModel):
    id: str
    title: Optional[str] = None
    course: Optional[str] = None
    course_id: int
    duration: str
    progress: int
    status: Literal["completed", "in-progress", "not-started"]
    last_watched: Optional[datetime] = None
    thumbnail: str
    module_title: Optional[str] = None


class WatchMetrics(BaseModel):
    total_hours: float
    videos_completed: int
    avg_session_minutes: int
    learning_streak: int


class CourseRef(BaseModel):
    id: int
    title: Optional[str] = None


class WatchedVideosResponse(BaseModel):
    videos: List[WatchedVideo]
    metrics: WatchMetrics
    courses: List[CourseRef]


# Settings

class NotificationSettings(BaseModel):
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    course_updates: Optional[bool] = None
    discussion_replies: Optional[bool] = None


class SecuritySettings(BaseModel):
    two_factor_auth: Optional[bool] = None
    login_alerts: Optional[bool] = None


class AppearanceSettings(BaseModel):
    theme: Optional[Literal["light", "dark", "auto"]] = None
    language: Optional[str] = None


class SettingsUpdate(BaseModel):
    notifications: Optional[NotificationSettings] = None
    security: Optional[SecuritySettings] = None
    appearance: Optional[AppearanceSettings] = None


class SettingsResponse(BaseModel):
    message: str
    settings: dict
