"""
Course schemas for CourseHub.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Lesson(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    duration: Optional[str] = None
    thumbnail: Optional[str] = None
    youtube_url: Optional[str] = None


class Module(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    lessons: List[Lesson] = []


class CourseCard(BaseModel):
    id: int
    title: str
    category: Optional[str] = None
    category_color: Optional[str] = None
    lessons_count: int = 0
    level: Optional[str] = None
    price: float = 0
    rating: float = 0
    students: int = 0
    image: Optional[str] = None
    is_bookmarked: bool = False


class CourseDetail(CourseCard):
    description: Optional[str] = None
    level_color: Optional[str] = None
    background_gradient: Optional[str] = None
    background_image: Optional[str] = None
    button_style: Optional[str] = None
    button_text: Optional[str] = None
    modules: List[Module] = []
    curriculum: List[Dict[str, Any]] = []
    current_lesson: Optional[Dict[str, Any]] = None
    stats_cards: List[Dict[str, Any]] = []


class CourseLearning(BaseModel):
    id: int
    title: str
    modules: List[Module] = []
    curriculum: List[Dict[str, Any]] = []
    current_lesson: Optional[Dict[str, Any]] = None


class MyCourse(BaseModel):
    id: int
    title: str
    level: Optional[str] = None
    level_color: Optional[str] = None
    image: Optional[str] = None
    rating: float = 0
    students: int = 0
    background_gradient: Optional[str] = None
    background_image: Optional[str] = None
    button_style: Optional[str] = None
    button_text: Optional[str] = None
    progress: int
    status: str
    lessons: str


class StatsCardsResponse(BaseModel):
    stats_cards: List[Dict[str, Any]]


class CourseCreate(BaseModel):
    id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = None
    category_color: Optional[str] = None
    level: Optional[str] = None
    level_color: Optional[str] = None
    price: float = Field(0, ge=0)
    rating: float = Field(0, ge=0, le=5)
    students: int = Field(0, ge=0)
    lessons_count: int = Field(0, ge=0)
    image: Optional[str] = None
    is_bookmarked: bool = False
    background_gradient: Optional[str] = None
    background_image: Optional[str] = None
    button_style: Optional[str] = None
    button_text: Optional[str] = None
    modules: List[Module] = []
    curriculum: List[Dict[str, Any]] = []
    current_lesson: Optional[Dict[str, Any]] = None
    stats_cards: List[Dict[str, Any]] = []


class ModulesAdd(BaseModel):
    modules: List[Module]


class LessonsAdd(BaseModel):
    lessons: List[Lesson]


class SubtopicsAdd(BaseModel):
    subtopics: List[Dict[str, Any]]


class LessonVideoUpdate(BaseModel):
    youtube_url: str


class ModuleResponse(BaseModel):
    message: str
    module: Module


class CurriculumResponse(BaseModel):
    message: str
    curriculum: List[Dict[str, Any]]
