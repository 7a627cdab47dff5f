"""
Authentication schemas for CourseHub.
"""

from pydantic import BaseModel, EmailStr, Field

from .user import UserProfile


class UserRegister(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field("", max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(UserProfile):
    """Profile returned on register/login, with a fresh bearer token."""
    token: str
