"""
Core plumbing for CourseHub: settings, database sessions, auth tokens
and the HTTP error types raised by services and routers.
"""

from .config import settings
from .database import Base, SessionLocal, engine, get_db
from .exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from .security import create_access_token, decode_access_token, get_password_hash, verify_password

__all__ = [
    "settings",
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
