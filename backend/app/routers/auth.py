"""
Authentication router for CourseHub.

Handles user registration and login, and provides the current-user and
admin dependencies used by the other routers.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_access_token
)
from app.core.config import settings
from app.core.exceptions import ConflictError, ForbiddenError, UnauthorizedError
from app.models.user import User, UserRole
from app.schemas.auth import UserRegister, UserLogin, AuthResponse


logger = logging.getLogger(__name__)

router = APIRouter()

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


# Dependencies
def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to a user. Unknown or deleted users are
    rejected like bad tokens.
    """
    user_id = decode_access_token(token)
    user = db.get(User, user_id) if user_id is not None else None
    if user is None:
        raise UnauthorizedError()

    return user


def get_current_admin_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Verify that the current user has admin privileges.
    """
    if not current_user.is_admin:
        raise ForbiddenError("Access denied. Admin role required.")
    return current_user


# Endpoints
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Register a new user.
    """
    if find_user_by_email(db, user_data.email):
        raise ConflictError("User already exists")

    new_user = User(
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        name=f"{user_data.first_name} {user_data.last_name}".strip(),
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        role=UserRole.USER.value,
    )

    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(new_user)
    logger.info(f"User registered: {new_user.email}")

    return {**new_user.to_dict(), "token": create_access_token(new_user.id)}


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Authenticate a user and return a bearer token.
    """
    user = find_user_by_email(db, credentials.email)

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise UnauthorizedError("Invalid credentials")

    return {**user.to_dict(), "token": create_access_token(user.id)}
