import os

# Must be set before the app is imported so the engine uses in-memory SQLite
os.environ["TESTING"] = "True"

import pytest
from fastapi.testclient import TestClient

from app.core.database import SessionLocal, create_tables, drop_tables, get_db
from app.core.security import get_password_hash
from app.main import app
from app.models import Course, User, UserRole

from tests.helpers import FrozenClock, sample_modules


PASSWORD = "secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture
def db():
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: str = UserRole.USER.value, **fields) -> User:
        counter["n"] += 1
        user = User(
            first_name=fields.pop("first_name", "Ada"),
            last_name=fields.pop("last_name", "Lovelace"),
            name=fields.pop("name", "Ada Lovelace"),
            email=fields.pop("email", f"user{counter['n']}@example.com"),
            hashed_password=PASSWORD_HASH,
            role=role,
            **fields
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_course(db):
    def _make_course(course_id: int = 1, title: str = "Python Basics", **fields) -> Course:
        fields.setdefault("modules", sample_modules())
        course = Course(id=course_id, title=title, **fields)
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make_course


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN.value, email="admin@example.com", name="Admin")

