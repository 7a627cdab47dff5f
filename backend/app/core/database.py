"""
Database engine and sessions for CourseHub.

Course documents and user records live in two tables; curriculum,
purchases and analytics are JSON columns on those rows. Tests run against
a shared in-memory SQLite database, anything else uses ``DATABASE_URL``.
"""

import logging
from typing import Generator
from sqlalchemy import MetaData, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings


logger = logging.getLogger(__name__)

metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s"
})

Base = declarative_base(metadata=metadata)


def build_engine(url: str) -> Engine:
    """Engine for ``url``. SQLite URLs get a single shared connection."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=settings.DEBUG,
    )


engine = build_engine("sqlite:///:memory:" if settings.TESTING else settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; closed when the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    import app.models  # noqa: F401  registers the mapped classes

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def drop_tables() -> None:
    Base.metadata.drop_all(bind=engine)
    logger.warning("Database tables dropped")


def seed_admin(db: Session) -> None:
    """
    Create the bootstrap administrator from settings.

    Does nothing when an account with ``FIRST_ADMIN_EMAIL`` already exists,
    whatever its role.
    """
    from app.models.user import User, UserRole
    from app.core.security import get_password_hash

    if db.query(User).filter(User.email == settings.FIRST_ADMIN_EMAIL).first():
        return

    db.add(User(
        first_name=settings.FIRST_ADMIN_NAME,
        last_name="",
        name=settings.FIRST_ADMIN_NAME,
        email=settings.FIRST_ADMIN_EMAIL,
        hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
    ))
    db.commit()
    logger.info(f"Admin account created: {settings.FIRST_ADMIN_EMAIL}")


def check_database_connection() -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False
    return True
