"""
Database Configuration Module

SQLAlchemy 2.0 setup for the review service.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

Column defaults at construction
===============================
SQLAlchemy applies `default=` values only when a row is INSERTed. The
aggregates here are validated and scored *before* they are flushed, so an
unflushed Review(...) must already carry its defaults (helpful_votes=0,
is_approved=True, ...). Base therefore supplies a constructor that copies
every scalar column default onto the instance unless the caller passed a
value. Callable defaults (timestamps) are still left to the flush.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from review_service.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# check_same_thread is a SQLite-only connect argument; FastAPI may run
# sync endpoints in a threadpool.

_connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=_connect_args,
    pool_pre_ping=True,
    echo=settings.db_echo,
)


# =============================================================================
# Session Factory
# =============================================================================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Replaces the default declarative constructor with one that also
    applies scalar column defaults, so freshly built entities can be
    validated and scored without a flush.
    """

    def __init__(self, **kwargs: Any) -> None:
        for key, column in self.__mapper__.columns.items():
            default = column.default
            if key not in kwargs and default is not None and default.is_scalar:
                kwargs[key] = default.arg

        cls = type(self)
        for key, value in kwargs.items():
            if not hasattr(cls, key):
                raise TypeError(
                    f"{key!r} is an invalid keyword argument for {cls.__name__}"
                )
            setattr(self, key, value)


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route uses it, and the
    finally block closes it even if the route raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables that do not exist yet.

    Models must be imported first so they are registered on Base.metadata.
    """
    import review_service.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    Base.metadata.drop_all(bind=engine)
