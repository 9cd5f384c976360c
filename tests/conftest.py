"""
pytest Fixtures for Review Service Tests

This file contains shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions (each test rolls back its changes)

Time is frozen: every request and every model fixture uses FIXED_NOW, so
timestamps and age-based scores are deterministic.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from review_service.database import Base, get_db
from review_service.dependencies import get_clock
from review_service.main import app
from review_service.models import Review, ReviewReply, ReviewReport

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

LONG_CONTENT = (
    "The author builds a slow but rewarding story where every chapter adds "
    "another layer to the characters and the world they live in."
)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="session")
def engine():
    """
    SQLite in-memory engine shared by the whole test session.

    StaticPool keeps the single connection alive; without it the in-memory
    database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Fresh session per test, wrapped in a transaction that is rolled back.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Test client using the test session and a frozen clock.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def build_review(**overrides) -> Review:
    """Unsaved review with valid defaults; keyword arguments override fields."""
    fields = {
        "book_id": 1,
        "user_id": 7,
        "overall_rating": 4,
        "title": "Great slow burn",
        "content": LONG_CONTENT,
    }
    fields.update(overrides)
    return Review(**fields)


def build_reply(**overrides) -> ReviewReply:
    fields = {
        "review_id": 1,
        "user_id": 9,
        "content": "I agree, the middle chapters were the best part.",
    }
    fields.update(overrides)
    return ReviewReply(**fields)


@pytest.fixture
def sample_review(db_session: Session) -> Review:
    review = build_review().prepare_for_save(FIXED_NOW)
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


@pytest.fixture
def sample_reply(db_session: Session, sample_review: Review) -> ReviewReply:
    reply = build_reply(review_id=sample_review.id).prepare_for_save(FIXED_NOW)
    sample_review.record_reply()
    sample_review.prepare_for_save(FIXED_NOW)
    db_session.add(reply)
    db_session.commit()
    db_session.refresh(reply)
    return reply


@pytest.fixture
def sample_report(db_session: Session, sample_review: Review) -> ReviewReport:
    report = ReviewReport(
        review_id=sample_review.id,
        reported_by_user_id=3,
        report_category="spam",
        report_reason="Advertising another site",
    ).prepare_for_save(FIXED_NOW)
    db_session.add(report)
    db_session.commit()
    db_session.refresh(report)
    return report
