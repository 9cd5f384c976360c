"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: per-request SQLAlchemy session
- Pagination: page / per_page query parameters
- Now: the current time, read from an injectable clock

The clock is a dependency so tests can override get_clock with a fixed
time and get deterministic timestamps and age-based scores.
"""

import logging
import math
from datetime import datetime
from typing import Annotated, TypeVar

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from review_service.config import get_settings
from review_service.database import get_db
from review_service.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)

settings = get_settings()

ModelT = TypeVar("ModelT")

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_review(db: Session = Depends(get_db)):
#
# You can write:
#   def get_review(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Clock
# =============================================================================
def get_clock() -> Clock:
    """Time source for lifecycle hooks; overridden in tests."""
    return utc_now


def get_now(clock: Annotated[Clock, Depends(get_clock)]) -> datetime:
    """Read the clock once per request so every write in it shares one timestamp."""
    return clock()


Now = Annotated[datetime, Depends(get_now)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    - page: Which page to return (1-indexed for user-friendliness)
    - per_page: How many items per page
    - skip: Calculated offset for database query

    Usage in route:
        @router.get("/books/{book_id}/reviews")
        def list_reviews(db: DbSession, pagination: Pagination):
            stmt = select(Review).offset(pagination.skip).limit(pagination.per_page)
    """

    def __init__(
        self,
        page: int = Query(
            default=1,
            ge=1,
            description="Page number (1-indexed)",
            examples=[1, 2, 3],
        ),
        per_page: int = Query(
            default=settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description=f"Number of items per page (max {settings.max_page_size})",
            examples=[10, 25, 50],
        ),
    ) -> None:
        self.page = page
        self.per_page = per_page

    @property
    def skip(self) -> int:
        """
        Number of records to skip.

        Page 1 → skip 0 items
        Page 2 → skip per_page items
        """
        return (self.page - 1) * self.per_page

    def pages_for(self, total: int) -> int:
        """Total page count for a result set of the given size."""
        return math.ceil(total / self.per_page) if total > 0 else 0


# Type alias for cleaner route signatures
Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# Helper Functions
# =============================================================================
# Shared by every router: look a row up or 404, and reject entities whose
# validate() reports problems.


def get_or_404(db: Session, model: type[ModelT], entity_id: int, label: str) -> ModelT:
    """
    Get a row by primary key or raise 404.

    Raises:
        HTTPException: 404 if no row has that id
    """
    entity = db.get(model, entity_id)
    if entity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} with id {entity_id} not found",
        )
    return entity


def ensure_valid(entity, **validate_kwargs) -> None:
    """
    Raise 422 with every validate() message if the entity is invalid.

    Extra keyword arguments are passed through to validate().

    Raises:
        HTTPException: 422 with detail {"errors": [...]}
    """
    errors = entity.validate(**validate_kwargs)
    if errors:
        logger.warning("Rejected %s: %s", type(entity).__name__, "; ".join(errors))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": errors},
        )
