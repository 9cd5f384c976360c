"""
Reviews Router

Endpoints for book reviews.

Endpoints:
- GET /books/{book_id}/reviews - List reviews for a book
- POST /books/{book_id}/reviews - Submit a review
- GET /reviews/{review_id} - Get a specific review
- PATCH /reviews/{review_id} - Edit a review

Business Rules:
- One review per user per book (checked here, enforced by a unique constraint)
- Every write runs validate() (422 on failure) then prepare_for_save()
- Hidden reviews are left out of book listings
"""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from review_service.dependencies import DbSession, Now, Pagination, ensure_valid, get_or_404
from review_service.models import Review
from review_service.schemas.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    tags=["Reviews"],
    responses={
        404: {"description": "Review not found"},
        422: {"description": "Review failed validation"},
    },
)

SORT_ORDERS = {
    "quality": (Review.quality_score.desc(), Review.created_at.desc()),
    "recent": (Review.created_at.desc(),),
    "helpful": (Review.helpful_votes.desc(), Review.quality_score.desc()),
}


def get_review_or_404(db: DbSession, review_id: int) -> Review:
    return get_or_404(db, Review, review_id, "Review")


# =============================================================================
# Book Review Endpoints
# =============================================================================


@router.get(
    "/books/{book_id}/reviews",
    response_model=ReviewListResponse,
    summary="List reviews for a book",
    description="Get a paginated list of visible reviews for a book.",
)
def list_book_reviews(
    book_id: int,
    db: DbSession,
    pagination: Pagination,
    sort: Literal["quality", "recent", "helpful"] = Query(
        default="quality",
        description="quality: best first, recent: newest first, helpful: most helpful votes first",
    ),
) -> ReviewListResponse:
    filters = (Review.book_id == book_id, Review.is_visible.is_(True))

    count_stmt = select(func.count()).select_from(Review).where(*filters)
    total = db.execute(count_stmt).scalar() or 0

    stmt = (
        select(Review)
        .where(*filters)
        .order_by(*SORT_ORDERS[sort], Review.id.desc())
        .offset(pagination.skip)
        .limit(pagination.per_page)
    )
    reviews = db.execute(stmt).scalars().all()

    return ReviewListResponse(
        items=[ReviewResponse.model_validate(r) for r in reviews],
        total=total,
        page=pagination.page,
        per_page=pagination.per_page,
        pages=pagination.pages_for(total),
    )


@router.post(
    "/books/{book_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="Submit a review for a book. One review per book per user.",
)
def create_review(
    book_id: int,
    review_data: ReviewCreate,
    db: DbSession,
    now: Now,
) -> ReviewResponse:
    """
    Create a new review for a book.

    Raises:
        HTTPException: 400 if the user already reviewed this book
        HTTPException: 422 if the review fails validation
    """
    existing_stmt = select(Review.id).where(
        Review.book_id == book_id,
        Review.user_id == review_data.user_id,
    )
    if db.execute(existing_stmt).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User has already reviewed this book. Update the existing review instead.",
        )

    review = Review(book_id=book_id, **review_data.model_dump(exclude_none=True))
    ensure_valid(review)
    review.prepare_for_save(now)

    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User has already reviewed this book. Update the existing review instead.",
        )
    db.refresh(review)

    logger.info(
        "Review %s created for book %s by user %s (quality=%d)",
        review.id,
        book_id,
        review.user_id,
        review.quality_score,
    )
    return ReviewResponse.model_validate(review)


# =============================================================================
# Single Review Endpoints
# =============================================================================


@router.get(
    "/reviews/{review_id}",
    response_model=ReviewResponse,
    summary="Get a review",
)
def get_review(review_id: int, db: DbSession) -> ReviewResponse:
    return ReviewResponse.model_validate(get_review_or_404(db, review_id))


@router.patch(
    "/reviews/{review_id}",
    response_model=ReviewResponse,
    summary="Edit a review",
    description="Update any subset of the review's fields; scores are recomputed.",
)
def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    db: DbSession,
    now: Now,
) -> ReviewResponse:
    review = get_review_or_404(db, review_id)

    columns = Review.__table__.c
    for field, value in review_data.model_dump(exclude_unset=True).items():
        # null clears optional fields and leaves required ones unchanged
        if value is None and not columns[field].nullable:
            continue
        setattr(review, field, value)

    ensure_valid(review)
    review.touch(now)
    review.prepare_for_save(now)
    db.commit()
    db.refresh(review)

    logger.info("Review %s updated (quality=%d)", review.id, review.quality_score)
    return ReviewResponse.model_validate(review)
