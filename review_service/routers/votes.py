"""
Votes Router

Helpful / unhelpful votes on reviews.

Endpoints:
- POST /reviews/{review_id}/votes - Cast a vote
- DELETE /reviews/{review_id}/votes/{user_id} - Withdraw a vote

Each vote moves the review's helpful/unhelpful counter, and the review is
re-prepared so its helpfulness contribution to quality_score follows.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from review_service.dependencies import DbSession, Now, ensure_valid, get_or_404
from review_service.models import Review, ReviewVote
from review_service.schemas.review import VoteCreate, VoteResponse

logger = logging.getLogger(__name__)

DUPLICATE_VOTE = "User has already voted on this review"

router = APIRouter(
    tags=["Votes"],
    responses={404: {"description": "Review or vote not found"}},
)


def _find_vote(db: DbSession, review_id: int, user_id: int) -> ReviewVote | None:
    stmt = select(ReviewVote).where(
        ReviewVote.review_id == review_id,
        ReviewVote.user_id == user_id,
    )
    return db.execute(stmt).scalar_one_or_none()


@router.post(
    "/reviews/{review_id}/votes",
    response_model=VoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Vote on a review",
    description="Mark a review as helpful or unhelpful. One vote per user per review.",
)
def cast_vote(
    review_id: int,
    vote_data: VoteCreate,
    db: DbSession,
    now: Now,
) -> VoteResponse:
    review = get_or_404(db, Review, review_id, "Review")

    if _find_vote(db, review_id, vote_data.user_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=DUPLICATE_VOTE,
        )

    vote = ReviewVote(review_id=review_id, **vote_data.model_dump())
    ensure_valid(vote)
    vote.prepare_for_save(now)

    review.record_vote(vote.is_helpful)
    review.touch(now)
    review.prepare_for_save(now)

    db.add(vote)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=DUPLICATE_VOTE,
        )
    db.refresh(vote)

    logger.info("User %s voted %s on review %s", vote.user_id, vote.vote_type, review_id)
    return VoteResponse.model_validate(vote)


@router.delete(
    "/reviews/{review_id}/votes/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Withdraw a vote",
)
def withdraw_vote(
    review_id: int,
    user_id: int,
    db: DbSession,
    now: Now,
) -> None:
    review = get_or_404(db, Review, review_id, "Review")

    vote = _find_vote(db, review_id, user_id)
    if vote is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} has not voted on review {review_id}",
        )

    review.remove_vote(vote.is_helpful)
    review.touch(now)
    review.prepare_for_save(now)
    db.delete(vote)
    db.commit()

    logger.info("User %s withdrew vote on review %s", user_id, review_id)
