"""
Replies Router

Threaded replies under reviews.

Endpoints:
- POST /reviews/{review_id}/replies - Reply to a review (or to a reply in it)
- GET /reviews/{review_id}/replies - List a review's replies
- PATCH /replies/{reply_id} - Edit a reply (marks it as edited)
- DELETE /replies/{reply_id} - Soft delete a reply
- POST /replies/{reply_id}/restore - Restore a soft-deleted reply

Counters:
- review.reply_count counts replies that are not deleted
- parent reply child_reply_count counts direct answers that are not deleted
Both parents are re-prepared whenever a counter moves.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from review_service.dependencies import DbSession, Now, Pagination, ensure_valid, get_or_404
from review_service.models import Review, ReviewReply
from review_service.schemas.reply import (
    ReplyCreate,
    ReplyListResponse,
    ReplyResponse,
    ReplyUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Replies"],
    responses={404: {"description": "Review or reply not found"}},
)


def get_reply_or_404(db: DbSession, reply_id: int) -> ReviewReply:
    return get_or_404(db, ReviewReply, reply_id, "Reply")


def _adjust_counters(db: Session, reply: ReviewReply, delta: int, now: datetime) -> None:
    """Move the review's reply_count and the parent's child_reply_count by delta (+1 / -1)."""
    review = db.get(Review, reply.review_id)
    if review is not None:
        if delta > 0:
            review.record_reply()
        else:
            review.remove_reply()
        review.touch(now)
        review.prepare_for_save(now)

    if reply.parent_reply_id is not None:
        parent = db.get(ReviewReply, reply.parent_reply_id)
        if parent is not None:
            if delta > 0:
                parent.record_child_reply()
            else:
                parent.remove_child_reply()
            parent.touch(now)
            parent.prepare_for_save(now)


# =============================================================================
# Review Reply Endpoints
# =============================================================================


@router.post(
    "/reviews/{review_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to a review",
    description="Post a reply to a review, or to another reply on the same review via parent_reply_id.",
)
def create_reply(
    review_id: int,
    reply_data: ReplyCreate,
    db: DbSession,
    now: Now,
) -> ReplyResponse:
    """
    Raises:
        HTTPException: 404 if the review or parent reply does not exist
        HTTPException: 400 if the parent reply belongs to another review
        HTTPException: 422 if the reply fails validation
    """
    get_or_404(db, Review, review_id, "Review")

    reply = ReviewReply(review_id=review_id, **reply_data.model_dump())

    parent_depth = None
    if reply.parent_reply_id is not None:
        parent = get_reply_or_404(db, reply.parent_reply_id)
        if parent.review_id != review_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Parent reply belongs to a different review",
            )
        parent_depth = parent.thread_depth
    reply.set_thread_depth(parent_depth)

    ensure_valid(reply)
    reply.prepare_for_save(now)
    db.add(reply)
    _adjust_counters(db, reply, +1, now)
    db.commit()
    db.refresh(reply)

    logger.info(
        "Reply %s added to review %s at depth %d",
        reply.id,
        review_id,
        reply.thread_depth,
    )
    return ReplyResponse.model_validate(reply)


@router.get(
    "/reviews/{review_id}/replies",
    response_model=ReplyListResponse,
    summary="List replies to a review",
    description="Oldest first. Soft-deleted replies are hidden unless include_deleted is set.",
)
def list_replies(
    review_id: int,
    db: DbSession,
    pagination: Pagination,
    include_deleted: bool = Query(default=False, description="Include soft-deleted replies"),
) -> ReplyListResponse:
    get_or_404(db, Review, review_id, "Review")

    filters = [ReviewReply.review_id == review_id]
    if not include_deleted:
        filters.append(ReviewReply.is_deleted.is_(False))

    total = db.execute(select(func.count()).select_from(ReviewReply).where(*filters)).scalar() or 0
    stmt = (
        select(ReviewReply)
        .where(*filters)
        .order_by(ReviewReply.created_at.asc(), ReviewReply.id.asc())
        .offset(pagination.skip)
        .limit(pagination.per_page)
    )
    replies = db.execute(stmt).scalars().all()

    return ReplyListResponse(
        items=[ReplyResponse.model_validate(r) for r in replies],
        total=total,
        page=pagination.page,
        per_page=pagination.per_page,
        pages=pagination.pages_for(total),
    )


# =============================================================================
# Single Reply Endpoints
# =============================================================================


@router.patch(
    "/replies/{reply_id}",
    response_model=ReplyResponse,
    summary="Edit a reply",
)
def update_reply(
    reply_id: int,
    reply_data: ReplyUpdate,
    db: DbSession,
    now: Now,
) -> ReplyResponse:
    reply = get_reply_or_404(db, reply_id)

    for field, value in reply_data.model_dump(exclude_none=True).items():
        setattr(reply, field, value)

    ensure_valid(reply)
    reply.mark_as_edited(now)
    reply.prepare_for_save(now)
    db.commit()
    db.refresh(reply)

    logger.info("Reply %s edited", reply.id)
    return ReplyResponse.model_validate(reply)


@router.delete(
    "/replies/{reply_id}",
    response_model=ReplyResponse,
    summary="Soft delete a reply",
    description="Hides the reply and keeps it for moderation; it can be restored later.",
)
def delete_reply(
    reply_id: int,
    db: DbSession,
    now: Now,
    reason: str | None = Query(default=None, max_length=200, description="Moderation reason"),
) -> ReplyResponse:
    reply = get_reply_or_404(db, reply_id)
    if reply.is_deleted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Reply is already deleted",
        )

    reply.soft_delete(reason, now)
    reply.prepare_for_save(now)
    _adjust_counters(db, reply, -1, now)
    db.commit()
    db.refresh(reply)

    logger.info("Reply %s soft-deleted (reason=%r)", reply.id, reason)
    return ReplyResponse.model_validate(reply)


@router.post(
    "/replies/{reply_id}/restore",
    response_model=ReplyResponse,
    summary="Restore a deleted reply",
)
def restore_reply(reply_id: int, db: DbSession, now: Now) -> ReplyResponse:
    reply = get_reply_or_404(db, reply_id)
    if not reply.is_deleted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Reply is not deleted",
        )

    reply.restore(now)
    reply.prepare_for_save(now)
    _adjust_counters(db, reply, +1, now)
    db.commit()
    db.refresh(reply)

    logger.info("Reply %s restored", reply.id)
    return ReplyResponse.model_validate(reply)
