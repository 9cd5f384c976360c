"""
Reactions Router

Emoji reactions on replies.

Endpoints:
- POST /replies/{reply_id}/reactions - React to a reply
- GET /replies/{reply_id}/reactions - List a reply's reactions

A user may leave several reactions on one reply, but only one of each
type. "like" and "dislike" also move the reply's like/dislike counters.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from review_service.dependencies import DbSession, Now, Pagination, ensure_valid, get_or_404
from review_service.models import ReplyReaction, ReviewReply
from review_service.schemas.reply import (
    ReactionCreate,
    ReactionListResponse,
    ReactionResponse,
)
from review_service.services.sentiment import normalize_reaction_type

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reactions"],
    responses={404: {"description": "Reply not found"}},
)


def _find_reaction(db: DbSession, reply_id: int, user_id: int, reaction_type: str) -> int | None:
    stmt = select(ReplyReaction.id).where(
        ReplyReaction.reply_id == reply_id,
        ReplyReaction.user_id == user_id,
        ReplyReaction.reaction_type == reaction_type,
    )
    return db.execute(stmt).scalar_one_or_none()


def _already_reacted(reaction_type: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"User has already reacted with {reaction_type!r} to this reply",
    )


@router.post(
    "/replies/{reply_id}/reactions",
    response_model=ReactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="React to a reply",
)
def create_reaction(
    reply_id: int,
    reaction_data: ReactionCreate,
    db: DbSession,
    now: Now,
) -> ReactionResponse:
    """
    Raises:
        HTTPException: 404 if the reply does not exist
        HTTPException: 400 if the user already left this reaction type
        HTTPException: 422 if the reaction fails validation
    """
    reply = get_or_404(db, ReviewReply, reply_id, "Reply")

    reaction_type = normalize_reaction_type(reaction_data.reaction_type)
    if _find_reaction(db, reply_id, reaction_data.user_id, reaction_type) is not None:
        raise _already_reacted(reaction_type)

    reaction = ReplyReaction(reply_id=reply_id, **reaction_data.model_dump())
    ensure_valid(reaction)
    reaction.prepare_for_save(now)

    reply.record_reaction(reaction.reaction_type)
    reply.touch(now)
    reply.prepare_for_save(now)

    db.add(reaction)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise _already_reacted(reaction_type)
    db.refresh(reaction)

    logger.info(
        "Reaction %s (%s) added to reply %s, sentiment=%.4f",
        reaction.id,
        reaction.reaction_type,
        reply_id,
        reaction.sentiment_value,
    )
    if reaction.needs_review:
        logger.warning("Reaction %s flagged for review (spam/bot/anomaly signals)", reaction.id)
    return ReactionResponse.model_validate(reaction)


@router.get(
    "/replies/{reply_id}/reactions",
    response_model=ReactionListResponse,
    summary="List reactions to a reply",
    description="Most influential first.",
)
def list_reactions(
    reply_id: int,
    db: DbSession,
    pagination: Pagination,
) -> ReactionListResponse:
    get_or_404(db, ReviewReply, reply_id, "Reply")

    filters = (ReplyReaction.reply_id == reply_id, ReplyReaction.is_active.is_(True))
    total = db.execute(select(func.count()).select_from(ReplyReaction).where(*filters)).scalar() or 0
    stmt = (
        select(ReplyReaction)
        .where(*filters)
        .order_by(ReplyReaction.influence_score.desc(), ReplyReaction.id.asc())
        .offset(pagination.skip)
        .limit(pagination.per_page)
    )
    reactions = db.execute(stmt).scalars().all()

    return ReactionListResponse(
        items=[ReactionResponse.model_validate(r) for r in reactions],
        total=total,
        page=pagination.page,
        per_page=pagination.per_page,
        pages=pagination.pages_for(total),
    )
