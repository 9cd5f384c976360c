"""
Reply and Reaction Pydantic Schemas

Schemas:
- ReplyCreate / ReplyUpdate / ReplyResponse / ReplyListResponse
- ReactionCreate / ReactionResponse / ReactionListResponse
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from review_service.schemas.common import PaginatedResponse


# =============================================================================
# Reply Schemas
# =============================================================================


class ReplyCreate(BaseModel):
    """
    Schema for replying to a review, or to another reply.

    Example request body:
    {
        "user_id": 9,
        "content": "Totally agree about the ending.",
        "parent_reply_id": null
    }
    """

    user_id: int = Field(..., description="ID of the replying user")
    content: str = Field(..., description="Reply text (5-2000 characters)")
    parent_reply_id: int | None = Field(default=None, description="Reply being answered")
    reply_type: str = Field(default="comment", examples=["comment", "question"])
    reply_tone: str = Field(default="neutral", examples=["positive", "constructive"])
    contains_spoilers: bool = False
    is_author_reply: bool = False
    is_verified_reply: bool = False


class ReplyUpdate(BaseModel):
    """Editing a reply marks it as edited."""

    content: str | None = None
    reply_type: str | None = None
    reply_tone: str | None = None
    contains_spoilers: bool | None = None


class ReplyResponse(BaseModel):
    id: int
    review_id: int
    user_id: int
    parent_reply_id: int | None = None
    thread_depth: int
    is_top_level: bool

    content: str
    reply_type: str
    reply_type_display: str
    reply_tone: str
    reply_tone_display: str

    like_count: int
    dislike_count: int
    total_reactions: int
    like_ratio: float
    child_reply_count: int
    report_count: int

    word_count: int
    estimated_reading_time: int = Field(..., description="Seconds")
    quality_score: int = Field(..., ge=0, le=100)

    is_edited: bool
    is_deleted: bool
    status: str
    moderation_reason: str | None = None

    created_at: datetime
    updated_at: datetime | None = None
    edited_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReplyListResponse(PaginatedResponse):
    items: list[ReplyResponse]


# =============================================================================
# Reaction Schemas
# =============================================================================


class ReactionCreate(BaseModel):
    """
    Schema for reacting to a reply.

    Example request body:
    {"user_id": 42, "reaction_type": "love", "reaction_intensity": 4}
    """

    user_id: int
    reaction_type: str = Field(..., examples=["like", "love", "insightful"])
    reaction_intensity: int = Field(default=3, description="1 very low - 5 very high")
    reaction_emoji: str | None = None
    reaction_comment: str | None = None
    reaction_context: str | None = None
    is_premium_reaction: bool = False
    is_anonymous: bool = False

    session_duration: int = Field(default=0, ge=0, description="Seconds")
    pages_viewed_in_session: int = Field(default=0, ge=0)
    time_spent_on_reply: int = Field(default=0, ge=0, description="Seconds")

    spam_score: float = Field(default=0.0, ge=0, le=1)
    bot_score: float = Field(default=0.0, ge=0, le=1)
    anomaly_score: float = Field(default=0.0, ge=0, le=1)


class ReactionResponse(BaseModel):
    id: int
    reply_id: int
    user_id: int
    reaction_type: str
    reaction_type_display: str
    reaction_emoji_display: str
    reaction_intensity: int
    intensity_display: str
    reaction_comment: str | None = None

    sentiment_value: float = Field(..., ge=-1, le=1)
    sentiment_display: str
    quality_score: int = Field(..., ge=0, le=100)
    engagement_score: int = Field(..., ge=0, le=100)
    influence_score: int = Field(..., ge=0, le=100)
    needs_review: bool

    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReactionListResponse(PaginatedResponse):
    items: list[ReactionResponse]
