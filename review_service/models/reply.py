"""
Review Reply Model

Threaded replies under a review. A reply may answer another reply
(parent_reply_id), which makes the thread a tree; depth is copied from the
parent (+1) when the reply is created and is capped at 10 by validation.

Replies are never physically deleted: soft_delete() hides them and
restore() brings them back.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from review_service.database import Base
from review_service.models.mixins import TimestampMixin, strip_or_none
from review_service.services.clock import age_in_days, utc_now
from review_service.services.content_metrics import measure_reply, truncate
from review_service.services.scoring import reply_quality_score
from review_service.services.validation import ValidationErrors

logger = logging.getLogger(__name__)

MAX_THREAD_DEPTH = 10
PREVIEW_LENGTH = 100

REPLY_TYPES = {
    "comment": "Comment",
    "question": "Question",
    "correction": "Correction",
    "appreciation": "Appreciation",
    "criticism": "Criticism",
    "suggestion": "Suggestion",
}

REPLY_TONES = {
    "positive": "Positive",
    "negative": "Negative",
    "neutral": "Neutral",
    "constructive": "Constructive",
    "critical": "Critical",
}


class ReviewReply(TimestampMixin, Base):
    """
    Reply to a review or to another reply.

    Table: review_replies

    like_count / dislike_count are maintained from reactions;
    child_reply_count counts direct answers to this reply.
    """

    __tablename__ = "review_replies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    review_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    parent_reply_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reply_type: Mapped[str] = mapped_column(String(50), nullable=False, default="comment")
    reply_tone: Mapped[str] = mapped_column(String(20), nullable=False, default="neutral")
    reply_language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    contains_spoilers: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_author_reply: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_verified_reply: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # -------------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------------
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    child_reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    thread_depth: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # -------------------------------------------------------------------------
    # Moderation / soft state
    # -------------------------------------------------------------------------
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_edited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    moderation_reason: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    edited_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # -------------------------------------------------------------------------
    # Derived on save
    # -------------------------------------------------------------------------
    quality_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    character_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    estimated_reading_time: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Seconds",
    )

    __table_args__ = (
        CheckConstraint("quality_score >= 0 AND quality_score <= 100", name="ck_reply_quality_range"),
    )

    @property
    def total_reactions(self) -> int:
        return (self.like_count or 0) + (self.dislike_count or 0)

    @property
    def like_ratio(self) -> float:
        total = self.total_reactions
        return (self.like_count or 0) / total if total > 0 else 0.0

    @property
    def is_top_level(self) -> bool:
        return self.parent_reply_id is None

    @property
    def has_child_replies(self) -> bool:
        return (self.child_reply_count or 0) > 0

    @property
    def status(self) -> str:
        if self.is_deleted:
            return "Deleted"
        if not self.is_approved:
            return "Pending Approval"
        if self.is_flagged:
            return "Flagged"
        if not self.is_visible:
            return "Hidden"
        if self.is_pinned:
            return "Pinned"
        if self.is_featured:
            return "Featured"
        return "Published"

    @property
    def reply_type_display(self) -> str:
        return REPLY_TYPES.get(self.reply_type, "Comment")

    @property
    def reply_tone_display(self) -> str:
        return REPLY_TONES.get(self.reply_tone, "Neutral")

    @property
    def preview_content(self) -> str:
        return truncate(self.content or "", PREVIEW_LENGTH)

    def is_recent(self, now: datetime | None = None) -> bool:
        return age_in_days(self.created_at, now or utc_now()) <= 7

    # -------------------------------------------------------------------------
    # Threading and counters
    # -------------------------------------------------------------------------
    def set_thread_depth(self, parent_depth: int | None) -> None:
        """One below the parent reply, or 0 for a reply to the review itself."""
        self.thread_depth = 0 if parent_depth is None else parent_depth + 1

    def record_child_reply(self) -> None:
        self.child_reply_count = (self.child_reply_count or 0) + 1

    def remove_child_reply(self) -> None:
        self.child_reply_count = max(0, (self.child_reply_count or 0) - 1)

    def record_reaction(self, reaction_type: str) -> None:
        """Only likes and dislikes move the reply's own counters."""
        if reaction_type == "like":
            self.like_count = (self.like_count or 0) + 1
        elif reaction_type == "dislike":
            self.dislike_count = (self.dislike_count or 0) + 1

    def record_report(self) -> None:
        self.report_count = (self.report_count or 0) + 1

    # -------------------------------------------------------------------------
    # Soft-state transitions
    # -------------------------------------------------------------------------
    def mark_as_edited(self, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.is_edited = True
        self.edited_at = now
        self.touch(now)

    def soft_delete(self, reason: str | None = None, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.is_deleted = True
        self.is_visible = False
        self.deleted_at = now
        self.touch(now)
        if reason and reason.strip():
            self.moderation_reason = reason

    def restore(self, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.is_deleted = False
        self.is_visible = True
        self.deleted_at = None
        self.touch(now)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def validate(self) -> list[str]:
        errors = ValidationErrors()
        errors.required(self.content, "Reply content is required")
        errors.max_length(self.content, 2000, "Reply content cannot exceed 2000 characters")
        errors.min_length(self.content, 5, "Reply content must be at least 5 characters")
        errors.positive_id(self.review_id, "Valid review ID is required")
        errors.positive_id(self.user_id, "Valid user ID is required")
        errors.add_if(
            (self.thread_depth or 0) > MAX_THREAD_DEPTH,
            f"Reply thread depth cannot exceed {MAX_THREAD_DEPTH} levels",
        )
        errors.max_length(self.reply_type, 50, "Reply type cannot exceed 50 characters")
        errors.max_length(self.reply_tone, 20, "Reply tone cannot exceed 20 characters")
        errors.max_length(self.moderation_reason, 200, "Moderation reason cannot exceed 200 characters")
        return errors.messages

    def prepare_for_save(self, now: datetime | None = None) -> "ReviewReply":
        now = now or utc_now()

        self.content = strip_or_none(self.content)
        self.reply_type = strip_or_none(self.reply_type)
        self.reply_tone = strip_or_none(self.reply_tone)
        self.moderation_reason = strip_or_none(self.moderation_reason)

        metrics = measure_reply(self.content)
        self.word_count = metrics.word_count
        self.character_count = metrics.character_count
        self.estimated_reading_time = metrics.reading_time

        self.quality_score = reply_quality_score(self)
        self.stamp_timestamps(now)

        logger.debug("Prepared reply %s: words=%d quality=%d", self.id, self.word_count, self.quality_score)
        return self

    def __repr__(self) -> str:
        return f"<ReviewReply(id={self.id}, review_id={self.review_id}, depth={self.thread_depth})>"
