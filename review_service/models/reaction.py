"""
Reply Reaction Model

An emoji-style reaction to a reply ("love", "insightful", "angry", ...)
with an intensity from 1 to 5.

Business Rules:
- One reaction of each type per user per reply
- sentiment_value is always derived from reaction_type and intensity
- spam / bot / anomaly scores come from upstream classifiers and are only
  read here, never computed
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Float,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from review_service.database import Base
from review_service.models.mixins import TimestampMixin, strip_or_none
from review_service.services import scoring
from review_service.services.clock import utc_now
from review_service.services.sentiment import (
    emoji_for,
    intensity_label,
    normalize_reaction_type,
    reaction_type_label,
    sentiment_for,
    sentiment_label,
)
from review_service.services.validation import ValidationErrors

logger = logging.getLogger(__name__)


class ReplyReaction(TimestampMixin, Base):
    """
    Reaction to a review reply.

    Table: reply_reactions

    Example:
        reaction = ReplyReaction(reply_id=7, user_id=42, reaction_type="love")
        reaction.prepare_for_save()
        reaction.sentiment_value  # 1.0
    """

    __tablename__ = "reply_reactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reply_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # -------------------------------------------------------------------------
    # Reaction
    # -------------------------------------------------------------------------
    reaction_type: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    reaction_emoji: Mapped[Optional[str]] = mapped_column(
        String(10),
        nullable=True,
        comment="Overrides the type's default emoji",
    )
    reaction_intensity: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    reaction_comment: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    reaction_context: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    reaction_weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    # -------------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------------
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_premium_reaction: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_highlighted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    moderation_reason: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # -------------------------------------------------------------------------
    # Session telemetry (seconds / page counts)
    # -------------------------------------------------------------------------
    session_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pages_viewed_in_session: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    time_spent_on_reply: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # -------------------------------------------------------------------------
    # Classifier inputs (0-1)
    # -------------------------------------------------------------------------
    spam_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    bot_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    anomaly_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # -------------------------------------------------------------------------
    # Derived on save
    # -------------------------------------------------------------------------
    sentiment_value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    quality_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    engagement_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    influence_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("reply_id", "user_id", "reaction_type", name="uq_reaction_reply_user_type"),
        CheckConstraint(
            "reaction_intensity >= 1 AND reaction_intensity <= 5",
            name="ck_reaction_intensity_range",
        ),
    )

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------
    @property
    def is_positive(self) -> bool:
        return self.sentiment_value > 0

    @property
    def is_negative(self) -> bool:
        return self.sentiment_value < 0

    @property
    def is_neutral(self) -> bool:
        return self.sentiment_value == 0

    @property
    def is_likely_spam(self) -> bool:
        return scoring.is_likely_spam(self)

    @property
    def is_likely_bot(self) -> bool:
        return scoring.is_likely_bot(self)

    @property
    def is_anomalous(self) -> bool:
        return scoring.is_anomalous(self)

    @property
    def needs_review(self) -> bool:
        return (
            self.is_likely_spam
            or self.is_likely_bot
            or self.is_anomalous
            or self.is_flagged
            or (self.report_count or 0) > 0
        )

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------
    @property
    def reaction_type_display(self) -> str:
        return reaction_type_label(self.reaction_type)

    @property
    def reaction_emoji_display(self) -> str:
        return self.reaction_emoji or emoji_for(self.reaction_type)

    @property
    def intensity_display(self) -> str:
        return intensity_label(self.reaction_intensity)

    @property
    def sentiment_display(self) -> str:
        return sentiment_label(self.sentiment_value)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def validate(self) -> list[str]:
        errors = ValidationErrors()
        errors.required(self.reaction_type, "Reaction type is required")
        errors.max_length(self.reaction_type, 20, "Reaction type cannot exceed 20 characters")
        errors.positive_id(self.reply_id, "Valid reply ID is required")
        errors.positive_id(self.user_id, "Valid user ID is required")
        errors.in_range(self.reaction_intensity, 1, 5, "Reaction intensity must be between 1 and 5")
        errors.in_range(self.sentiment_value, -1, 1, "Sentiment value must be between -1 and 1", optional=True)
        errors.non_negative(self.reaction_weight, "Reaction weight cannot be negative")
        errors.max_length(self.reaction_comment, 200, "Reaction comment cannot exceed 200 characters")
        errors.max_length(self.reaction_context, 50, "Reaction context cannot exceed 50 characters")
        errors.max_length(self.reaction_emoji, 10, "Reaction emoji cannot exceed 10 characters")
        return errors.messages

    def prepare_for_save(self, now: datetime | None = None) -> "ReplyReaction":
        now = now or utc_now()

        self.reaction_type = normalize_reaction_type(self.reaction_type)
        self.reaction_comment = strip_or_none(self.reaction_comment)
        self.reaction_context = strip_or_none(self.reaction_context)
        self.moderation_reason = strip_or_none(self.moderation_reason)

        self.sentiment_value = sentiment_for(self.reaction_type, self.reaction_intensity)
        self.quality_score = scoring.reaction_quality_score(self)
        self.engagement_score = scoring.reaction_engagement_score(self)
        self.influence_score = scoring.reaction_influence_score(self)
        self.stamp_timestamps(now)

        logger.debug(
            "Prepared reaction %s (%s x%s): sentiment=%.4f quality=%d engagement=%d influence=%d",
            self.id,
            self.reaction_type,
            self.reaction_intensity,
            self.sentiment_value,
            self.quality_score,
            self.engagement_score,
            self.influence_score,
        )
        return self

    def __repr__(self) -> str:
        return f"<ReplyReaction(reply_id={self.reply_id}, user_id={self.user_id}, type={self.reaction_type!r})>"
