"""
Review Vote Model

A single "was this review helpful?" vote. The review keeps its own
helpful/unhelpful counters; votes are stored so a user can only vote once
per review and can later withdraw the vote.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Float, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from review_service.database import Base
from review_service.models.mixins import TimestampMixin, strip_or_none
from review_service.services.clock import age_in_days, utc_now
from review_service.services.validation import ValidationErrors

logger = logging.getLogger(__name__)

CONFIDENCE_LABELS = {
    1: "Very Low",
    2: "Low",
    3: "Medium",
    4: "High",
    5: "Very High",
}


class ReviewVote(TimestampMixin, Base):
    """
    Helpful / unhelpful vote on a review.

    Table: review_votes

    Example:
        vote = ReviewVote(review_id=1, user_id=42, is_helpful=True)
    """

    __tablename__ = "review_votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    review_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    is_helpful: Mapped[bool] = mapped_column(Boolean, nullable=False)
    vote_comment: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    vote_confidence: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    vote_reason: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    vote_platform: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    vote_weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    __table_args__ = (
        UniqueConstraint("review_id", "user_id", name="uq_vote_review_user"),
        CheckConstraint(
            "vote_confidence >= 1 AND vote_confidence <= 5",
            name="ck_vote_confidence_range",
        ),
    )

    @property
    def vote_type(self) -> str:
        return "Helpful" if self.is_helpful else "Unhelpful"

    @property
    def vote_icon(self) -> str:
        return "👍" if self.is_helpful else "👎"

    @property
    def confidence_text(self) -> str:
        return CONFIDENCE_LABELS.get(self.vote_confidence, "Unknown")

    def is_recent(self, now: datetime | None = None) -> bool:
        return age_in_days(self.created_at, now or utc_now()) <= 7

    def validate(self) -> list[str]:
        errors = ValidationErrors()
        errors.positive_id(self.review_id, "Valid review ID is required")
        errors.positive_id(self.user_id, "Valid user ID is required")
        errors.in_range(self.vote_confidence, 1, 5, "Vote confidence must be between 1 and 5")
        errors.max_length(self.vote_comment, 500, "Vote comment cannot exceed 500 characters")
        errors.max_length(self.vote_reason, 50, "Vote reason cannot exceed 50 characters")
        errors.max_length(self.vote_platform, 50, "Vote platform cannot exceed 50 characters")
        errors.non_negative(self.vote_weight, "Vote weight cannot be negative")
        return errors.messages

    def prepare_for_save(self, now: datetime | None = None) -> "ReviewVote":
        self.vote_comment = strip_or_none(self.vote_comment)
        self.vote_reason = strip_or_none(self.vote_reason)
        self.vote_platform = strip_or_none(self.vote_platform)
        self.stamp_timestamps(now or utc_now())
        return self

    def __repr__(self) -> str:
        return f"<ReviewVote(review_id={self.review_id}, user_id={self.user_id}, {self.vote_type})>"
