"""
Review Analytics Model

One row per review per day with the raw traffic counters collected for
that day. prepare_for_save() turns the counters into rates and then into
quality, engagement, influence, virality and retention scores.
"""

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Float, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from review_service.database import Base
from review_service.models.mixins import TimestampMixin
from review_service.services.analytics_scoring import (
    analytics_engagement_score,
    analytics_influence_score,
    analytics_quality_score,
    analytics_retention_score,
    analytics_virality_score,
    compute_rates,
)
from review_service.services.clock import utc_now
from review_service.services.validation import ValidationErrors

logger = logging.getLogger(__name__)

COUNTERS = (
    "view_count",
    "unique_view_count",
    "click_count",
    "share_count",
    "bookmark_count",
    "helpful_votes_received",
    "unhelpful_votes_received",
    "replies_received",
    "reports_received",
    "subsequent_review_views",
    "book_purchases_influenced",
    "wishlist_additions",
    "reviewer_follows",
    "similar_book_views",
    "social_media_views",
    "referral_views",
)


def _counter() -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=0)


def _rate() -> Mapped[float]:
    return mapped_column(Float, nullable=False, default=0.0)


class ReviewAnalytics(TimestampMixin, Base):
    """
    Daily analytics snapshot for a review.

    Table: review_analytics

    Rates are stored as percentages (0-100), except
    daily_helpfulness_ratio which is 0-1. Times are in seconds.
    """

    __tablename__ = "review_analytics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    review_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    analytics_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # -------------------------------------------------------------------------
    # Raw counters
    # -------------------------------------------------------------------------
    view_count: Mapped[int] = _counter()
    unique_view_count: Mapped[int] = _counter()
    click_count: Mapped[int] = _counter()
    share_count: Mapped[int] = _counter()
    bookmark_count: Mapped[int] = _counter()
    helpful_votes_received: Mapped[int] = _counter()
    unhelpful_votes_received: Mapped[int] = _counter()
    replies_received: Mapped[int] = _counter()
    reports_received: Mapped[int] = _counter()
    subsequent_review_views: Mapped[int] = _counter()
    book_purchases_influenced: Mapped[int] = _counter()
    wishlist_additions: Mapped[int] = _counter()
    reviewer_follows: Mapped[int] = _counter()
    similar_book_views: Mapped[int] = _counter()
    social_media_views: Mapped[int] = _counter()
    referral_views: Mapped[int] = _counter()
    average_read_time: Mapped[float] = _rate()
    average_session_duration: Mapped[float] = _rate()

    # -------------------------------------------------------------------------
    # Derived rates
    # -------------------------------------------------------------------------
    click_through_rate: Mapped[float] = _rate()
    share_rate: Mapped[float] = _rate()
    bounce_rate: Mapped[float] = _rate()
    engagement_rate: Mapped[float] = _rate()
    conversion_rate: Mapped[float] = _rate()
    daily_helpfulness_ratio: Mapped[float] = _rate()

    # -------------------------------------------------------------------------
    # Derived scores
    # -------------------------------------------------------------------------
    quality_score: Mapped[int] = _counter()
    engagement_score: Mapped[int] = _counter()
    influence_score: Mapped[int] = _counter()
    virality_score: Mapped[int] = _counter()
    retention_score: Mapped[int] = _counter()
    processed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("review_id", "analytics_date", name="uq_analytics_review_date"),
    )

    @property
    def total_votes_received(self) -> int:
        return (self.helpful_votes_received or 0) + (self.unhelpful_votes_received or 0)

    def validate(self, today: date | None = None) -> list[str]:
        today = today or utc_now().date()
        errors = ValidationErrors()
        errors.positive_id(self.review_id, "Valid review ID is required")
        errors.add_if(self.analytics_date is None, "Analytics date is required")
        errors.add_if(
            self.analytics_date is not None and self.analytics_date > today,
            "Analytics date cannot be in the future",
        )
        for name in COUNTERS:
            label = name.replace("_", " ").capitalize()
            errors.non_negative(getattr(self, name), f"{label} cannot be negative")
        errors.add_if(
            (self.unique_view_count or 0) > (self.view_count or 0),
            "Unique view count cannot exceed total view count",
        )
        errors.non_negative(self.average_read_time, "Average read time cannot be negative")
        errors.in_range(self.bounce_rate, 0, 100, "Bounce rate must be between 0 and 100", optional=True)
        return errors.messages

    def prepare_for_save(self, now: datetime | None = None) -> "ReviewAnalytics":
        now = now or utc_now()

        rates = compute_rates(self)
        self.click_through_rate = rates.click_through_rate
        self.share_rate = rates.share_rate
        self.bounce_rate = rates.bounce_rate
        self.engagement_rate = rates.engagement_rate
        self.conversion_rate = rates.conversion_rate
        self.daily_helpfulness_ratio = rates.daily_helpfulness_ratio

        self.quality_score = analytics_quality_score(self)
        self.engagement_score = analytics_engagement_score(self)
        self.influence_score = analytics_influence_score(self)
        self.virality_score = analytics_virality_score(self)
        self.retention_score = analytics_retention_score(self)
        self.processed_at = now
        self.stamp_timestamps(now)

        logger.debug(
            "Prepared analytics for review %s on %s: quality=%d engagement=%d virality=%d",
            self.review_id,
            self.analytics_date,
            self.quality_score,
            self.engagement_score,
            self.virality_score,
        )
        return self

    def __repr__(self) -> str:
        return f"<ReviewAnalytics(review_id={self.review_id}, date={self.analytics_date})>"
