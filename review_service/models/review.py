"""
Review Model

A reader's review of a book: an overall star rating, optional detailed
ratings, free-text content and the engagement counters (votes, replies,
reports) that feed the review's quality score.

Business Rules:
- One review per user per book (unique constraint)
- Overall rating must be 1-5; detailed ratings are optional but 1-5 if set
- Title 5-200 characters, content 20-5000 characters
- total_votes and helpfulness_ratio are always derived, never stored
- quality_score, word_count and reading time are recomputed on every save
"""

import logging
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from review_service.database import Base
from review_service.models.mixins import TimestampMixin, strip_or_none
from review_service.services.clock import age_in_days, utc_now
from review_service.services.content_metrics import measure_review, truncate
from review_service.services.ladder import clamp_sentiment, is_blank
from review_service.services.scoring import review_quality_score
from review_service.services.validation import ValidationErrors

logger = logging.getLogger(__name__)

SUMMARY_LENGTH = 200
PREVIEW_LENGTH = 150
RECENT_DAYS = 30

# (attribute, label used in validation messages)
DETAILED_RATINGS = (
    ("story_rating", "Story rating"),
    ("character_rating", "Character rating"),
    ("writing_style_rating", "Writing style rating"),
    ("pacing_rating", "Pacing rating"),
    ("world_building_rating", "World building rating"),
)

EXTRA_RATINGS = (
    ("reading_difficulty", "Reading difficulty"),
    ("emotional_impact", "Emotional impact"),
    ("educational_value", "Educational value"),
    ("entertainment_value", "Entertainment value"),
    ("originality_rating", "Originality rating"),
)

TEXT_FIELDS = (
    "title",
    "content",
    "summary",
    "target_audience",
    "positive_aspects",
    "negative_aspects",
    "favorite_quotes",
    "similar_recommendations",
)


def _rating_column(comment: str) -> Mapped[int | None]:
    return mapped_column(Integer, nullable=True, comment=comment)


class Review(TimestampMixin, Base):
    """
    Review model for book reviews.

    Attributes:
        id: Primary key
        book_id: ID of the reviewed book (owned by the books service)
        user_id: ID of the reviewing user (owned by the auth service)
        overall_rating: 1-5 star rating
        title / content / summary: Review text
        helpful_votes / unhelpful_votes / reply_count / report_count: Counters
        word_count / character_count / estimated_reading_time: Derived from content
        quality_score: 0-100, recomputed by prepare_for_save()
    """

    __tablename__ = "reviews"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Owning ids (foreign keys into other services, not enforced here)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # -------------------------------------------------------------------------
    # Ratings
    # -------------------------------------------------------------------------
    overall_rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Rating from 1-5 stars",
    )
    story_rating: Mapped[int | None] = _rating_column("Story/plot rating 1-5")
    character_rating: Mapped[int | None] = _rating_column("Character development rating 1-5")
    writing_style_rating: Mapped[int | None] = _rating_column("Writing style rating 1-5")
    pacing_rating: Mapped[int | None] = _rating_column("Pacing rating 1-5")
    world_building_rating: Mapped[int | None] = _rating_column("World building rating 1-5")

    reading_difficulty: Mapped[int | None] = _rating_column("1 easy - 5 very difficult")
    emotional_impact: Mapped[int | None] = _rating_column("1 low - 5 high")
    educational_value: Mapped[int | None] = _rating_column("1 low - 5 high")
    entertainment_value: Mapped[int | None] = _rating_column("1 low - 5 high")
    originality_rating: Mapped[int | None] = _rating_column("1 derivative - 5 highly original")

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    summary: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Preview summary; derived from content when empty",
    )
    target_audience: Mapped[str | None] = mapped_column(String(100), nullable=True)
    positive_aspects: Mapped[str | None] = mapped_column(Text, nullable=True)
    negative_aspects: Mapped[str | None] = mapped_column(Text, nullable=True)
    favorite_quotes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    similar_recommendations: Mapped[str | None] = mapped_column(String(500), nullable=True)
    review_language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")

    contains_spoilers: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_recommended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_verified_purchase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # -------------------------------------------------------------------------
    # Engagement counters
    # -------------------------------------------------------------------------
    helpful_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unhelpful_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # -------------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------------
    is_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    moderated_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # -------------------------------------------------------------------------
    # Derived on save
    # -------------------------------------------------------------------------
    quality_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    sentiment_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Externally supplied polarity, -1 to 1",
    )
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    character_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    estimated_reading_time: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Minutes",
    )

    __table_args__ = (
        UniqueConstraint("book_id", "user_id", name="uq_review_book_user"),
        CheckConstraint(
            "overall_rating >= 1 AND overall_rating <= 5",
            name="ck_review_overall_rating_range",
        ),
        CheckConstraint("quality_score >= 0 AND quality_score <= 100", name="ck_review_quality_range"),
    )

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------
    @property
    def total_votes(self) -> int:
        return (self.helpful_votes or 0) + (self.unhelpful_votes or 0)

    @property
    def helpfulness_ratio(self) -> float:
        """helpful / total, or 0.0 when nobody has voted."""
        total = self.total_votes
        return (self.helpful_votes or 0) / total if total > 0 else 0.0

    @property
    def is_detailed_review(self) -> bool:
        return any(getattr(self, name) is not None for name, _ in DETAILED_RATINGS)

    @property
    def average_detailed_rating(self) -> float:
        """Mean of the detailed ratings that are set, else the overall rating."""
        ratings = [getattr(self, name) for name, _ in DETAILED_RATINGS]
        ratings = [r for r in ratings if r is not None]
        if not ratings:
            return float(self.overall_rating)
        return sum(ratings) / len(ratings)

    @property
    def is_high_quality(self) -> bool:
        return (
            self.quality_score >= 70
            and self.word_count >= 100
            and self.helpfulness_ratio >= 0.6
        )

    @property
    def status(self) -> str:
        if not self.is_approved:
            return "Pending Approval"
        if self.is_flagged:
            return "Flagged"
        if not self.is_visible:
            return "Hidden"
        if self.is_featured:
            return "Featured"
        return "Published"

    @property
    def star_display(self) -> str:
        stars = max(0, min(5, self.overall_rating or 0))
        return "★" * stars + "☆" * (5 - stars)

    @property
    def preview_content(self) -> str:
        return truncate(self.content or "", PREVIEW_LENGTH)

    def age_in_days(self, now: datetime | None = None) -> int:
        return age_in_days(self.created_at, now or utc_now())

    def is_recent(self, now: datetime | None = None) -> bool:
        return self.age_in_days(now) <= RECENT_DAYS

    # -------------------------------------------------------------------------
    # Counter updates
    # -------------------------------------------------------------------------
    def record_vote(self, is_helpful: bool) -> None:
        if is_helpful:
            self.helpful_votes = (self.helpful_votes or 0) + 1
        else:
            self.unhelpful_votes = (self.unhelpful_votes or 0) + 1

    def remove_vote(self, is_helpful: bool) -> None:
        """Undo a vote; counters never drop below zero."""
        if is_helpful:
            self.helpful_votes = max(0, (self.helpful_votes or 0) - 1)
        else:
            self.unhelpful_votes = max(0, (self.unhelpful_votes or 0) - 1)

    def record_reply(self) -> None:
        self.reply_count = (self.reply_count or 0) + 1

    def remove_reply(self) -> None:
        self.reply_count = max(0, (self.reply_count or 0) - 1)

    def record_report(self) -> None:
        self.report_count = (self.report_count or 0) + 1

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def validate(self) -> list[str]:
        """Return every violated constraint; an empty list means valid."""
        errors = ValidationErrors()
        errors.positive_id(self.book_id, "Valid book ID is required")
        errors.positive_id(self.user_id, "Valid user ID is required")

        errors.required(self.title, "Review title is required")
        errors.min_length(self.title, 5, "Review title must be at least 5 characters")
        errors.max_length(self.title, 200, "Review title cannot exceed 200 characters")

        errors.required(self.content, "Review content is required")
        errors.min_length(self.content, 20, "Review content must be at least 20 characters")
        errors.max_length(self.content, 5000, "Review content cannot exceed 5000 characters")

        errors.in_range(self.overall_rating, 1, 5, "Overall rating must be between 1 and 5")
        for name, label in DETAILED_RATINGS + EXTRA_RATINGS:
            errors.in_range(
                getattr(self, name), 1, 5, f"{label} must be between 1 and 5", optional=True
            )

        errors.max_length(self.summary, 500, "Review summary cannot exceed 500 characters")
        errors.max_length(self.target_audience, 100, "Target audience cannot exceed 100 characters")
        errors.max_length(self.favorite_quotes, 1000, "Favorite quotes cannot exceed 1000 characters")
        errors.max_length(
            self.similar_recommendations, 500, "Similar recommendations cannot exceed 500 characters"
        )
        errors.max_length(self.review_language, 10, "Language code cannot exceed 10 characters")

        errors.non_negative(self.helpful_votes, "Helpful votes cannot be negative")
        errors.non_negative(self.unhelpful_votes, "Unhelpful votes cannot be negative")
        errors.non_negative(self.reply_count, "Reply count cannot be negative")
        return errors.messages

    def prepare_for_save(self, now: datetime | None = None) -> "Review":
        """
        Recompute every derived field before persistence.

        Order: trim text, recount content, fill a default summary, score,
        stamp timestamps. The summary is filled before scoring so that a
        second call with no changes produces the same quality score.
        """
        now = now or utc_now()

        for name in TEXT_FIELDS:
            setattr(self, name, strip_or_none(getattr(self, name)))

        metrics = measure_review(self.content)
        self.word_count = metrics.word_count
        self.character_count = metrics.character_count
        self.estimated_reading_time = metrics.reading_time

        if is_blank(self.summary) and not is_blank(self.content):
            self.summary = truncate(self.content, SUMMARY_LENGTH)

        self.sentiment_score = clamp_sentiment(self.sentiment_score or 0.0)
        self.quality_score = review_quality_score(self)
        self.stamp_timestamps(now)

        logger.debug(
            "Prepared review %s: words=%d quality=%d",
            self.id,
            self.word_count,
            self.quality_score,
        )
        return self

    def __repr__(self) -> str:
        return (
            f"<Review(id={self.id}, book_id={self.book_id}, user_id={self.user_id}, "
            f"rating={self.overall_rating}, quality={self.quality_score})>"
        )
