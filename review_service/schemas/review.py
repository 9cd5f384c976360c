"""
Review Pydantic Schemas

Schemas:
- ReviewCreate: Submit a review for a book
- ReviewUpdate: Edit an existing review (PATCH)
- ReviewResponse: Review data including derived scores and display fields
- ReviewListResponse: Paginated list of reviews
- VoteCreate / VoteResponse: Helpful / unhelpful votes

Request schemas only check shapes and types. Domain rules (rating 1-5,
title and content length bounds) live in Review.validate() so the API and
any other caller reject the same inputs with the same messages.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from review_service.schemas.common import PaginatedResponse


# =============================================================================
# Review Schemas
# =============================================================================


class ReviewFields(BaseModel):
    """Optional review fields shared by create and update."""

    story_rating: int | None = Field(default=None, description="Story/plot rating 1-5")
    character_rating: int | None = Field(default=None, description="Character rating 1-5")
    writing_style_rating: int | None = Field(default=None, description="Writing style rating 1-5")
    pacing_rating: int | None = Field(default=None, description="Pacing rating 1-5")
    world_building_rating: int | None = Field(default=None, description="World building rating 1-5")

    reading_difficulty: int | None = None
    emotional_impact: int | None = None
    educational_value: int | None = None
    entertainment_value: int | None = None
    originality_rating: int | None = None

    summary: str | None = Field(default=None, description="Short summary; derived from content if omitted")
    target_audience: str | None = None
    positive_aspects: str | None = None
    negative_aspects: str | None = None
    favorite_quotes: str | None = None
    similar_recommendations: str | None = None

    sentiment_score: float | None = Field(
        default=None,
        description="Polarity from an external sentiment model, -1 to 1",
    )


class ReviewCreate(ReviewFields):
    """
    Schema for creating a new review.

    Example request body:
    {
        "user_id": 7,
        "overall_rating": 5,
        "title": "A must-read classic!",
        "content": "This book completely changed my perspective on..."
    }
    """

    user_id: int = Field(..., description="ID of the reviewing user")
    overall_rating: int = Field(..., description="Rating from 1 to 5 stars", examples=[4, 5])
    title: str = Field(..., description="Review headline", examples=["A masterpiece!"])
    content: str = Field(..., description="Review text")

    review_language: str = Field(default="en", description="ISO language code")
    contains_spoilers: bool = False
    is_recommended: bool = True
    is_verified_purchase: bool = False


class ReviewUpdate(ReviewFields):
    """
    Schema for updating an existing review.

    All fields are optional for PATCH-style updates.
    """

    overall_rating: int | None = None
    title: str | None = None
    content: str | None = None
    contains_spoilers: bool | None = None
    is_recommended: bool | None = None


class ReviewResponse(BaseModel):
    """Full review with derived counters, scores and display fields."""

    id: int
    book_id: int
    user_id: int

    overall_rating: int
    story_rating: int | None = None
    character_rating: int | None = None
    writing_style_rating: int | None = None
    pacing_rating: int | None = None
    world_building_rating: int | None = None

    title: str
    content: str
    summary: str | None = None
    target_audience: str | None = None
    positive_aspects: str | None = None
    negative_aspects: str | None = None
    similar_recommendations: str | None = None
    review_language: str

    contains_spoilers: bool
    is_recommended: bool
    is_verified_purchase: bool

    helpful_votes: int
    unhelpful_votes: int
    total_votes: int
    helpfulness_ratio: float
    reply_count: int
    report_count: int

    word_count: int
    character_count: int
    estimated_reading_time: int = Field(..., description="Minutes")
    quality_score: int = Field(..., ge=0, le=100)
    sentiment_score: float

    is_detailed_review: bool
    average_detailed_rating: float
    is_high_quality: bool
    status: str
    star_display: str

    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReviewListResponse(PaginatedResponse):
    """Paginated list of reviews."""

    items: list[ReviewResponse] = Field(..., description="Reviews for this page")


# =============================================================================
# Vote Schemas
# =============================================================================


class VoteCreate(BaseModel):
    """
    Cast a vote on a review.

    Example request body:
    {"user_id": 42, "is_helpful": true}
    """

    user_id: int = Field(..., description="ID of the voting user")
    is_helpful: bool = Field(..., description="True for helpful, False for unhelpful")
    vote_comment: str | None = None
    vote_confidence: int = Field(default=3, description="1 very low - 5 very high")
    vote_reason: str | None = None
    vote_platform: str | None = None


class VoteResponse(BaseModel):
    id: int
    review_id: int
    user_id: int
    is_helpful: bool
    vote_type: str
    vote_icon: str
    vote_comment: str | None = None
    vote_confidence: int
    confidence_text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
