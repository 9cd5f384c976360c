"""
Review Analytics Pydantic Schemas
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from review_service.schemas.common import PaginatedResponse


class AnalyticsUpsert(BaseModel):
    """
    One day's raw counters for a review. Rates and scores are computed
    by the service and are not accepted from the client.
    """

    view_count: int = 0
    unique_view_count: int = 0
    click_count: int = 0
    share_count: int = 0
    bookmark_count: int = 0
    helpful_votes_received: int = 0
    unhelpful_votes_received: int = 0
    replies_received: int = 0
    reports_received: int = 0
    subsequent_review_views: int = 0
    book_purchases_influenced: int = 0
    wishlist_additions: int = 0
    reviewer_follows: int = 0
    similar_book_views: int = 0
    social_media_views: int = 0
    referral_views: int = 0
    average_read_time: float = Field(default=0.0, description="Seconds")
    average_session_duration: float = Field(default=0.0, description="Seconds")


class AnalyticsResponse(AnalyticsUpsert):
    id: int
    review_id: int
    analytics_date: date

    click_through_rate: float
    share_rate: float
    bounce_rate: float
    engagement_rate: float
    conversion_rate: float
    daily_helpfulness_ratio: float

    quality_score: int = Field(..., ge=0, le=100)
    engagement_score: int = Field(..., ge=0, le=100)
    influence_score: int = Field(..., ge=0, le=100)
    virality_score: int = Field(..., ge=0, le=100)
    retention_score: int = Field(..., ge=0, le=100)
    processed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AnalyticsListResponse(PaginatedResponse):
    items: list[AnalyticsResponse]
