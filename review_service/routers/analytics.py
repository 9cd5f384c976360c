"""
Analytics Router

Daily per-review traffic snapshots.

Endpoints:
- PUT /reviews/{review_id}/analytics/{analytics_date} - Store a day's counters
- GET /reviews/{review_id}/analytics - List a review's daily snapshots

PUT is an upsert: sending the same day again replaces its counters and
recomputes the rates and scores.
"""

import logging
from datetime import date

from fastapi import APIRouter, status
from sqlalchemy import func, select

from review_service.dependencies import DbSession, Now, Pagination, ensure_valid, get_or_404
from review_service.models import Review, ReviewAnalytics
from review_service.schemas.analytics import (
    AnalyticsListResponse,
    AnalyticsResponse,
    AnalyticsUpsert,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Analytics"],
    responses={404: {"description": "Review not found"}},
)


@router.put(
    "/reviews/{review_id}/analytics/{analytics_date}",
    response_model=AnalyticsResponse,
    status_code=status.HTTP_200_OK,
    summary="Store a day's analytics for a review",
)
def upsert_analytics(
    review_id: int,
    analytics_date: date,
    counters: AnalyticsUpsert,
    db: DbSession,
    now: Now,
) -> AnalyticsResponse:
    get_or_404(db, Review, review_id, "Review")

    stmt = select(ReviewAnalytics).where(
        ReviewAnalytics.review_id == review_id,
        ReviewAnalytics.analytics_date == analytics_date,
    )
    analytics = db.execute(stmt).scalar_one_or_none()
    if analytics is None:
        analytics = ReviewAnalytics(review_id=review_id, analytics_date=analytics_date)
    else:
        analytics.touch(now)

    for field, value in counters.model_dump().items():
        setattr(analytics, field, value)

    ensure_valid(analytics, today=now.date())

    analytics.prepare_for_save(now)
    db.add(analytics)
    db.commit()
    db.refresh(analytics)

    logger.info(
        "Analytics for review %s on %s stored (quality=%d virality=%d)",
        review_id,
        analytics_date,
        analytics.quality_score,
        analytics.virality_score,
    )
    return AnalyticsResponse.model_validate(analytics)


@router.get(
    "/reviews/{review_id}/analytics",
    response_model=AnalyticsListResponse,
    summary="List daily analytics for a review",
    description="Newest day first.",
)
def list_analytics(
    review_id: int,
    db: DbSession,
    pagination: Pagination,
) -> AnalyticsListResponse:
    get_or_404(db, Review, review_id, "Review")

    filters = (ReviewAnalytics.review_id == review_id,)
    total = db.execute(select(func.count()).select_from(ReviewAnalytics).where(*filters)).scalar() or 0
    stmt = (
        select(ReviewAnalytics)
        .where(*filters)
        .order_by(ReviewAnalytics.analytics_date.desc())
        .offset(pagination.skip)
        .limit(pagination.per_page)
    )
    rows = db.execute(stmt).scalars().all()

    return AnalyticsListResponse(
        items=[AnalyticsResponse.model_validate(a) for a in rows],
        total=total,
        page=pagination.page,
        per_page=pagination.per_page,
        pages=pagination.pages_for(total),
    )
