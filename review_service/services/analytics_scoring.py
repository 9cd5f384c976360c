"""
Review Analytics Scores

Daily per-review analytics: percentage rates derived from the raw
counters, then quality, engagement, influence, virality and retention
scores bucketed from counters and rates.

Rates are percentages (0-100) except the helpfulness ratio (0-1).
"""

import operator
from dataclasses import dataclass
from typing import Any

from review_service.services.ladder import Contribution, ladder, score


@dataclass(frozen=True)
class AnalyticsRates:
    """Rates derived from one day's counters."""

    click_through_rate: float = 0.0
    share_rate: float = 0.0
    bounce_rate: float = 0.0
    engagement_rate: float = 0.0
    conversion_rate: float = 0.0
    daily_helpfulness_ratio: float = 0.0


def _count(analytics: Any, name: str) -> float:
    return getattr(analytics, name) or 0


def compute_rates(analytics: Any) -> AnalyticsRates:
    """
    Derive the day's rates from raw counters.

    With no views every view-based rate is 0, and with no votes the
    helpfulness ratio is 0. Missing counters count as 0.
    """
    views = _count(analytics, "view_count")
    clicks = _count(analytics, "click_count")
    shares = _count(analytics, "share_count")
    votes = analytics.total_votes_received
    helpful = _count(analytics, "helpful_votes_received")
    helpfulness = helpful / votes if votes > 0 else 0.0

    if views <= 0:
        return AnalyticsRates(daily_helpfulness_ratio=helpfulness)

    interactions = (
        clicks
        + shares
        + _count(analytics, "bookmark_count")
        + votes
        + _count(analytics, "replies_received")
    )
    conversions = _count(analytics, "book_purchases_influenced") + _count(
        analytics, "wishlist_additions"
    )
    return AnalyticsRates(
        click_through_rate=clicks / views * 100,
        share_rate=shares / views * 100,
        bounce_rate=(views - clicks) / views * 100,
        engagement_rate=interactions / views * 100,
        conversion_rate=conversions / views * 100,
        daily_helpfulness_ratio=helpfulness,
    )


def _unique_view_quality(analytics: Any) -> int:
    views = _count(analytics, "view_count")
    unique = _count(analytics, "unique_view_count")
    if unique > 0 and views > 0:
        return int(unique / views * 25)
    return 0


GT = operator.gt
LT = operator.lt

ANALYTICS_QUALITY: tuple[Contribution, ...] = (
    _unique_view_quality,
    ladder("engagement_rate", [(10, 25), (5, 15), (2, 10), (0, 5)], GT),
    ladder("daily_helpfulness_ratio", [(0.8, 25), (0.6, 20), (0.4, 15), (0.2, 10)], GT),
    # Seconds
    ladder("average_read_time", [(120, 25), (60, 20), (30, 15), (10, 10)], GT),
)

ANALYTICS_ENGAGEMENT: tuple[Contribution, ...] = (
    ladder("click_through_rate", [(10, 20), (5, 15), (2, 10), (0, 5)], GT),
    ladder("share_count", [(10, 20), (5, 15), (2, 10), (0, 5)], GT),
    ladder("total_votes_received", [(20, 20), (10, 15), (5, 10), (0, 5)], GT),
    ladder("replies_received", [(10, 20), (5, 15), (2, 10), (0, 5)], GT),
    ladder("bookmark_count", [(10, 20), (5, 15), (2, 10), (0, 5)], GT),
)

ANALYTICS_INFLUENCE: tuple[Contribution, ...] = (
    ladder("book_purchases_influenced", [(10, 40), (5, 30), (2, 20), (0, 10)], GT),
    ladder("wishlist_additions", [(20, 20), (10, 15), (5, 10), (0, 5)], GT),
    ladder("reviewer_follows", [(10, 20), (5, 15), (2, 10), (0, 5)], GT),
    ladder("similar_book_views", [(20, 20), (10, 15), (5, 10), (0, 5)], GT),
)

ANALYTICS_VIRALITY: tuple[Contribution, ...] = (
    ladder("share_rate", [(5, 40), (2, 30), (1, 20), (0, 10)], GT),
    ladder("social_media_views", [(100, 30), (50, 25), (20, 20), (10, 15), (0, 10)], GT),
    ladder("referral_views", [(50, 30), (25, 25), (10, 20), (5, 15), (0, 10)], GT),
)

ANALYTICS_RETENTION: tuple[Contribution, ...] = (
    ladder("average_read_time", [(300, 30), (180, 25), (120, 20), (60, 15), (30, 10)], GT),
    ladder("bounce_rate", [(20, 25), (40, 20), (60, 15), (80, 10), (90, 5)], LT),
    ladder("subsequent_review_views", [(20, 25), (10, 20), (5, 15), (2, 10), (0, 5)], GT),
    ladder("average_session_duration", [(600, 20), (300, 15), (180, 10), (60, 5)], GT),
)


def analytics_quality_score(analytics: Any) -> int:
    return score(analytics, ANALYTICS_QUALITY)


def analytics_engagement_score(analytics: Any) -> int:
    return score(analytics, ANALYTICS_ENGAGEMENT)


def analytics_influence_score(analytics: Any) -> int:
    return score(analytics, ANALYTICS_INFLUENCE)


def analytics_virality_score(analytics: Any) -> int:
    return score(analytics, ANALYTICS_VIRALITY)


def analytics_retention_score(analytics: Any) -> int:
    return score(analytics, ANALYTICS_RETENTION)
