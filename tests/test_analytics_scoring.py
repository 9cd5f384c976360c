"""
Tests for daily review analytics rates and scores.
"""

from datetime import date

import pytest

from review_service.models import ReviewAnalytics
from review_service.services.analytics_scoring import compute_rates
from tests.conftest import FIXED_NOW


@pytest.fixture
def busy_day() -> ReviewAnalytics:
    return ReviewAnalytics(
        review_id=1,
        analytics_date=date(2024, 5, 31),
        view_count=100,
        unique_view_count=80,
        click_count=10,
        share_count=3,
        bookmark_count=2,
        helpful_votes_received=4,
        unhelpful_votes_received=1,
        replies_received=1,
        book_purchases_influenced=2,
        wishlist_additions=3,
        average_read_time=45.0,
    )


class TestRates:
    def test_rates_are_percentages_of_views(self, busy_day):
        rates = compute_rates(busy_day)
        assert rates.click_through_rate == pytest.approx(10.0)
        assert rates.share_rate == pytest.approx(3.0)
        assert rates.bounce_rate == pytest.approx(90.0)
        # clicks + shares + bookmarks + votes + replies
        assert rates.engagement_rate == pytest.approx(21.0)
        assert rates.conversion_rate == pytest.approx(5.0)
        assert rates.daily_helpfulness_ratio == pytest.approx(0.8)

    def test_no_views_means_zero_rates(self):
        analytics = ReviewAnalytics(
            review_id=1,
            analytics_date=date(2024, 5, 31),
            helpful_votes_received=1,
        )
        rates = compute_rates(analytics)
        assert rates.click_through_rate == 0.0
        assert rates.bounce_rate == 0.0
        assert rates.engagement_rate == 0.0
        assert rates.daily_helpfulness_ratio == 1.0

    def test_no_votes_means_zero_helpfulness(self, busy_day):
        busy_day.helpful_votes_received = 0
        busy_day.unhelpful_votes_received = 0
        assert compute_rates(busy_day).daily_helpfulness_ratio == 0.0


class TestScores:
    def test_scores_after_prepare(self, busy_day):
        busy_day.prepare_for_save(FIXED_NOW)

        # unique views 20 + engagement rate 25 + helpfulness 20 + read time 15
        assert busy_day.quality_score == 80
        # click-through 15 + shares 10 + votes 5 + replies 5 + bookmarks 5
        assert busy_day.engagement_score == 40
        # purchases 10 + wishlist 5
        assert busy_day.influence_score == 15
        # share rate 30
        assert busy_day.virality_score == 30
        # read time 10; 90% bounce earns nothing
        assert busy_day.retention_score == 10

    def test_prepare_stamps_processing_time(self, busy_day):
        busy_day.prepare_for_save(FIXED_NOW)
        assert busy_day.processed_at == FIXED_NOW
        assert busy_day.created_at == FIXED_NOW
        assert busy_day.updated_at is None

    def test_prepare_is_idempotent(self, busy_day):
        busy_day.prepare_for_save(FIXED_NOW)
        first = (busy_day.quality_score, busy_day.engagement_score, busy_day.bounce_rate)
        busy_day.prepare_for_save(FIXED_NOW)
        assert (busy_day.quality_score, busy_day.engagement_score, busy_day.bounce_rate) == first

    def test_every_score_is_clamped(self):
        analytics = ReviewAnalytics(
            review_id=1,
            analytics_date=date(2024, 5, 31),
            view_count=1000,
            unique_view_count=1000,
            click_count=500,
            share_count=400,
            bookmark_count=300,
            helpful_votes_received=90,
            replies_received=50,
            subsequent_review_views=100,
            book_purchases_influenced=50,
            wishlist_additions=50,
            reviewer_follows=50,
            similar_book_views=50,
            social_media_views=500,
            referral_views=500,
            average_read_time=600.0,
            average_session_duration=900.0,
        ).prepare_for_save(FIXED_NOW)

        for name in (
            "quality_score",
            "engagement_score",
            "influence_score",
            "virality_score",
            "retention_score",
        ):
            assert 0 <= getattr(analytics, name) <= 100


class TestValidation:
    def test_valid_day(self, busy_day):
        assert busy_day.validate(today=date(2024, 6, 1)) == []

    def test_future_date(self, busy_day):
        errors = busy_day.validate(today=date(2024, 5, 30))
        assert errors == ["Analytics date cannot be in the future"]

    def test_collects_every_problem(self, busy_day):
        busy_day.review_id = 0
        busy_day.view_count = -1
        errors = busy_day.validate(today=date(2024, 6, 1))
        assert "Valid review ID is required" in errors
        assert "View count cannot be negative" in errors
        assert "Unique view count cannot exceed total view count" in errors
