"""
Tests for prepare_for_save with missing numeric inputs.

Counters, intensities and severities can arrive as None (a nullable
payload, a row written before a column existed). prepare_for_save treats
them as 0 and never raises.
"""

from datetime import date

import pytest

from review_service.models import ReplyReaction, ReviewAnalytics, ReviewReport
from tests.conftest import FIXED_NOW, build_reply, build_review


def build_reaction(**overrides) -> ReplyReaction:
    fields = {"reply_id": 1, "user_id": 2, "reaction_type": "love"}
    fields.update(overrides)
    return ReplyReaction(**fields)


def build_report(**overrides) -> ReviewReport:
    fields = {
        "review_id": 1,
        "reported_by_user_id": 2,
        "report_category": "harassment",
        "report_reason": "Insults the author",
        "involves_violence": True,
    }
    fields.update(overrides)
    return ReviewReport(**fields)


def build_analytics(**overrides) -> ReviewAnalytics:
    fields = {
        "review_id": 1,
        "analytics_date": date(2024, 5, 31),
        "view_count": 100,
        "unique_view_count": 80,
        "click_count": 10,
        "share_count": 3,
        "helpful_votes_received": 4,
        "unhelpful_votes_received": 1,
    }
    fields.update(overrides)
    return ReviewAnalytics(**fields)


REPORT_SCORES = ("risk_score", "urgency_score", "impact_score", "confidence_score")
ANALYTICS_OUTPUTS = (
    "click_through_rate",
    "bounce_rate",
    "engagement_rate",
    "conversion_rate",
    "daily_helpfulness_ratio",
    "quality_score",
    "engagement_score",
    "retention_score",
)


@pytest.mark.parametrize(
    "build, fields, outputs",
    [
        pytest.param(
            build_review,
            {"helpful_votes": None, "unhelpful_votes": 3},
            ("quality_score",),
            id="review-helpful-votes",
        ),
        pytest.param(
            build_review,
            {"helpful_votes": 2, "unhelpful_votes": None, "reply_count": None},
            ("quality_score",),
            id="review-unhelpful-votes-and-replies",
        ),
        pytest.param(
            build_reply,
            {"like_count": None, "dislike_count": 2},
            ("quality_score",),
            id="reply-likes",
        ),
        pytest.param(
            build_reply,
            {"like_count": 1, "dislike_count": None, "child_reply_count": None},
            ("quality_score",),
            id="reply-dislikes-and-children",
        ),
        pytest.param(
            build_reaction,
            {"reaction_intensity": None},
            ("sentiment_value", "quality_score", "engagement_score", "influence_score"),
            id="reaction-intensity",
        ),
        pytest.param(build_report, {"report_severity": None}, REPORT_SCORES, id="report-severity"),
        pytest.param(build_report, {"report_priority": None}, REPORT_SCORES, id="report-priority"),
        pytest.param(
            build_analytics,
            {"click_count": None, "bookmark_count": None},
            ANALYTICS_OUTPUTS,
            id="analytics-clicks",
        ),
        pytest.param(
            build_analytics,
            {"unique_view_count": None, "helpful_votes_received": None},
            ANALYTICS_OUTPUTS,
            id="analytics-unique-views-and-votes",
        ),
    ],
)
def test_missing_number_scores_like_zero(build, fields, outputs):
    missing = build(**fields).prepare_for_save(FIXED_NOW)
    zeroed = build(**{name: 0 if value is None else value for name, value in fields.items()})
    zeroed.prepare_for_save(FIXED_NOW)

    for name in outputs:
        assert getattr(missing, name) == getattr(zeroed, name), name
        if name.endswith("_score"):
            assert 0 <= getattr(missing, name) <= 100


class TestMissingNumbers:
    def test_review_ratio_without_helpful_votes(self):
        review = build_review(helpful_votes=None, unhelpful_votes=3).prepare_for_save(FIXED_NOW)

        assert review.total_votes == 3
        assert review.helpfulness_ratio == 0.0

    def test_reply_ratio_without_likes(self):
        reply = build_reply(like_count=None, dislike_count=2).prepare_for_save(FIXED_NOW)

        assert reply.total_reactions == 2
        assert reply.like_ratio == 0.0

    def test_reaction_without_intensity_is_neutral(self):
        reaction = build_reaction(reaction_intensity=None).prepare_for_save(FIXED_NOW)

        assert reaction.sentiment_value == 0.0
        assert reaction.is_neutral
        assert reaction.intensity_display == "Unknown"

    def test_report_without_severity(self):
        report = build_report(report_severity=None).prepare_for_save(FIXED_NOW)

        # priority 3 * 8 + violence 20
        assert report.risk_score == 44
        assert report.is_urgent is False

    def test_escalating_a_report_without_priority(self):
        report = build_report(report_priority=None).prepare_for_save(FIXED_NOW)

        report.escalate("no priority set", FIXED_NOW)

        assert report.report_priority == 1
        assert report.escalation_level == 1

    def test_analytics_without_clicks(self):
        analytics = build_analytics(click_count=None).prepare_for_save(FIXED_NOW)

        assert analytics.click_through_rate == 0.0
        assert analytics.bounce_rate == 100.0
        assert analytics.processed_at == FIXED_NOW
