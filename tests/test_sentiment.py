"""
Tests for the reaction sentiment mapping and lookup tables.
"""

import pytest

from review_service.services.sentiment import (
    BASE_SENTIMENT,
    ReactionType,
    emoji_for,
    influence_weight_for,
    intensity_label,
    normalize_reaction_type,
    reaction_type_label,
    sentiment_for,
    sentiment_label,
)


class TestSentimentFor:
    def test_love_at_neutral_intensity(self):
        assert sentiment_for("love", 3) == 1.0

    def test_angry_at_lowest_intensity(self):
        assert round(sentiment_for("angry", 1), 4) == -0.2667

    def test_high_intensity_is_clamped(self):
        assert sentiment_for("love", 5) == 1.0
        assert sentiment_for("angry", 5) == -1.0

    def test_unknown_type_is_neutral(self):
        assert sentiment_for("meh", 5) == 0.0

    @pytest.mark.parametrize("reaction_type", list(ReactionType))
    @pytest.mark.parametrize("intensity", [1, 2, 3, 4, 5])
    def test_always_within_bounds(self, reaction_type, intensity):
        assert -1.0 <= sentiment_for(reaction_type, intensity) <= 1.0

    def test_table_covers_every_reaction_type(self):
        assert set(BASE_SENTIMENT) == set(ReactionType)


class TestLookups:
    def test_normalize(self):
        assert normalize_reaction_type("  LoVe ") == "love"
        assert normalize_reaction_type(None) == ""

    def test_emoji(self):
        assert emoji_for("dislike") == "👎"
        assert emoji_for("unknown") == "👍"

    def test_influence_weight(self):
        assert influence_weight_for("love") == 25
        assert influence_weight_for("angry") == 1
        assert influence_weight_for("unknown") == 10

    def test_type_label(self):
        assert reaction_type_label("insightful") == "Insightful"
        assert reaction_type_label("custom") == "custom"

    def test_intensity_label(self):
        assert intensity_label(1) == "Very Low"
        assert intensity_label(5) == "Very High"
        assert intensity_label(9) == "Unknown"

    @pytest.mark.parametrize(
        "value, label",
        [
            (1.0, "Very Positive"),
            (0.51, "Very Positive"),
            (0.5, "Positive"),
            (0.3, "Positive"),
            (0.2, "Neutral"),
            (0.0, "Neutral"),
            (-0.2, "Negative"),
            (-0.5, "Very Negative"),
            (-1.0, "Very Negative"),
        ],
    )
    def test_sentiment_label_thresholds(self, value, label):
        assert sentiment_label(value) == label
