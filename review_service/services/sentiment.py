"""
Reaction Sentiment Mapping

The only categorical-to-numeric mapping in the service: a reaction type
("love", "angry", ...) becomes a base polarity in [-1, 1], scaled by the
reaction intensity (1-5, where 3 is neutral scaling) and clamped.

The lookup tables for the reaction's emoji, display name and influence
weight live here too so that every per-type fact sits in one place.
Unknown types fall back to sentiment 0.0, emoji 👍 and influence 10.
"""

from enum import StrEnum

from review_service.services.ladder import clamp_sentiment


class ReactionType(StrEnum):
    """The fixed set of reaction types a reply can receive."""

    LIKE = "like"
    DISLIKE = "dislike"
    LOVE = "love"
    LAUGH = "laugh"
    WOW = "wow"
    SAD = "sad"
    ANGRY = "angry"
    CARE = "care"
    CELEBRATE = "celebrate"
    SUPPORT = "support"
    INSIGHTFUL = "insightful"
    FUNNY = "funny"
    HELPFUL = "helpful"
    INSPIRING = "inspiring"
    THOUGHTFUL = "thoughtful"


# =============================================================================
# Lookup Tables
# =============================================================================

BASE_SENTIMENT: dict[str, float] = {
    ReactionType.LOVE: 1.0,
    ReactionType.CELEBRATE: 0.9,
    ReactionType.INSPIRING: 0.8,
    ReactionType.HELPFUL: 0.7,
    ReactionType.INSIGHTFUL: 0.7,
    ReactionType.LIKE: 0.6,
    ReactionType.SUPPORT: 0.6,
    ReactionType.THOUGHTFUL: 0.5,
    ReactionType.CARE: 0.4,
    ReactionType.WOW: 0.3,
    ReactionType.FUNNY: 0.2,
    ReactionType.LAUGH: 0.2,
    ReactionType.SAD: -0.3,
    ReactionType.DISLIKE: -0.6,
    ReactionType.ANGRY: -0.8,
}
DEFAULT_SENTIMENT = 0.0

REACTION_EMOJI: dict[str, str] = {
    ReactionType.LIKE: "👍",
    ReactionType.DISLIKE: "👎",
    ReactionType.LOVE: "❤️",
    ReactionType.LAUGH: "😂",
    ReactionType.WOW: "😮",
    ReactionType.SAD: "😢",
    ReactionType.ANGRY: "😠",
    ReactionType.CARE: "🤗",
    ReactionType.CELEBRATE: "🎉",
    ReactionType.SUPPORT: "💪",
    ReactionType.INSIGHTFUL: "💡",
    ReactionType.FUNNY: "😄",
    ReactionType.HELPFUL: "🙏",
    ReactionType.INSPIRING: "✨",
    ReactionType.THOUGHTFUL: "🤔",
}
DEFAULT_EMOJI = "👍"

# Points a reaction type contributes to the reaction's influence score
INFLUENCE_WEIGHT: dict[str, int] = {
    ReactionType.LOVE: 25,
    ReactionType.INSIGHTFUL: 24,
    ReactionType.INSPIRING: 23,
    ReactionType.HELPFUL: 22,
    ReactionType.THOUGHTFUL: 21,
    ReactionType.SUPPORT: 20,
    ReactionType.CELEBRATE: 19,
    ReactionType.LIKE: 18,
    ReactionType.WOW: 15,
    ReactionType.FUNNY: 12,
    ReactionType.CARE: 10,
    ReactionType.LAUGH: 8,
    ReactionType.SAD: 5,
    ReactionType.DISLIKE: 3,
    ReactionType.ANGRY: 1,
}
DEFAULT_INFLUENCE_WEIGHT = 10

INTENSITY_LABELS: dict[int, str] = {
    1: "Very Low",
    2: "Low",
    3: "Medium",
    4: "High",
    5: "Very High",
}

# (exclusive lower bound, label), checked top to bottom
SENTIMENT_LABELS: tuple[tuple[float, str], ...] = (
    (0.5, "Very Positive"),
    (0.2, "Positive"),
    (-0.2, "Neutral"),
    (-0.5, "Negative"),
)
LOWEST_SENTIMENT_LABEL = "Very Negative"

NEUTRAL_INTENSITY = 3.0


# =============================================================================
# Mapping Functions
# =============================================================================


def normalize_reaction_type(value: str | None) -> str:
    """Trim and lowercase a reaction type as it is stored."""
    return (value or "").strip().lower()


def sentiment_for(reaction_type: str, intensity: int | None) -> float:
    """
    Sentiment value for a reaction.

    base(reaction_type) * intensity / 3.0, clamped to [-1, 1]. A missing
    intensity counts as 0.

    >>> sentiment_for("love", 3)
    1.0
    """
    base = BASE_SENTIMENT.get(reaction_type, DEFAULT_SENTIMENT)
    return clamp_sentiment(base * ((intensity or 0) / NEUTRAL_INTENSITY))


def emoji_for(reaction_type: str) -> str:
    return REACTION_EMOJI.get(reaction_type, DEFAULT_EMOJI)


def influence_weight_for(reaction_type: str) -> int:
    return INFLUENCE_WEIGHT.get(reaction_type, DEFAULT_INFLUENCE_WEIGHT)


def reaction_type_label(reaction_type: str) -> str:
    """Title-cased name for known types, the raw value otherwise."""
    if reaction_type in BASE_SENTIMENT:
        return reaction_type.title()
    return reaction_type


def intensity_label(intensity: int) -> str:
    return INTENSITY_LABELS.get(intensity, "Unknown")


def sentiment_label(value: float) -> str:
    """Bucket a sentiment value at the >0.5 / >0.2 / >-0.2 / >-0.5 thresholds."""
    for bound, label in SENTIMENT_LABELS:
        if value > bound:
            return label
    return LOWEST_SENTIMENT_LABEL
