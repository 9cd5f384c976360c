"""
Quality and Engagement Scores

Score tables for reviews, replies and reply reactions.

Each score is computed from raw counters and flags already on the entity,
never from another stored score, so any score can be recomputed from
persisted state at any time and in any order. Entities are duck-typed:
the functions only read attributes, which keeps them usable with ORM
instances and plain test doubles alike.
"""

import operator
from typing import Any

from review_service.services.ladder import (
    Contribution,
    Ladder,
    first_of,
    flag,
    is_blank,
    ladder,
    score,
)
from review_service.services.sentiment import influence_weight_for

SPAM_THRESHOLD = 0.7
BOT_THRESHOLD = 0.7
ANOMALY_THRESHOLD = 0.8


# =============================================================================
# Review
# =============================================================================

REVIEW_COMPLETENESS_FIELDS = (
    "summary",
    "positive_aspects",
    "negative_aspects",
    "target_audience",
    "similar_recommendations",
)
REVIEW_COMPLETENESS_POINTS = 3


def _review_helpfulness(review: Any) -> int:
    if review.total_votes > 0:
        return round(review.helpfulness_ratio * 25)
    return 0


def _review_completeness(review: Any) -> int:
    present = sum(
        1 for name in REVIEW_COMPLETENESS_FIELDS if not is_blank(getattr(review, name))
    )
    return present * REVIEW_COMPLETENESS_POINTS


REVIEW_QUALITY: tuple[Contribution, ...] = (
    # Length (0-25)
    ladder("word_count", [(200, 25), (100, 15), (50, 10), (20, 5)]),
    # Detailed ratings (0-20)
    flag("is_detailed_review", 20),
    # Helpfulness (0-25)
    _review_helpfulness,
    # Engagement (0-15)
    ladder("reply_count", [(5, 15), (2, 10), (0, 5)], operator.gt),
    # Completeness (0-15)
    _review_completeness,
)


def review_quality_score(review: Any) -> int:
    """Quality score (0-100) for a review."""
    return score(review, REVIEW_QUALITY)


# =============================================================================
# Reply
# =============================================================================


def _reply_like_ratio(reply: Any) -> int:
    if reply.total_reactions > 0:
        return int(reply.like_ratio * 30)
    return 0


def _reply_thread_participation(reply: Any) -> int:
    return min(20, max(0, reply.child_reply_count or 0) * 5)


def _reply_in_good_standing(reply: Any) -> bool:
    return not reply.is_flagged and reply.is_approved


REPLY_QUALITY: tuple[Contribution, ...] = (
    # Length (0-20)
    ladder("word_count", [(50, 20), (25, 15), (10, 10), (5, 5)]),
    # Reactions (0-30)
    _reply_like_ratio,
    # Thread participation (0-20)
    _reply_thread_participation,
    # Author / verified (0-15)
    first_of(("is_author_reply", 15), ("is_verified_reply", 10)),
    # Moderation state (0-15)
    first_of(("is_pinned", 15), ("is_featured", 10), (_reply_in_good_standing, 5)),
)


def reply_quality_score(reply: Any) -> int:
    """Quality score (0-100) for a reply."""
    return score(reply, REPLY_QUALITY)


# =============================================================================
# Reply Reaction
# =============================================================================


def is_likely_spam(reaction: Any) -> bool:
    return (reaction.spam_score or 0.0) > SPAM_THRESHOLD


def is_likely_bot(reaction: Any) -> bool:
    return (reaction.bot_score or 0.0) > BOT_THRESHOLD


def is_anomalous(reaction: Any) -> bool:
    return (reaction.anomaly_score or 0.0) > ANOMALY_THRESHOLD


def _intensity_points(reaction: Any) -> int:
    return (reaction.reaction_intensity or 0) * 4


def _comment_length_points(reaction: Any) -> int:
    if is_blank(reaction.reaction_comment):
        return 0
    return min(15, len(reaction.reaction_comment) // 10)


def _is_authentic(reaction: Any) -> bool:
    return not is_likely_spam(reaction) and not is_likely_bot(reaction)


def _has_comment(reaction: Any) -> bool:
    return not is_blank(reaction.reaction_comment)


def _has_context(reaction: Any) -> bool:
    return not is_blank(reaction.reaction_context)


REACTION_QUALITY_BASE = 20

REACTION_QUALITY: tuple[Contribution, ...] = (
    # Intensity (4-20)
    _intensity_points,
    # Comment (0-15)
    _comment_length_points,
    # Verification (0-15)
    flag("is_verified", 15),
    # Premium (0-10)
    flag("is_premium_reaction", 10),
    # Time spent on the reply (0-10)
    ladder("time_spent_on_reply", [(30, 10), (10, 5)], operator.gt),
    # Authenticity (0-10)
    flag(_is_authentic, 10),
)

REACTION_ENGAGEMENT: tuple[Contribution, ...] = (
    # Time on reply (0-30)
    ladder(
        "time_spent_on_reply",
        [(120, 30), (60, 25), (30, 20), (10, 15), (0, 10)],
        operator.gt,
    ),
    # Session duration (0-25)
    ladder(
        "session_duration",
        [(600, 25), (300, 20), (180, 15), (60, 10), (0, 5)],
        operator.gt,
    ),
    # Pages viewed (0-20)
    ladder("pages_viewed_in_session", [(10, 20), (5, 15), (2, 10), (0, 5)], operator.gt),
    # Interaction depth (0-15)
    first_of(
        (_has_comment, 15),
        (lambda r: (r.reaction_intensity or 0) > 3, 10),
        (lambda r: (r.reaction_intensity or 0) > 1, 5),
    ),
    # Context (0-10)
    flag(_has_context, 10),
)


def reaction_quality_score(reaction: Any) -> int:
    """Quality score (0-100) for a reply reaction."""
    return score(reaction, REACTION_QUALITY, base=REACTION_QUALITY_BASE)


def _type_influence(reaction: Any) -> int:
    return influence_weight_for(reaction.reaction_type)


QUALITY_INFLUENCE = Ladder(((80, 10), (60, 7), (40, 5), (20, 3)), operator.gt)


def _quality_influence(reaction: Any) -> int:
    # Re-derived from raw fields so influence never depends on a stored score
    return QUALITY_INFLUENCE.points(reaction_quality_score(reaction))


REACTION_INFLUENCE: tuple[Contribution, ...] = (
    # Reaction type (1-25)
    _type_influence,
    # Intensity (4-20)
    _intensity_points,
    # Premium (0-15)
    flag("is_premium_reaction", 15),
    # Verification (0-15)
    flag("is_verified", 15),
    # Highlighting (0-15)
    first_of(("is_highlighted", 15), ("is_pinned", 10)),
    # Quality (0-10)
    _quality_influence,
)


def reaction_engagement_score(reaction: Any) -> int:
    """Engagement score (0-100) for a reply reaction."""
    return score(reaction, REACTION_ENGAGEMENT)


def reaction_influence_score(reaction: Any) -> int:
    """Influence score (0-100) for a reply reaction."""
    return score(reaction, REACTION_INFLUENCE)
