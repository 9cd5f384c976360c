"""
Tests for the ReviewReply and ReplyReaction aggregates.
"""

from datetime import timedelta

import pytest

from review_service.models import ReplyReaction
from tests.conftest import FIXED_NOW, build_reply

LATER = FIXED_NOW + timedelta(hours=3)


# =============================================================================
# Reply counters and derived values
# =============================================================================


class TestReplyCounters:
    def test_reactions_total_and_ratio(self):
        reply = build_reply()
        assert reply.total_reactions == 0
        assert reply.like_ratio == 0.0

        reply.record_reaction("like")
        reply.record_reaction("like")
        reply.record_reaction("dislike")
        reply.record_reaction("love")
        assert reply.total_reactions == 3
        assert reply.like_ratio == pytest.approx(2 / 3)

    def test_thread_depth(self):
        reply = build_reply()
        reply.set_thread_depth(None)
        assert reply.thread_depth == 0
        reply.set_thread_depth(2)
        assert reply.thread_depth == 3

    def test_child_replies_never_negative(self):
        reply = build_reply()
        reply.remove_child_reply()
        assert reply.child_reply_count == 0
        reply.record_child_reply()
        assert reply.has_child_replies

    @pytest.mark.parametrize(
        "overrides, status",
        [
            ({}, "Published"),
            ({"is_featured": True}, "Featured"),
            ({"is_pinned": True, "is_featured": True}, "Pinned"),
            ({"is_visible": False, "is_pinned": True}, "Hidden"),
            ({"is_flagged": True}, "Flagged"),
            ({"is_approved": False, "is_flagged": True}, "Pending Approval"),
            ({"is_deleted": True, "is_approved": False}, "Deleted"),
        ],
    )
    def test_status_precedence(self, overrides, status):
        assert build_reply(**overrides).status == status

    def test_display_lookups_fall_back(self):
        reply = build_reply(reply_type="question", reply_tone="made-up")
        assert reply.reply_type_display == "Question"
        assert reply.reply_tone_display == "Neutral"

    def test_reading_time_in_seconds(self):
        reply = build_reply(content="word " * 100).prepare_for_save(FIXED_NOW)
        assert reply.word_count == 100
        assert reply.estimated_reading_time == 30


# =============================================================================
# Reply transitions
# =============================================================================


class TestReplyTransitions:
    def test_mark_as_edited(self):
        reply = build_reply().prepare_for_save(FIXED_NOW)
        reply.mark_as_edited(LATER)
        assert reply.is_edited
        assert reply.edited_at == LATER
        assert reply.updated_at == LATER

    def test_soft_delete_with_reason(self):
        reply = build_reply().prepare_for_save(FIXED_NOW)
        reply.soft_delete("Off topic", LATER)
        assert reply.is_deleted
        assert not reply.is_visible
        assert reply.deleted_at == LATER
        assert reply.moderation_reason == "Off topic"
        assert reply.status == "Deleted"

    def test_soft_delete_without_reason_keeps_previous(self):
        reply = build_reply(moderation_reason="Earlier note")
        reply.soft_delete(now=LATER)
        assert reply.moderation_reason == "Earlier note"

    def test_restore(self):
        reply = build_reply().prepare_for_save(FIXED_NOW)
        reply.soft_delete("Spam", LATER)
        reply.restore(LATER + timedelta(minutes=5))
        assert not reply.is_deleted
        assert reply.is_visible
        assert reply.deleted_at is None
        assert reply.updated_at == LATER + timedelta(minutes=5)
        assert reply.status == "Published"

    def test_transitions_survive_prepare(self):
        reply = build_reply().prepare_for_save(FIXED_NOW)
        reply.mark_as_edited(LATER)
        reply.prepare_for_save(LATER + timedelta(hours=1))
        assert reply.updated_at == LATER
        assert reply.created_at == FIXED_NOW

    def test_prepare_is_idempotent(self):
        reply = build_reply(like_count=4, dislike_count=1, is_author_reply=True)
        reply.prepare_for_save(FIXED_NOW)
        first = (reply.word_count, reply.estimated_reading_time, reply.quality_score)
        reply.prepare_for_save(FIXED_NOW)
        assert (reply.word_count, reply.estimated_reading_time, reply.quality_score) == first


# =============================================================================
# Reactions
# =============================================================================


def make_reaction(**overrides) -> ReplyReaction:
    fields = {"reply_id": 1, "user_id": 2, "reaction_type": "like"}
    fields.update(overrides)
    return ReplyReaction(**fields)


class TestReactions:
    def test_prepare_normalizes_type_and_sets_sentiment(self):
        reaction = make_reaction(reaction_type="  Angry ", reaction_intensity=1)
        reaction.prepare_for_save(FIXED_NOW)
        assert reaction.reaction_type == "angry"
        assert round(reaction.sentiment_value, 4) == -0.2667
        assert reaction.is_negative
        assert reaction.sentiment_display == "Negative"

    def test_love_is_very_positive(self):
        reaction = make_reaction(reaction_type="love").prepare_for_save(FIXED_NOW)
        assert reaction.sentiment_value == 1.0
        assert reaction.is_positive
        assert reaction.sentiment_display == "Very Positive"

    def test_unknown_type_is_neutral(self):
        reaction = make_reaction(reaction_type="shrug").prepare_for_save(FIXED_NOW)
        assert reaction.is_neutral
        assert reaction.reaction_type_display == "shrug"

    def test_emoji_defaults_from_type(self):
        assert make_reaction(reaction_type="dislike").reaction_emoji_display == "👎"
        assert make_reaction(reaction_emoji="🔥").reaction_emoji_display == "🔥"

    @pytest.mark.parametrize("intensity", [1, 2, 3, 4, 5])
    def test_scores_within_bounds(self, intensity):
        reaction = make_reaction(
            reaction_type="insightful",
            reaction_intensity=intensity,
            reaction_comment="Good point about the ending",
        ).prepare_for_save(FIXED_NOW)
        for value in (reaction.quality_score, reaction.engagement_score, reaction.influence_score):
            assert 0 <= value <= 100
        assert -1.0 <= reaction.sentiment_value <= 1.0

    def test_prepare_is_idempotent(self):
        reaction = make_reaction(reaction_type="LOVE", time_spent_on_reply=45)
        reaction.prepare_for_save(FIXED_NOW)
        first = (
            reaction.reaction_type,
            reaction.sentiment_value,
            reaction.quality_score,
            reaction.engagement_score,
            reaction.influence_score,
        )
        reaction.prepare_for_save(FIXED_NOW)
        assert (
            reaction.reaction_type,
            reaction.sentiment_value,
            reaction.quality_score,
            reaction.engagement_score,
            reaction.influence_score,
        ) == first

    def test_needs_review(self):
        assert not make_reaction().needs_review
        assert make_reaction(bot_score=0.9).needs_review
        assert make_reaction(report_count=1).needs_review
        assert make_reaction(is_flagged=True).needs_review
