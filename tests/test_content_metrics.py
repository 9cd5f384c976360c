"""
Tests for word count, character count and reading time.
"""

import pytest

from review_service.services.content_metrics import (
    count_words,
    measure_reply,
    measure_review,
    truncate,
)


@pytest.mark.parametrize(
    "text, words",
    [
        (None, 0),
        ("", 0),
        ("   ", 0),
        ("one two three", 3),
        ("  one\ttwo\n\nthree  ", 3),
        ("hyphen-ated words count once", 4),
    ],
)
def test_count_words(text, words):
    assert count_words(text) == words


class TestReviewReadingTime:
    def test_empty_review_reads_in_one_minute(self):
        metrics = measure_review("")
        assert metrics.word_count == 0
        assert metrics.character_count == 0
        assert metrics.reading_time == 1

    @pytest.mark.parametrize("words, minutes", [(3, 1), (199, 1), (200, 1), (399, 1), (400, 2), (1000, 5)])
    def test_minutes_round_down_with_floor_of_one(self, words, minutes):
        assert measure_review(" ".join(["word"] * words)).reading_time == minutes

    def test_character_count_is_raw_length(self):
        assert measure_review("one two three").character_count == 13


class TestReplyReadingTime:
    @pytest.mark.parametrize("words, seconds", [(0, 5), (10, 5), (20, 6), (100, 30), (200, 60)])
    def test_seconds_with_floor_of_five(self, words, seconds):
        assert measure_reply(" ".join(["word"] * words)).reading_time == seconds


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("short", 10) == "short"

    def test_exact_limit_unchanged(self):
        assert truncate("a" * 10, 10) == "a" * 10

    def test_long_text_gets_ellipsis(self):
        assert truncate("a" * 12, 10) == "a" * 10 + "..."
