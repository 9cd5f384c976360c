"""
Content Metrics

Word count, character count and estimated reading time for free text.

Reading speed is fixed at 200 words per minute. Reviews report reading time
in whole minutes (at least 1), replies in whole seconds (at least 5).
These counters feed the length buckets of the quality scores, so they are
always recomputed before scoring.
"""

from dataclasses import dataclass

WORDS_PER_MINUTE = 200

REVIEW_MIN_READING_MINUTES = 1
REPLY_MIN_READING_SECONDS = 5


@dataclass(frozen=True)
class ContentMetrics:
    """Counters derived from a text body."""

    word_count: int
    character_count: int
    reading_time: int


def count_words(text: str | None) -> int:
    """Number of whitespace-delimited, non-empty tokens."""
    if not text:
        return 0
    return len(text.split())


def measure(text: str | None, *, units_per_minute: int, minimum: int) -> ContentMetrics:
    """
    Measure text and estimate its reading time.

    Args:
        text: Body to measure (None counts as empty)
        units_per_minute: 1 to report minutes, 60 to report seconds
        minimum: Floor for the reading time

    Returns:
        ContentMetrics with reading_time = max(minimum,
        word_count * units_per_minute // WORDS_PER_MINUTE)
    """
    text = text or ""
    words = count_words(text)
    reading_time = max(minimum, words * units_per_minute // WORDS_PER_MINUTE)
    return ContentMetrics(
        word_count=words,
        character_count=len(text),
        reading_time=reading_time,
    )


def measure_review(text: str | None) -> ContentMetrics:
    """Review metrics; reading_time is in minutes."""
    return measure(text, units_per_minute=1, minimum=REVIEW_MIN_READING_MINUTES)


def measure_reply(text: str | None) -> ContentMetrics:
    """Reply metrics; reading_time is in seconds."""
    return measure(text, units_per_minute=60, minimum=REPLY_MIN_READING_SECONDS)


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    """First limit characters of text plus suffix, or text unchanged if short enough."""
    if len(text) > limit:
        return text[:limit] + suffix
    return text
