"""
Threshold Ladder Scoring

Every score in this service has the same shape: a handful of independent
contributions, each one a fixed bucket ladder ("200+ words -> 25 points,
100+ -> 15, ...") or a flag worth a fixed number of points, summed and then
clamped to 0-100.

Instead of writing an if/elif tree per score, a score is declared as a tuple
of contributions and evaluated with score():

    REVIEW_QUALITY = (
        ladder("word_count", [(200, 25), (100, 15), (50, 10), (20, 5)]),
        flag("is_detailed_review", 20),
    )
    review.quality_score = score(review, REVIEW_QUALITY)

A contribution is any callable taking the entity and returning points, so
one-off formulas (ratios, per-item caps) sit in the same table as the
ladders.
"""

import operator
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from operator import attrgetter
from typing import Any

Contribution = Callable[[Any], int]
Getter = Callable[[Any], Any]

SCORE_MIN = 0
SCORE_MAX = 100


def clamp_score(value: float, low: int = SCORE_MIN, high: int = SCORE_MAX) -> int:
    """Clamp a summed score into [low, high] as min(high, max(low, value))."""
    return int(min(high, max(low, value)))


def clamp_sentiment(value: float) -> float:
    """Clamp a polarity value into [-1.0, 1.0]."""
    return min(1.0, max(-1.0, value))


def _getter(source: str | Getter) -> Getter:
    if isinstance(source, str):
        return attrgetter(source)
    return source


@dataclass(frozen=True)
class Ladder:
    """
    Ordered (threshold, points) rungs.

    The first rung whose threshold satisfies compare(value, threshold) wins;
    if none does, default is returned. Rungs are checked top to bottom, so
    for ">=" / ">" ladders list the highest threshold first and for "<"
    ladders the lowest first.
    """

    rungs: tuple[tuple[float, int], ...]
    compare: Callable[[Any, Any], bool] = operator.ge
    default: int = 0

    def points(self, value: float | None) -> int:
        if value is None:
            return self.default
        for threshold, points in self.rungs:
            if self.compare(value, threshold):
                return points
        return self.default


def ladder(
    source: str | Getter,
    rungs: Sequence[tuple[float, int]],
    compare: Callable[[Any, Any], bool] = operator.ge,
    default: int = 0,
) -> Contribution:
    """Contribution that buckets one field through a Ladder."""
    get = _getter(source)
    steps = Ladder(tuple(rungs), compare, default)
    return lambda entity: steps.points(get(entity))


def flag(source: str | Getter, points: int) -> Contribution:
    """Contribution worth a fixed number of points when the field is truthy."""
    get = _getter(source)
    return lambda entity: points if get(entity) else 0


def flags(weights: Iterable[tuple[str, int]]) -> Contribution:
    """Sum of fixed points for every truthy boolean field in weights."""
    table = tuple(weights)
    return lambda entity: sum(points for name, points in table if getattr(entity, name))


def first_of(*choices: tuple[str | Getter, int], default: int = 0) -> Contribution:
    """
    if/elif chain over predicates: points of the first truthy one.

        first_of(("is_pinned", 15), ("is_featured", 10))
    """
    table = tuple((_getter(source), points) for source, points in choices)

    def contribution(entity: Any) -> int:
        for get, points in table:
            if get(entity):
                return points
        return default

    return contribution


def score(
    entity: Any,
    contributions: Iterable[Contribution],
    base: int = 0,
) -> int:
    """Sum base plus every contribution for entity, clamped to 0-100."""
    total = base + sum(contribution(entity) for contribution in contributions)
    return clamp_score(total)


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()
