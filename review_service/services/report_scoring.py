"""
Report Scores

Risk, urgency, impact and confidence scores for moderation reports.

Inputs are the report's violation flags, its severity and priority (1-5),
the content-analysis floats supplied by upstream classifiers, the number of
duplicate reports filed against the same content, and (for urgency only)
the report's age. Review reports and reply reports share these tables.
"""

import operator
from datetime import datetime
from typing import Any

from review_service.services.clock import age_in_days
from review_service.services.ladder import (
    Contribution,
    flag,
    flags,
    is_blank,
    ladder,
    score,
)

HIGH_RISK_THRESHOLD = 70

# Violations that always need a moderator's immediate attention
SERIOUS_VIOLATIONS = (
    "involves_hate_speech",
    "involves_violence",
    "involves_self_harm",
    "involves_illegal_activity",
    "involves_cyberbullying",
    "involves_doxxing",
)


def _duplicates(report: Any) -> int:
    return max(0, report.duplicate_count or 0)


def _any_of(*names: str):
    return lambda report: any(getattr(report, name) for name in names)


# =============================================================================
# Risk
# =============================================================================

RISK_FLAG_WEIGHTS = (
    ("involves_violence", 20),
    ("involves_self_harm", 20),
    ("involves_hate_speech", 15),
    ("involves_cyberbullying", 15),
    ("involves_doxxing", 15),
    ("involves_illegal_activity", 15),
    ("is_part_of_harassment_pattern", 10),
    ("involves_misinformation", 10),
    ("involves_impersonation", 10),
    ("involves_financial_scam", 10),
    ("involves_malware", 10),
    ("involves_coordinated_behavior", 10),
)

REPORT_RISK: tuple[Contribution, ...] = (
    lambda r: (r.report_severity or 0) * 10,
    lambda r: (r.report_priority or 0) * 8,
    flags(RISK_FLAG_WEIGHTS),
    ladder("content_toxicity_score", [(0.8, 15), (0.6, 10), (0.4, 5)], operator.gt),
    ladder("content_sentiment_score", [(-0.8, 10), (-0.6, 7), (-0.4, 5)], operator.lt),
)


def report_risk_score(report: Any) -> int:
    """Risk score (0-100) for a report."""
    return score(report, REPORT_RISK)


# =============================================================================
# Urgency
# =============================================================================

URGENCY_CONTRIBUTIONS: tuple[Contribution, ...] = (
    flag(_any_of("involves_violence", "involves_self_harm"), 30),
    flag(_any_of("involves_hate_speech", "involves_cyberbullying"), 25),
    flag("involves_doxxing", 25),
    flag("involves_illegal_activity", 20),
    flag(_any_of("involves_financial_scam", "involves_malware"), 20),
    lambda r: (r.report_priority or 0) * 10,
    lambda r: (r.report_severity or 0) * 8,
    lambda r: _duplicates(r) * 5,
)

URGENCY_AGE_RUNGS = [(3, 15), (1, 10), (0, 5)]


def report_urgency_score(report: Any, now: datetime) -> int:
    """Urgency score (0-100); older reports become more urgent."""
    age = ladder(lambda r: age_in_days(r.created_at, now), URGENCY_AGE_RUNGS, operator.gt)
    return score(report, URGENCY_CONTRIBUTIONS + (age,))


# =============================================================================
# Impact
# =============================================================================

IMPACT_FLAG_WEIGHTS = (
    # Community impact
    ("involves_hate_speech", 25),
    ("involves_cyberbullying", 25),
    ("involves_violence", 20),
    ("is_part_of_harassment_pattern", 20),
    ("involves_coordinated_behavior", 20),
    ("involves_misinformation", 15),
    ("involves_doxxing", 15),
    # Platform impact
    ("involves_fake_accounts", 15),
    ("involves_financial_scam", 15),
    ("involves_malware", 15),
)

REPORT_IMPACT: tuple[Contribution, ...] = (
    flags(IMPACT_FLAG_WEIGHTS),
    ladder("content_spam_score", [(0.8, 10)], operator.gt),
    lambda r: (r.report_severity or 0) * 5,
    lambda r: (r.report_priority or 0) * 5,
    lambda r: min(20, _duplicates(r) * 3),
)


def report_impact_score(report: Any) -> int:
    """Impact score (0-100) for a report."""
    return score(report, REPORT_IMPACT)


# =============================================================================
# Confidence
# =============================================================================

CONFIDENCE_BASE = 50


def _low_prediction_penalty(report: Any) -> int:
    return -15 if (report.ml_prediction_score or 0.0) < 0.2 else 0


def _has_text(name: str):
    return lambda report: not is_blank(getattr(report, name))


REPORT_CONFIDENCE: tuple[Contribution, ...] = (
    # ML prediction
    ladder("ml_prediction_score", [(0.8, 25), (0.6, 15), (0.4, 10)], operator.gt),
    _low_prediction_penalty,
    # Content analysis
    ladder("content_toxicity_score", [(0.7, 15)], operator.gt),
    ladder("content_spam_score", [(0.7, 10)], operator.gt),
    ladder("language_detection_confidence", [(0.9, 5)], operator.gt),
    # Report quality
    flag(_has_text("report_description"), 10),
    flag(_has_text("report_evidence"), 10),
    flag(_has_text("evidence_urls"), 5),
    flag(_has_text("attachment_paths"), 5),
    # Duplicate confirmation
    lambda r: min(15, _duplicates(r) * 2),
    # Anonymous reports are less trustworthy
    flag("is_anonymous", -10),
)


def report_confidence_score(report: Any) -> int:
    """Confidence score (0-100) that the report is valid."""
    return score(report, REPORT_CONFIDENCE, base=CONFIDENCE_BASE)
