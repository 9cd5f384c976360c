"""
Moderation Report Models

Reports filed against a review (ReviewReport) or a reply (ReplyReport).
Both kinds share every column, score and transition through ReportMixin;
they differ only in the reported target and in how long a report may sit
in "pending" before it is overdue.

Report Lifecycle:
    pending -> assigned -> investigating -> resolved | dismissed | escalated | duplicate

Transitions are explicit methods (assign, start_investigation, resolve,
dismiss, escalate, mark_duplicate). None of them checks the current state:
a report can be resolved without ever being assigned, and an escalated
report can be escalated again.
"""

import logging
from datetime import datetime
from enum import StrEnum
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from review_service.database import Base
from review_service.models.mixins import TimestampMixin, strip_or_none
from review_service.services.clock import age_in_days, hours_between, utc_now
from review_service.services.report_scoring import (
    HIGH_RISK_THRESHOLD,
    SERIOUS_VIOLATIONS,
    report_confidence_score,
    report_impact_score,
    report_risk_score,
    report_urgency_score,
)
from review_service.services.validation import ValidationErrors

logger = logging.getLogger(__name__)


class ReportStatus(StrEnum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"
    ESCALATED = "escalated"
    DUPLICATE = "duplicate"


STATUS_LABELS = {
    ReportStatus.PENDING: "Pending Review",
    ReportStatus.ASSIGNED: "Assigned",
    ReportStatus.INVESTIGATING: "Under Investigation",
    ReportStatus.RESOLVED: "Resolved",
    ReportStatus.DISMISSED: "Dismissed",
    ReportStatus.ESCALATED: "Escalated",
    ReportStatus.DUPLICATE: "Duplicate",
}

CATEGORY_LABELS = {
    "spam": "Spam",
    "inappropriate": "Inappropriate Content",
    "offensive": "Offensive Language",
    "harassment": "Harassment",
    "cyberbullying": "Cyberbullying",
    "hate_speech": "Hate Speech",
    "violence": "Violence/Threats",
    "self_harm": "Self-Harm",
    "doxxing": "Doxxing/Privacy",
    "impersonation": "Impersonation",
    "misinformation": "Misinformation",
    "copyright": "Copyright Violation",
    "adult_content": "Adult Content",
    "illegal_activity": "Illegal Activity",
    "financial_scam": "Financial Scam",
    "malware": "Malware/Phishing",
    "fake_accounts": "Fake Accounts",
    "coordinated_behavior": "Coordinated Behavior",
    "fake": "Fake Review",
    "other": "Other",
}

SEVERITY_LABELS = {1: "Very Low", 2: "Low", 3: "Medium", 4: "High", 5: "Critical"}
PRIORITY_LABELS = {1: "Very Low", 2: "Low", 3: "Normal", 4: "High", 5: "Critical"}

# (inclusive lower bound, label), checked top to bottom
RISK_LEVELS = (
    (80, "Critical Risk"),
    (60, "High Risk"),
    (40, "Medium Risk"),
    (20, "Low Risk"),
)

MAX_LEVEL = 5

VIOLATION_FLAGS = (
    "is_part_of_harassment_pattern",
    "involves_cyberbullying",
    "involves_hate_speech",
    "involves_doxxing",
    "involves_impersonation",
    "involves_copyright",
    "involves_misinformation",
    "involves_self_harm",
    "involves_violence",
    "involves_adult_content",
    "involves_illegal_activity",
    "involves_financial_scam",
    "involves_malware",
    "involves_fake_accounts",
    "involves_coordinated_behavior",
)

TEXT_FIELDS = (
    "report_category",
    "report_reason",
    "report_description",
    "report_evidence",
    "evidence_urls",
    "attachment_paths",
    "resolution_action",
    "resolution_notes",
    "escalation_reason",
)


def _flag_column() -> Mapped[bool]:
    return mapped_column(Boolean, nullable=False, default=False)


def _score_column() -> Mapped[float]:
    return mapped_column(Float, nullable=False, default=0.0)


class ReportMixin(TimestampMixin):
    """
    Columns, scores and transitions shared by review and reply reports.

    Subclasses set:
        target_label: Used in the "Valid ... ID is required" message
        overdue_after_days: Pending reports older than this are overdue
        target_id: Property returning the reported entity's id
    """

    target_label = "target"
    overdue_after_days = 2

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reported_by_user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # -------------------------------------------------------------------------
    # Report details
    # -------------------------------------------------------------------------
    report_category: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    report_reason: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    report_description: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    report_severity: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    report_priority: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    report_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReportStatus.PENDING.value,
        index=True,
    )
    report_evidence: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    evidence_urls: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    attachment_paths: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    is_anonymous: Mapped[bool] = _flag_column()

    # -------------------------------------------------------------------------
    # Duplicates
    # -------------------------------------------------------------------------
    is_duplicate: Mapped[bool] = _flag_column()
    original_report_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    duplicate_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Reports marked as duplicates of this one",
    )

    # -------------------------------------------------------------------------
    # Workflow
    # -------------------------------------------------------------------------
    is_under_investigation: Mapped[bool] = _flag_column()
    is_resolved: Mapped[bool] = _flag_column()
    is_valid: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    resolution_action: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    resolution_notes: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    resolution_time_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    assigned_moderator_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    resolved_by_user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    investigation_started_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    escalation_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    escalation_reason: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    escalated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # -------------------------------------------------------------------------
    # Violation flags
    # -------------------------------------------------------------------------
    is_part_of_harassment_pattern: Mapped[bool] = _flag_column()
    involves_cyberbullying: Mapped[bool] = _flag_column()
    involves_hate_speech: Mapped[bool] = _flag_column()
    involves_doxxing: Mapped[bool] = _flag_column()
    involves_impersonation: Mapped[bool] = _flag_column()
    involves_copyright: Mapped[bool] = _flag_column()
    involves_misinformation: Mapped[bool] = _flag_column()
    involves_self_harm: Mapped[bool] = _flag_column()
    involves_violence: Mapped[bool] = _flag_column()
    involves_adult_content: Mapped[bool] = _flag_column()
    involves_illegal_activity: Mapped[bool] = _flag_column()
    involves_financial_scam: Mapped[bool] = _flag_column()
    involves_malware: Mapped[bool] = _flag_column()
    involves_fake_accounts: Mapped[bool] = _flag_column()
    involves_coordinated_behavior: Mapped[bool] = _flag_column()

    # -------------------------------------------------------------------------
    # Content analysis inputs (supplied by classifiers)
    # -------------------------------------------------------------------------
    ml_prediction_score: Mapped[float] = _score_column()
    content_sentiment_score: Mapped[float] = _score_column()
    content_toxicity_score: Mapped[float] = _score_column()
    content_spam_score: Mapped[float] = _score_column()
    language_detection_confidence: Mapped[float] = _score_column()

    # -------------------------------------------------------------------------
    # Derived on save
    # -------------------------------------------------------------------------
    risk_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    urgency_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    impact_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @declared_attr.directive
    def __table_args__(cls):
        prefix = cls.__tablename__
        return (
            CheckConstraint(
                "report_severity >= 1 AND report_severity <= 5",
                name=f"ck_{prefix}_severity_range",
            ),
            CheckConstraint(
                "report_priority >= 1 AND report_priority <= 5",
                name=f"ck_{prefix}_priority_range",
            ),
        )

    @property
    def target_id(self) -> int:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------
    @property
    def is_urgent(self) -> bool:
        return (self.report_priority or 0) >= 4 and (self.report_severity or 0) >= 4

    @property
    def is_high_risk(self) -> bool:
        return self.risk_score >= HIGH_RISK_THRESHOLD

    @property
    def involves_serious_violations(self) -> bool:
        return any(getattr(self, name) for name in SERIOUS_VIOLATIONS)

    @property
    def requires_immediate_attention(self) -> bool:
        return self.is_urgent or self.is_high_risk or self.involves_serious_violations

    @property
    def has_duplicates(self) -> bool:
        return (self.duplicate_count or 0) > 0

    @property
    def violations(self) -> list[str]:
        """Names of the violation flags that are set."""
        return [name for name in VIOLATION_FLAGS if getattr(self, name)]

    def is_overdue(self, now: datetime | None = None) -> bool:
        return (
            self.report_status == ReportStatus.PENDING
            and age_in_days(self.created_at, now or utc_now()) > self.overdue_after_days
        )

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------
    @property
    def status_display(self) -> str:
        return STATUS_LABELS.get(self.report_status, "Unknown")

    @property
    def category_display(self) -> str:
        return CATEGORY_LABELS.get(self.report_category, self.report_category)

    @property
    def severity_display(self) -> str:
        return SEVERITY_LABELS.get(self.report_severity, "Unknown")

    @property
    def priority_display(self) -> str:
        return PRIORITY_LABELS.get(self.report_priority, "Unknown")

    @property
    def risk_level_display(self) -> str:
        for bound, label in RISK_LEVELS:
            if self.risk_score >= bound:
                return label
        return "Minimal Risk"

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------
    def assign(self, moderator_id: int, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.assigned_moderator_id = moderator_id
        self.assigned_at = now
        self.report_status = ReportStatus.ASSIGNED.value
        self.touch(now)

    def start_investigation(self, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.is_under_investigation = True
        self.investigation_started_at = now
        self.report_status = ReportStatus.INVESTIGATING.value
        self.touch(now)

    def resolve(
        self,
        resolver_id: int,
        action: str,
        notes: str | None = None,
        is_valid: bool | None = None,
        now: datetime | None = None,
    ) -> None:
        """Close the report; resolution time runs from investigation start, else from filing."""
        now = now or utc_now()
        self.is_resolved = True
        self.is_under_investigation = False
        self.resolved_by_user_id = resolver_id
        self.resolved_at = now
        self.resolution_action = action
        self.resolution_notes = notes
        self.is_valid = is_valid
        self.report_status = ReportStatus.RESOLVED.value
        self.touch(now)

        started = self.investigation_started_at or self.created_at
        self.resolution_time_hours = hours_between(started, now) if started else 0.0

    def dismiss(self, dismisser_id: int, reason: str, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.resolved_by_user_id = dismisser_id
        self.resolved_at = now
        self.resolution_action = "dismissed"
        self.resolution_notes = reason
        self.is_valid = False
        self.report_status = ReportStatus.DISMISSED.value
        self.touch(now)

    def escalate(self, reason: str, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.escalation_level = (self.escalation_level or 0) + 1
        self.escalation_reason = reason
        self.escalated_at = now
        self.report_priority = min(MAX_LEVEL, (self.report_priority or 0) + 1)
        self.report_status = ReportStatus.ESCALATED.value
        self.touch(now)

    def mark_duplicate(self, original_report_id: int, now: datetime | None = None) -> None:
        now = now or utc_now()
        self.is_duplicate = True
        self.original_report_id = original_report_id
        self.report_status = ReportStatus.DUPLICATE.value
        self.touch(now)

    def set_duplicate_count(self, count: int) -> None:
        """Store how many reports are linked to this one as duplicates."""
        self.duplicate_count = max(0, count)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def validate(self) -> list[str]:
        errors = ValidationErrors()
        errors.required(self.report_category, "Report category is required")
        errors.required(self.report_reason, "Report reason is required")
        errors.positive_id(self.target_id, f"Valid {self.target_label} ID is required")
        errors.positive_id(self.reported_by_user_id, "Valid reporter user ID is required")
        errors.in_range(self.report_severity, 1, 5, "Report severity must be between 1 and 5")
        errors.in_range(self.report_priority, 1, 5, "Report priority must be between 1 and 5")
        errors.max_length(self.report_category, 50, "Report category cannot exceed 50 characters")
        errors.max_length(self.report_reason, 100, "Report reason cannot exceed 100 characters")
        errors.max_length(
            self.report_description, 1000, "Report description cannot exceed 1000 characters"
        )
        errors.max_length(self.report_evidence, 2000, "Report evidence cannot exceed 2000 characters")
        errors.max_length(self.evidence_urls, 500, "Evidence URLs cannot exceed 500 characters")
        errors.max_length(
            self.attachment_paths, 1000, "Attachment paths cannot exceed 1000 characters"
        )
        errors.max_length(self.escalation_reason, 200, "Escalation reason cannot exceed 200 characters")
        return errors.messages

    def prepare_for_save(self, now: datetime | None = None):
        now = now or utc_now()

        for name in TEXT_FIELDS:
            setattr(self, name, strip_or_none(getattr(self, name)))

        self.risk_score = report_risk_score(self)
        # Age counts from filing; a report being created right now is 0 days old
        self.urgency_score = report_urgency_score(self, now)
        self.impact_score = report_impact_score(self)
        self.confidence_score = report_confidence_score(self)
        self.stamp_timestamps(now)

        logger.debug(
            "Prepared %s %s: risk=%d urgency=%d impact=%d confidence=%d",
            type(self).__name__,
            self.id,
            self.risk_score,
            self.urgency_score,
            self.impact_score,
            self.confidence_score,
        )
        return self


class ReviewReport(ReportMixin, Base):
    """Report filed against a review."""

    __tablename__ = "review_reports"

    target_label = "review"
    overdue_after_days = 2

    review_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    @property
    def target_id(self) -> int:
        return self.review_id

    def __repr__(self) -> str:
        return f"<ReviewReport(id={self.id}, review_id={self.review_id}, status={self.report_status!r})>"


class ReplyReport(ReportMixin, Base):
    """Report filed against a reply; these go overdue faster than review reports."""

    __tablename__ = "reply_reports"

    target_label = "reply"
    overdue_after_days = 1

    reply_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    @property
    def target_id(self) -> int:
        return self.reply_id

    def __repr__(self) -> str:
        return f"<ReplyReport(id={self.id}, reply_id={self.reply_id}, status={self.report_status!r})>"
