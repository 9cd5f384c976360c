"""
Report Pydantic Schemas

Schemas:
- ReportCreate: File a report against a review or a reply
- ReportResponse: Report with workflow state, scores and labels
- AssignRequest / ResolveRequest / DismissRequest / EscalateRequest /
  DuplicateRequest: Bodies for the moderation transitions
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReportCreate(BaseModel):
    """
    Schema for filing a report.

    Example request body:
    {
        "reported_by_user_id": 3,
        "report_category": "harassment",
        "report_reason": "Personal attack on another reader",
        "report_severity": 4,
        "involves_cyberbullying": true
    }
    """

    reported_by_user_id: int
    report_category: str = Field(..., examples=["spam", "harassment", "hate_speech"])
    report_reason: str
    report_description: str | None = None
    report_severity: int = Field(default=3, description="1 very low - 5 critical")
    report_priority: int = Field(default=3, description="1 very low - 5 critical")
    report_evidence: str | None = None
    evidence_urls: str | None = None
    attachment_paths: str | None = None
    is_anonymous: bool = False

    # Violation flags
    is_part_of_harassment_pattern: bool = False
    involves_cyberbullying: bool = False
    involves_hate_speech: bool = False
    involves_doxxing: bool = False
    involves_impersonation: bool = False
    involves_copyright: bool = False
    involves_misinformation: bool = False
    involves_self_harm: bool = False
    involves_violence: bool = False
    involves_adult_content: bool = False
    involves_illegal_activity: bool = False
    involves_financial_scam: bool = False
    involves_malware: bool = False
    involves_fake_accounts: bool = False
    involves_coordinated_behavior: bool = False

    # Content analysis from upstream classifiers
    ml_prediction_score: float = Field(default=0.0, ge=0, le=1)
    content_sentiment_score: float = Field(default=0.0, ge=-1, le=1)
    content_toxicity_score: float = Field(default=0.0, ge=0, le=1)
    content_spam_score: float = Field(default=0.0, ge=0, le=1)
    language_detection_confidence: float = Field(default=0.0, ge=0, le=1)


class ReportResponse(BaseModel):
    id: int
    target_id: int
    reported_by_user_id: int

    report_category: str
    category_display: str
    report_reason: str
    report_description: str | None = None
    report_severity: int
    severity_display: str
    report_priority: int
    priority_display: str
    report_status: str
    status_display: str

    violations: list[str]
    is_anonymous: bool
    is_duplicate: bool
    original_report_id: int | None = None
    duplicate_count: int

    risk_score: int = Field(..., ge=0, le=100)
    urgency_score: int = Field(..., ge=0, le=100)
    impact_score: int = Field(..., ge=0, le=100)
    confidence_score: int = Field(..., ge=0, le=100)
    risk_level_display: str
    is_urgent: bool
    is_high_risk: bool
    requires_immediate_attention: bool

    assigned_moderator_id: int | None = None
    resolved_by_user_id: int | None = None
    is_under_investigation: bool
    is_resolved: bool
    is_valid: bool | None = None
    resolution_action: str | None = None
    resolution_notes: str | None = None
    resolution_time_hours: float | None = None
    escalation_level: int
    escalation_reason: str | None = None

    created_at: datetime
    updated_at: datetime | None = None
    assigned_at: datetime | None = None
    investigation_started_at: datetime | None = None
    resolved_at: datetime | None = None
    escalated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Transition Bodies
# =============================================================================


class AssignRequest(BaseModel):
    moderator_id: int = Field(..., gt=0)


class ResolveRequest(BaseModel):
    resolver_id: int = Field(..., gt=0)
    action: str = Field(..., min_length=1, max_length=100, examples=["content_removed"])
    notes: str | None = Field(default=None, max_length=1000)
    is_valid: bool | None = None


class DismissRequest(BaseModel):
    dismisser_id: int = Field(..., gt=0)
    reason: str = Field(..., min_length=1, max_length=1000)


class EscalateRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=200)


class DuplicateRequest(BaseModel):
    original_report_id: int = Field(..., gt=0)
