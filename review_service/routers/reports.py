"""
Reports Router

Moderation reports against reviews and replies, and the moderation
workflow that moves them through their states.

Endpoints:
- POST /reviews/{review_id}/reports - Report a review
- POST /replies/{reply_id}/reports - Report a reply
- GET /reports/{kind}/{report_id} - Get a report (kind: review | reply)
- POST /reports/{kind}/{report_id}/assign
- POST /reports/{kind}/{report_id}/investigate
- POST /reports/{kind}/{report_id}/resolve
- POST /reports/{kind}/{report_id}/dismiss
- POST /reports/{kind}/{report_id}/escalate
- POST /reports/{kind}/{report_id}/duplicate

Transitions are accepted from any state. Every transition re-prepares the
report, so urgency (which grows with age) is refreshed on each action.
"""

import logging
from enum import StrEnum

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import func, select

from review_service.dependencies import DbSession, Now, ensure_valid, get_or_404
from review_service.models import ReplyReport, ReportMixin, Review, ReviewReply, ReviewReport
from review_service.schemas.report import (
    AssignRequest,
    DismissRequest,
    DuplicateRequest,
    EscalateRequest,
    ReportCreate,
    ReportResponse,
    ResolveRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reports"],
    responses={404: {"description": "Report or reported content not found"}},
)


class ReportKind(StrEnum):
    REVIEW = "review"
    REPLY = "reply"


REPORT_MODELS: dict[ReportKind, type[ReportMixin]] = {
    ReportKind.REVIEW: ReviewReport,
    ReportKind.REPLY: ReplyReport,
}


def get_report_or_404(db: DbSession, kind: ReportKind, report_id: int) -> ReportMixin:
    return get_or_404(db, REPORT_MODELS[kind], report_id, f"{kind.value.title()} report")


def _save_report(db: DbSession, report: ReportMixin, now) -> ReportResponse:
    report.prepare_for_save(now)
    db.commit()
    db.refresh(report)
    return ReportResponse.model_validate(report)


def _log_filed(report: ReportMixin) -> None:
    logger.info(
        "%s %s filed against %s %s (risk=%d urgency=%d)",
        type(report).__name__,
        report.id,
        report.target_label,
        report.target_id,
        report.risk_score,
        report.urgency_score,
    )
    if report.requires_immediate_attention:
        logger.warning(
            "%s %s requires immediate attention: %s",
            type(report).__name__,
            report.id,
            ", ".join(report.violations) or report.risk_level_display,
        )


# =============================================================================
# Filing Reports
# =============================================================================


@router.post(
    "/reviews/{review_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a review",
)
def report_review(
    review_id: int,
    report_data: ReportCreate,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    review = get_or_404(db, Review, review_id, "Review")

    report = ReviewReport(review_id=review_id, **report_data.model_dump())
    ensure_valid(report)
    db.add(report)

    review.record_report()
    review.touch(now)
    review.prepare_for_save(now)

    response = _save_report(db, report, now)
    _log_filed(report)
    return response


@router.post(
    "/replies/{reply_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a reply",
)
def report_reply(
    reply_id: int,
    report_data: ReportCreate,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    reply = get_or_404(db, ReviewReply, reply_id, "Reply")

    report = ReplyReport(reply_id=reply_id, **report_data.model_dump())
    ensure_valid(report)
    db.add(report)

    reply.record_report()
    reply.touch(now)
    reply.prepare_for_save(now)

    response = _save_report(db, report, now)
    _log_filed(report)
    return response


# =============================================================================
# Reading Reports
# =============================================================================


@router.get(
    "/reports/{kind}/{report_id}",
    response_model=ReportResponse,
    summary="Get a report",
)
def get_report(kind: ReportKind, report_id: int, db: DbSession) -> ReportResponse:
    return ReportResponse.model_validate(get_report_or_404(db, kind, report_id))


# =============================================================================
# Moderation Workflow
# =============================================================================


@router.post(
    "/reports/{kind}/{report_id}/assign",
    response_model=ReportResponse,
    summary="Assign a report to a moderator",
)
def assign_report(
    kind: ReportKind,
    report_id: int,
    body: AssignRequest,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    report = get_report_or_404(db, kind, report_id)
    report.assign(body.moderator_id, now)
    logger.info("%s report %s assigned to moderator %s", kind, report_id, body.moderator_id)
    return _save_report(db, report, now)


@router.post(
    "/reports/{kind}/{report_id}/investigate",
    response_model=ReportResponse,
    summary="Start investigating a report",
)
def investigate_report(
    kind: ReportKind,
    report_id: int,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    report = get_report_or_404(db, kind, report_id)
    report.start_investigation(now)
    logger.info("%s report %s under investigation", kind, report_id)
    return _save_report(db, report, now)


@router.post(
    "/reports/{kind}/{report_id}/resolve",
    response_model=ReportResponse,
    summary="Resolve a report",
)
def resolve_report(
    kind: ReportKind,
    report_id: int,
    body: ResolveRequest,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    report = get_report_or_404(db, kind, report_id)
    report.resolve(body.resolver_id, body.action, body.notes, body.is_valid, now)
    logger.info(
        "%s report %s resolved by %s: %s (%.2fh)",
        kind,
        report_id,
        body.resolver_id,
        body.action,
        report.resolution_time_hours,
    )
    return _save_report(db, report, now)


@router.post(
    "/reports/{kind}/{report_id}/dismiss",
    response_model=ReportResponse,
    summary="Dismiss a report",
)
def dismiss_report(
    kind: ReportKind,
    report_id: int,
    body: DismissRequest,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    report = get_report_or_404(db, kind, report_id)
    report.dismiss(body.dismisser_id, body.reason, now)
    logger.info("%s report %s dismissed by %s", kind, report_id, body.dismisser_id)
    return _save_report(db, report, now)


@router.post(
    "/reports/{kind}/{report_id}/escalate",
    response_model=ReportResponse,
    summary="Escalate a report",
    description="Raises the escalation level by one and the priority by one (max 5).",
)
def escalate_report(
    kind: ReportKind,
    report_id: int,
    body: EscalateRequest,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    report = get_report_or_404(db, kind, report_id)
    report.escalate(body.reason, now)
    logger.info(
        "%s report %s escalated to level %d (priority %d)",
        kind,
        report_id,
        report.escalation_level,
        report.report_priority,
    )
    return _save_report(db, report, now)


def _recount_duplicates(db: DbSession, model: type[ReportMixin], original: ReportMixin, now) -> None:
    """Duplicate count is the number of reports currently linked to original."""
    count_stmt = select(func.count()).select_from(model).where(model.original_report_id == original.id)
    original.set_duplicate_count(db.execute(count_stmt).scalar() or 0)
    original.touch(now)
    original.prepare_for_save(now)


@router.post(
    "/reports/{kind}/{report_id}/duplicate",
    response_model=ReportResponse,
    summary="Mark a report as a duplicate",
    description=(
        "Links the report to an earlier report of the same kind. Duplicate counts are "
        "recounted on the new original and on any original the report was linked to before."
    ),
)
def mark_report_duplicate(
    kind: ReportKind,
    report_id: int,
    body: DuplicateRequest,
    db: DbSession,
    now: Now,
) -> ReportResponse:
    report = get_report_or_404(db, kind, report_id)
    if body.original_report_id == report_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A report cannot be a duplicate of itself",
        )
    original = get_report_or_404(db, kind, body.original_report_id)
    model = REPORT_MODELS[kind]
    previous_id = report.original_report_id

    report.mark_duplicate(original.id, now)
    db.flush()

    _recount_duplicates(db, model, original, now)
    if previous_id is not None and previous_id != original.id:
        previous = db.get(model, previous_id)
        if previous is not None:
            _recount_duplicates(db, model, previous, now)

    logger.info("%s report %s marked duplicate of %s", kind, report_id, original.id)
    return _save_report(db, report, now)
