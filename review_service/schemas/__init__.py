"""
Pydantic Schemas Package

Request/response models for the HTTP API.

Schema Naming Convention:
- XxxCreate: Fields accepted when creating a record
- XxxUpdate: Fields allowed when updating (all optional)
- XxxResponse: Fields returned in API responses
- XxxListResponse: Paginated list envelope

Response schemas read derived properties (status, total_votes, display
labels) straight off the ORM objects via from_attributes.
"""

from review_service.schemas.analytics import (
    AnalyticsListResponse,
    AnalyticsResponse,
    AnalyticsUpsert,
)
from review_service.schemas.common import PaginatedResponse, ValidationErrorResponse
from review_service.schemas.reply import (
    ReactionCreate,
    ReactionListResponse,
    ReactionResponse,
    ReplyCreate,
    ReplyListResponse,
    ReplyResponse,
    ReplyUpdate,
)
from review_service.schemas.report import (
    AssignRequest,
    DismissRequest,
    DuplicateRequest,
    EscalateRequest,
    ReportCreate,
    ReportResponse,
    ResolveRequest,
)
from review_service.schemas.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
    VoteCreate,
    VoteResponse,
)

__all__ = [
    "AnalyticsListResponse",
    "AnalyticsResponse",
    "AnalyticsUpsert",
    "PaginatedResponse",
    "ValidationErrorResponse",
    "ReactionCreate",
    "ReactionListResponse",
    "ReactionResponse",
    "ReplyCreate",
    "ReplyListResponse",
    "ReplyResponse",
    "ReplyUpdate",
    "AssignRequest",
    "DismissRequest",
    "DuplicateRequest",
    "EscalateRequest",
    "ReportCreate",
    "ReportResponse",
    "ResolveRequest",
    "ReviewCreate",
    "ReviewListResponse",
    "ReviewResponse",
    "ReviewUpdate",
    "VoteCreate",
    "VoteResponse",
]
