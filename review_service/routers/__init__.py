"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- reviews.py: /books/{book_id}/reviews, /reviews/{review_id}
- votes.py: /reviews/{review_id}/votes
- replies.py: /reviews/{review_id}/replies, /replies/{reply_id}
- reactions.py: /replies/{reply_id}/reactions
- reports.py: /reviews|replies/{id}/reports, /reports/{kind}/{report_id}/*
- analytics.py: /reviews/{review_id}/analytics

Each router is imported and registered in main.py under /api/{version}.
"""

from review_service.routers.analytics import router as analytics_router
from review_service.routers.reactions import router as reactions_router
from review_service.routers.replies import router as replies_router
from review_service.routers.reports import router as reports_router
from review_service.routers.reviews import router as reviews_router
from review_service.routers.votes import router as votes_router

__all__ = [
    "analytics_router",
    "reactions_router",
    "replies_router",
    "reports_router",
    "reviews_router",
    "votes_router",
]
