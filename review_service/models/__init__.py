"""
SQLAlchemy Models Package

One model per aggregate of the review engagement service.

Aggregates:
- Review: a user's review of a book, with vote/reply/report counters
- ReviewVote: helpful / unhelpful vote on a review
- ReviewReply: threaded reply to a review
- ReplyReaction: emoji reaction to a reply
- ReviewReport / ReplyReport: moderation reports (shared ReportMixin)
- ReviewAnalytics: daily traffic snapshot for a review

Foreign keys are plain integer columns. Related rows are counted into
counter columns on the parent, so scoring never needs to load them.

Import all models here so that create_tables() registers every table on
Base.metadata.
"""

from review_service.models.analytics import ReviewAnalytics
from review_service.models.reaction import ReplyReaction
from review_service.models.reply import ReviewReply
from review_service.models.report import ReplyReport, ReportMixin, ReportStatus, ReviewReport
from review_service.models.review import Review
from review_service.models.vote import ReviewVote

__all__ = [
    "Review",
    "ReviewVote",
    "ReviewReply",
    "ReplyReaction",
    "ReportMixin",
    "ReportStatus",
    "ReviewReport",
    "ReplyReport",
    "ReviewAnalytics",
]
