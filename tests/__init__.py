"""
Test Suite for the Review Engagement Service

Test Organization:
- conftest.py: Shared fixtures (test database, client, frozen clock, sample data)
- test_ladder.py, test_scoring.py, test_report_scoring.py,
  test_analytics_scoring.py, test_sentiment.py, test_content_metrics.py:
  pure scoring services
- test_*_model.py, test_report_workflow.py, test_validation.py:
  aggregate lifecycles
- test_reviews.py, test_votes.py, test_replies.py, test_reactions.py,
  test_reports.py, test_analytics.py, test_main.py: HTTP endpoints

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=review_service --cov-report=html

    # Run specific file
    pytest tests/test_reports.py

    # Run with verbose output
    pytest -v
"""
