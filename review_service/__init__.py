"""
Review Engagement Service Package

Scores reviews, replies, reactions and moderation reports for a book
catalogue, and exposes them through a small FastAPI application.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session and declarative Base
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection (session, clock, pagination)
- models/: Aggregates with validate() and prepare_for_save()
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Scoring tables, sentiment mapping, content metrics, validation
"""

__version__ = "0.1.0"
