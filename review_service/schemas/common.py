"""
Shared Schemas

Pagination envelope reused by every list endpoint.
"""

from pydantic import BaseModel, Field


class PaginatedResponse(BaseModel):
    """
    Pagination metadata for list responses.

    Subclasses add an `items` field with the concrete item schema.
    """

    total: int = Field(..., ge=0, description="Total number of items")
    page: int = Field(..., ge=1, description="Current page number")
    per_page: int = Field(..., ge=1, description="Number of items per page")
    pages: int = Field(..., ge=0, description="Total number of pages")


class ValidationErrorResponse(BaseModel):
    """Body returned with 422 when a domain validate() check fails."""

    errors: list[str] = Field(..., description="Every violated constraint")
