"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Stable machine readable code")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


INTERNAL_ERROR = ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
