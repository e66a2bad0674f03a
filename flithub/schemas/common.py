"""
Common Pydantic schemas shared across the application.

Provides:
- Error response schema used by every exception handler
- Health check schema
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    detail: str = Field(description="Error message")

    model_config = ConfigDict(json_schema_extra={"example": {"detail": "Admin access required"}})


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Health status")
    app: str = Field(description="Application name")
    version: str | None = Field(default=None, description="Application version")
