"""Pydantic models for API response serialization."""
from __future__ import annotations

from pydantic import BaseModel, Field


class CompletionResponse(BaseModel):
    """Outgoing completion reply.

    Attributes:
        message: The assistant's reply text.
    """
    message: str = Field(..., description="Assistant reply text")


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: dict = Field(..., description="Error details with 'message' and 'code'")
