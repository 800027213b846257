"""Pydantic models for API request validation."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CompletionRequest(BaseModel):
    """Incoming completion request.

    The service is a stub and accepts any params object as-is; the client
    is responsible for sending valid generation params.

    Attributes:
        input: The user's message text.
        params: Generation params forwarded by the client.
    """
    input: str = Field(..., description="User message")
    params: dict[str, Any] = Field(default_factory=dict, description="Generation params")
