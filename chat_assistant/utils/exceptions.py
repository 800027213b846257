"""Custom exception hierarchy for the chat assistant.

All application-specific exceptions inherit from ChatAssistantError,
enabling uniform error handling in the controller and the service's
global error handlers.

Hierarchy:
    ChatAssistantError (base)
    ├── ParameterValidationError   — Generation params rejected before sending
    │   ├── ParameterRangeError    — Value outside its allowed range
    │   ├── ParameterFormatError   — Form value could not be parsed
    │   └── UnknownParameterError  — No such parameter
    └── TransportError             — Completion request failed
"""
from __future__ import annotations


class ChatAssistantError(Exception):
    """Base exception for the chat assistant."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


# ── Parameter Errors ──────────────────────────────────────────────────

class ParameterValidationError(ChatAssistantError):
    """Raised when generation parameters fail validation."""

    def __init__(self, message: str, field: str) -> None:
        self.field = field
        super().__init__(message, status_code=422)


class ParameterRangeError(ParameterValidationError):
    """Raised when a defined parameter falls outside its inclusive range."""

    def __init__(self, field: str, low: float, high: float, value: float) -> None:
        self.low = low
        self.high = high
        self.value = value
        super().__init__(
            message=f"{field} must be between {low:g} and {high:g} (got {value:g}).",
            field=field,
        )


class ParameterFormatError(ParameterValidationError):
    """Raised when a raw form value cannot be parsed for a parameter."""

    def __init__(self, field: str, raw: str) -> None:
        self.raw = raw
        super().__init__(message=f"Invalid value for {field}: {raw!r}", field=field)


class UnknownParameterError(ParameterValidationError):
    """Raised when a patch names a parameter that does not exist."""

    def __init__(self, field: str) -> None:
        super().__init__(message=f"Unknown parameter: {field!r}", field=field)


# ── Transport Errors ─────────────────────────────────────────────────

class TransportError(ChatAssistantError):
    """Raised when a completion request cannot be completed.

    Covers network failures, non-success HTTP statuses and unreadable
    response bodies. Never retried.
    """

    def __init__(self, message: str = "send failed", status: int | None = None) -> None:
        self.status = status
        super().__init__(message, status_code=502)
