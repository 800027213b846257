"""Chat history data structures.

A Message is one turn in a session. Errors are not a separate role: they
are assistant messages whose content starts with ERROR_MARKER.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

ERROR_MARKER = "❌ Error: "


class Role(str, Enum):
    """Author of a message."""
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Immutable chat turn.

    Attributes:
        id: Creation-time token plus role suffix, unique within a session.
        content: User text, assistant reply, or formatted error string.
        role: Who authored the message.
        timestamp: When the message was created (UTC).
    """
    id: str
    content: str
    role: Role
    timestamp: datetime

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER

    @property
    def is_error(self) -> bool:
        return self.role is Role.ASSISTANT and self.content.startswith(ERROR_MARKER)


def format_error(reason: str) -> str:
    """Render a failure reason as assistant message content."""
    return f"{ERROR_MARKER}{reason}"
