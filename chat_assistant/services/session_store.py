"""In-memory session state: ordered message history plus generation params.

Usage:
    store = SessionStore()
    store.append(store.new_message(Role.USER, "hello"))
    store.update_params(ParamsPatch(top_k=10))   # clears top_p
    store.clear()                                # params untouched
"""
from __future__ import annotations

import time
from datetime import datetime, timezone

import structlog

from chat_assistant.models.messages import Message, Role, format_error
from chat_assistant.models.params import GenerationParams, ParamsPatch

logger = structlog.get_logger(__name__)

# Mutually exclusive sampling controls: defining one clears the other
EXCLUSIVE_PARAMS = {"top_p": "top_k", "top_k": "top_p"}


class SessionStore:
    """Process-local state for one chat session.

    History is append-only and kept in creation order. Nothing is
    persisted; the store lives exactly as long as the UI that owns it.

    Args:
        params: Initial generation params (defaults to GenerationParams()).
    """

    def __init__(self, params: GenerationParams | None = None) -> None:
        self._messages: list[Message] = []
        self._params = params or GenerationParams()
        self._last_id_ms = 0
        self.pending = False

    # ── History ───────────────────────────────────────────────────────

    def append(self, message: Message) -> None:
        self._messages.append(message)
        logger.debug("message_appended", message_id=message.id, role=message.role.value)

    def get_all(self) -> tuple[Message, ...]:
        """Return the history as an immutable snapshot."""
        return tuple(self._messages)

    def clear(self) -> None:
        """Drop every message. Generation params are kept."""
        count = len(self._messages)
        self._messages = []
        logger.info("session_cleared", messages_removed=count)

    def __len__(self) -> int:
        return len(self._messages)

    def new_message(self, role: Role, content: str, error: bool = False) -> Message:
        """Create a message stamped with a session-unique id.

        Ids are the creation time in milliseconds with a role suffix
        (none for user, ``-bot`` for replies, ``-error`` for failures).
        Two messages in the same millisecond get consecutive values, so
        ids never repeat and sort in creation order.
        """
        now_ms = time.time_ns() // 1_000_000
        id_ms = max(now_ms, self._last_id_ms + 1)
        self._last_id_ms = id_ms

        if role is Role.USER:
            suffix = ""
        else:
            suffix = "-error" if error else "-bot"

        return Message(
            id=f"{id_ms}{suffix}",
            content=format_error(content) if error else content,
            role=role,
            timestamp=datetime.fromtimestamp(id_ms / 1000, tz=timezone.utc),
        )

    # ── Params ────────────────────────────────────────────────────────

    @property
    def params(self) -> GenerationParams:
        return self._params

    def update_params(self, patch: ParamsPatch) -> GenerationParams:
        """Apply a partial update, keeping top_p and top_k exclusive.

        Setting either one to a defined value clears the other in the
        same update. If a patch defines both, the later one in parameter
        order (top_k) wins.

        Returns:
            The new params.
        """
        changes = patch.changes()
        if not changes:
            return self._params

        update: dict = {}
        for name, value in changes.items():
            update[name] = value
            other = EXCLUSIVE_PARAMS.get(name)
            if other is not None and value is not None:
                update[other] = None

        self._params = self._params.model_copy(update=update)
        logger.info("params_updated", **self._params.to_payload())
        return self._params
