"""Chat controller — drives one session through submit/reply cycles.

State machine:
    IDLE --submit--> PENDING --success|failure--> IDLE

At most one request is in flight. A submission while PENDING, or with
blank input, is ignored. Parameter validation happens before anything is
appended; a rejected submission is reported through ``notify`` and never
enters the history. A transport failure becomes an assistant-role error
message. No exception escapes ``submit``.

Usage:
    controller = ChatController(SessionStore(), client, notify=print)
    outcome = await controller.submit("hello")
"""
from __future__ import annotations

from enum import Enum
from typing import Callable

import structlog

from chat_assistant.api_clients.completion_client import CompletionClient
from chat_assistant.models.messages import Role
from chat_assistant.models.params import GenerationParams, ParamsPatch
from chat_assistant.services import parameter_validator
from chat_assistant.services.session_store import SessionStore
from chat_assistant.utils.exceptions import ParameterValidationError, TransportError

logger = structlog.get_logger(__name__)


class ControllerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class SubmitOutcome(str, Enum):
    """What a call to ``submit`` did."""
    IGNORED = "ignored"      # blank input or a request already in flight
    REJECTED = "rejected"    # params failed validation, nothing sent
    COMPLETED = "completed"  # reply appended
    FAILED = "failed"        # error message appended


def _log_notice(message: str) -> None:
    logger.warning("user_notice", notice=message)


class ChatController:
    """Orchestrates input, validation, the completion call and history.

    Args:
        store: Session state this controller owns.
        client: Client used to send completion requests.
        notify: Out-of-band sink for validation notices (a blocking alert
            in a UI). Defaults to logging a warning.
    """

    def __init__(
        self,
        store: SessionStore,
        client: CompletionClient,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self._store = store
        self._client = client
        self._notify = notify or _log_notice
        self.input_text = ""

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def state(self) -> ControllerState:
        return ControllerState.PENDING if self._store.pending else ControllerState.IDLE

    @property
    def is_pending(self) -> bool:
        return self._store.pending

    # ── Submission ────────────────────────────────────────────────────

    async def submit(self, text: str | None = None) -> SubmitOutcome:
        """Send the current input and record the outcome in the history.

        Args:
            text: Input to send. Defaults to ``input_text``.

        Returns:
            The SubmitOutcome for this call.
        """
        if text is None:
            text = self.input_text

        if not text.strip() or self._store.pending:
            logger.debug("submission_ignored", pending=self._store.pending, blank=not text.strip())
            return SubmitOutcome.IGNORED

        params = self._store.params
        try:
            parameter_validator.validate(params)
        except ParameterValidationError as e:
            logger.info("submission_rejected", field=e.field, error=e.message)
            self._notify(e.message)
            return SubmitOutcome.REJECTED

        self._store.append(self._store.new_message(Role.USER, text))
        self.input_text = ""
        self._store.pending = True

        try:
            reply = await self._client.send(text, params)
        except TransportError as e:
            logger.warning("submission_failed", error=e.message, status=e.status)
            self._store.append(self._store.new_message(Role.ASSISTANT, e.message, error=True))
            return SubmitOutcome.FAILED
        except Exception as e:
            logger.error("submission_unexpected_error", error=str(e), exc_info=True)
            reason = str(e) or type(e).__name__
            self._store.append(self._store.new_message(Role.ASSISTANT, reason, error=True))
            return SubmitOutcome.FAILED
        finally:
            self._store.pending = False

        self._store.append(self._store.new_message(Role.ASSISTANT, reply))
        logger.info("submission_completed", reply_length=len(reply))
        return SubmitOutcome.COMPLETED

    # ── Session actions ───────────────────────────────────────────────

    def clear(self) -> None:
        """Empty the history. Params are kept."""
        self._store.clear()

    def update_params(self, patch: ParamsPatch) -> GenerationParams:
        return self._store.update_params(patch)

    def update_param(self, name: str, value: str) -> GenerationParams:
        """Apply a raw form value to one parameter.

        Raises:
            ParameterValidationError: If the name is unknown or the value
                cannot be parsed.
        """
        return self._store.update_params(ParamsPatch.from_form(name, value))
