"""Async HTTP client for the completion endpoint.

Sends one ``{input, params}`` request per call and normalizes the outcome:
either the reply text is returned or a TransportError is raised. There is
no retry and, unless a timeout is configured, no deadline; the caller owns
cancellation.

Usage:
    async with CompletionClient("http://localhost:4000/api/completion") as client:
        reply = await client.send("hello", GenerationParams())
"""
from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from chat_assistant.models.params import GenerationParams
from chat_assistant.utils.exceptions import TransportError

logger = structlog.get_logger(__name__)

NO_RESPONSE_PLACEHOLDER = "No response"

# Reply text is read from the first truthy field in this order
REPLY_FIELDS = ("message", "content")


class CompletionClient:
    """Client for POST /api/completion.

    Args:
        endpoint: Full URL of the completion endpoint.
        timeout: Optional deadline in seconds. None waits indefinitely.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def aclose(self) -> None:
        """Close the underlying HTTP client and release connections."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    # ── Public API ────────────────────────────────────────────────────

    async def send(self, input_text: str, params: GenerationParams) -> str:
        """Send one completion request and return the reply text.

        Args:
            input_text: The user's message, exactly as typed.
            params: Generation params to send alongside it.

        Returns:
            The ``message`` field of the response, else ``content``, else
            NO_RESPONSE_PLACEHOLDER.

        Raises:
            TransportError: On network failure, a non-2xx status, or a
                response body that is not JSON.
        """
        payload = {"input": input_text, "params": params.to_payload()}

        logger.info(
            "completion_request",
            endpoint=self._endpoint,
            input_length=len(input_text),
            params=payload["params"],
        )

        start = time.monotonic()
        try:
            response = await self._client.post(self._endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.warning("completion_transport_failed", error=str(e), error_type=type(e).__name__)
            reason = str(e) or type(e).__name__
            raise TransportError(f"send failed: {reason}") from e
        duration_ms = round((time.monotonic() - start) * 1000)

        logger.info(
            "completion_response",
            status=response.status_code,
            duration_ms=duration_ms,
        )

        if not response.is_success:
            logger.warning("completion_http_error", status=response.status_code, body=response.text[:200])
            raise TransportError("send failed", status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("completion_invalid_json", body=response.text[:200])
            raise TransportError("send failed: invalid JSON response", status=response.status_code) from e

        return self._extract_reply(data)

    # ── Response Parsing ──────────────────────────────────────────────

    @staticmethod
    def _extract_reply(data: Any) -> str:
        """Pick the reply text out of a response body.

        Tolerates schema drift: a body without either field, or one that
        is not a JSON object at all, yields the placeholder.
        """
        if isinstance(data, dict):
            for name in REPLY_FIELDS:
                value = data.get(name)
                if value:
                    return value if isinstance(value, str) else str(value)
        logger.debug("completion_reply_missing", body_type=type(data).__name__)
        return NO_RESPONSE_PLACEHOLDER
