"""Request ID middleware for log correlation.

Every request to the completion service gets an X-Request-ID, reused from
the client's header when present, bound into the structlog context and
echoed back on the response.

Usage:
    from chat_assistant.middleware.request_id import init_request_id_middleware
    init_request_id_middleware(app)
"""
from __future__ import annotations

import uuid

import structlog
from flask import Flask, g, request

REQUEST_ID_HEADER = "X-Request-ID"


def init_request_id_middleware(app: Flask) -> None:
    """Register before/after hooks for request ID tracing.

    Args:
        app: Flask application instance.
    """
    logger = structlog.get_logger(__name__)

    @app.before_request
    def bind_request_id() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )
        logger.debug("request_started", origin=request.headers.get("Origin"))

    @app.after_request
    def attach_request_id(response):
        response.headers[REQUEST_ID_HEADER] = g.get("request_id", "unknown")
        logger.debug("request_completed", status=response.status_code)
        return response
