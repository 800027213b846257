"""Global Flask error handlers for consistent JSON error responses.

Every error leaves the completion service as:
    { "success": false, "error": { "message": "...", "code": <int> } }

Usage:
    from chat_assistant.middleware.error_handlers import register_error_handlers
    register_error_handlers(app)
"""
from __future__ import annotations

import structlog
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from chat_assistant.models.responses import ErrorResponse
from chat_assistant.utils.exceptions import ChatAssistantError

logger = structlog.get_logger(__name__)


def _error_response(message: str, code: int):
    """Build the (response, status) pair for an error envelope."""
    body = ErrorResponse(error={"message": message, "code": code})
    return jsonify(body.model_dump()), code


def register_error_handlers(app: Flask) -> None:
    """Register global error handlers on the Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(ChatAssistantError)
    def handle_app_error(e: ChatAssistantError):
        logger.warning(
            "app_error",
            error=e.message,
            error_type=type(e).__name__,
            status_code=e.status_code,
        )
        return _error_response(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        """404, 405 and any other werkzeug HTTP error."""
        return _error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.error(
            "unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return _error_response("An unexpected error occurred", 500)
