"""Chat Assistant — stub completion service and chat session client.

The `create_app()` factory builds the Flask completion service. The
client side (session store, controller, completion client) lives in
`chat_assistant.services` and `chat_assistant.api_clients` and is driven
by the terminal UI in `chat_assistant.cli`.
"""
from __future__ import annotations

import structlog
from flask import Flask
from flask_cors import CORS

from chat_assistant.config import Settings, get_settings
from chat_assistant.middleware.error_handlers import register_error_handlers
from chat_assistant.middleware.request_id import init_request_id_middleware
from chat_assistant.utils.logger import setup_logging

__version__ = "1.0.0"


def create_app(settings: Settings | None = None) -> Flask:
    """Application factory pattern.

    Creates and configures the completion service with:
    - Pydantic-based configuration loading
    - Structured logging (structlog)
    - Request ID middleware
    - Global error handlers
    - Permissive CORS for browser front ends
    - Blueprint registration (health, completion)

    Args:
        settings: Settings to use instead of the cached environment settings.

    Returns:
        Configured Flask application instance.
    """
    settings = settings or get_settings()

    # ── Logging (must be first so all subsequent logs are formatted) ──
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
    logger = structlog.get_logger(__name__)

    # ── Flask app ─────────────────────────────────────────────────────
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["FLASK_DEBUG"] = settings.FLASK_DEBUG
    app.config["SETTINGS"] = settings

    # ── Middleware ─────────────────────────────────────────────────────
    init_request_id_middleware(app)
    register_error_handlers(app)

    # ── CORS ──────────────────────────────────────────────────────────
    CORS(app, resources={
        r"/api/*": {"origins": _parse_origins(settings.CORS_ORIGINS), "send_wildcard": True},
        r"/health": {"origins": "*", "send_wildcard": True},
    })

    # ── Blueprints ────────────────────────────────────────────────────
    from chat_assistant.routes.completion import completion_bp
    from chat_assistant.routes.health import health_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(completion_bp)

    logger.info(
        "app_started",
        env=settings.FLASK_ENV,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL,
    )

    return app


def _parse_origins(raw: str) -> str | list[str]:
    """Turn a comma separated CORS_ORIGINS value into what flask-cors expects."""
    raw = raw.strip()
    if raw in ("", "*"):
        return "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
