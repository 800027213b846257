"""Health check endpoint.

Exposes GET /health so process supervisors and the terminal client can
confirm the stub service is up.

Response format:
    {
        "status": "healthy",
        "version": "1.0.0"
    }
"""
from __future__ import annotations

from flask import Blueprint, jsonify

health_bp = Blueprint("health", __name__)

APP_VERSION = "1.0.0"


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Application health check endpoint."""
    return jsonify({"status": "healthy", "version": APP_VERSION})
