"""Completion blueprint — the stub completion endpoint.

Routes:
    POST /api/completion → Acknowledge a message with a canned reply

No inference happens here. The reply echoes the received params so a
client can confirm the round trip works end to end.
"""
from __future__ import annotations

import json

import structlog
from flask import Blueprint, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from chat_assistant.models.requests import CompletionRequest
from chat_assistant.models.responses import CompletionResponse

logger = structlog.get_logger(__name__)

completion_bp = Blueprint("completion", __name__, url_prefix="/api")

CANNED_REPLY_PREFIX = "This is a simulated server response. Received parameters: "


def build_canned_reply(params: dict) -> str:
    """Render the acknowledgment text for a request's params."""
    return CANNED_REPLY_PREFIX + json.dumps(params, indent=2)


@completion_bp.route("/completion", methods=["POST"])
def completion():
    """Return a simulated assistant reply.

    Request JSON:
        {
            "input": "hello",
            "params": {"temperature": 1.0, "reasoning_effort": "low"}
        }

    Response JSON:
        {
            "message": "This is a simulated server response. ..."
        }
    """
    # A literal JSON null parses fine and is rejected by the model below
    try:
        data = request.get_json(force=True)
    except BadRequest:
        return jsonify({
            "success": False,
            "error": {"message": "Invalid JSON body", "code": 400},
        }), 400

    logger.debug("completion_raw_body", body=data)

    try:
        req = CompletionRequest.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        message = errors[0].get("msg", "Validation error") if errors else "Invalid request"
        return jsonify({
            "success": False,
            "error": {"message": message, "code": 422},
        }), 422

    logger.info("completion_received", input=req.input, params=req.params)

    reply = CompletionResponse(message=build_canned_reply(req.params))
    return jsonify(reply.model_dump())
