"""
Flask routes for the meeting bot.

Provides:
- /health - Liveness check (no auth)
- /api/messages - Bot Framework messaging endpoint (no auth, acknowledged)
- /api/calling - Graph calling webhook (no auth, logged)
- /join - Join the bot into a meeting
- /call/<call_id> - Current call state
- /call/<call_id>/hangup - Leave the meeting
- /transcripts - Latest meeting transcript as WebVTT
- /debug/env - Configuration summary without secrets
"""

import logging
from datetime import UTC, datetime

from flask import Blueprint, Response, current_app, jsonify, request

from ..errors import InvalidInputError
from .auth import require_api_key

logger = logging.getLogger(__name__)

meeting_bot_bp = Blueprint("meeting_bot", __name__)

# Rate limited per app in create_app()
JOIN_ENDPOINT = "meeting_bot.join_meeting"


def _services():
    return current_app.extensions["teams_meeting_bot"]


def join_rate_limit() -> str:
    """Per-client limit for POST /join, read per request from the app's config."""
    return _services().config.join_rate_limit


def _join_link_from(source) -> str:
    """Accept joinLink, falling back to the older joinWebUrl name."""
    return source.get("joinLink") or source.get("joinWebUrl") or ""


# ---------------------------------------------------------------------------
# Unprotected endpoints
# ---------------------------------------------------------------------------


@meeting_bot_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint (no auth required for load balancer)."""
    return jsonify({
        "ok": True,
        "status": "ok",
        "build": _services().config.build_tag,
        "timestamp": datetime.now(UTC).isoformat(),
    })


@meeting_bot_bp.route("/api/messages", methods=["POST"])
def bot_messages():
    """Bot Framework messaging endpoint. Acknowledged, nothing else."""
    return "", 200


@meeting_bot_bp.route("/api/calling", methods=["POST"])
def calling_webhook():
    """
    Handle Graph call notifications.

    Always acknowledged with 202 so Graph does not retry.
    """
    data = request.get_json(silent=True)
    result = _services().call_events.handle_notification(data)
    return jsonify(result), 202


# ---------------------------------------------------------------------------
# Protected endpoints
# ---------------------------------------------------------------------------


@meeting_bot_bp.route("/join", methods=["POST"])
@require_api_key
def join_meeting():
    """
    Join the bot into a Teams meeting.

    Body: {"joinLink": "<Teams join URL>", "organizerIdentity": "<optional Oid>"}
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object.")

    join_link = _join_link_from(data)
    if not join_link:
        raise InvalidInputError("Missing joinLink (Teams meeting join link).")

    organizer_identity = data.get("organizerIdentity")
    if organizer_identity is not None and not isinstance(organizer_identity, str):
        raise InvalidInputError("organizerIdentity must be a string.")

    result = _services().joiner.join(join_link, organizer_identity=organizer_identity)
    return jsonify(result.to_dict()), 200


@meeting_bot_bp.route("/call/<call_id>", methods=["GET"])
@require_api_key
def get_call_state(call_id: str):
    """Check call state. Ended calls answer 404 with state not_found_or_ended."""
    state = _services().lifecycle.get_state(call_id)
    return jsonify(state.to_dict()), 404 if state.is_gone else 200


@meeting_bot_bp.route("/call/<call_id>/hangup", methods=["POST"])
@require_api_key
def hangup_call(call_id: str):
    """Hang up a call and clear its duplicate-join guard."""
    result = _services().lifecycle.hangup(call_id)
    logger.info("Hung up call %s (already ended: %s)", call_id, result.already_ended)
    return jsonify(result.to_dict()), 200


@meeting_bot_bp.route("/transcripts", methods=["GET"])
@require_api_key
def get_transcript():
    """Fetch the latest transcript for a meeting as WebVTT."""
    join_link = _join_link_from(request.args)
    if not join_link:
        raise InvalidInputError("Missing joinLink query param")

    transcript = _services().transcripts.fetch_latest_transcript(
        join_link,
        organizer_identity=request.args.get("organizerIdentity"),
    )

    return Response(
        transcript.content,
        status=200,
        content_type=transcript.content_type,
        headers={
            "X-Meeting-Id": transcript.meeting_id,
            "X-Transcript-Id": transcript.transcript_id,
        },
    )


@meeting_bot_bp.route("/debug/env", methods=["GET"])
@require_api_key
def debug_env():
    """Configuration summary (no secrets) and number of guarded calls."""
    services = _services()
    return jsonify({
        **services.config.to_dict(),
        "activeCalls": len(services.guard),
    })
