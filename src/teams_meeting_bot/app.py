"""
Flask application factory for the meeting bot.

Wires configuration, the Graph client and the services together and
registers the HTTP routes. Each app owns its own JoinGuard and rate limiter.
"""

import logging
from dataclasses import dataclass
from typing import Any

from flask import Flask, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .api.routes import JOIN_ENDPOINT, join_rate_limit, meeting_bot_bp
from .config import MeetingBotConfig, get_meeting_bot_config
from .errors import MeetingBotError
from .graph import GraphApiClient, GraphTokenProvider
from .services import (
    CallEventService,
    CallJoinOrchestrator,
    CallLifecycleController,
    JoinGuard,
    MeetingLocator,
    TranscriptRetriever,
)

logger = logging.getLogger(__name__)


@dataclass
class MeetingBotServices:
    """Everything the routes need, stored in app.extensions."""

    config: MeetingBotConfig
    guard: JoinGuard
    joiner: CallJoinOrchestrator
    lifecycle: CallLifecycleController
    transcripts: TranscriptRetriever
    call_events: CallEventService


def build_services(
    config: MeetingBotConfig,
    join_guard: JoinGuard | None = None,
    token_provider: GraphTokenProvider | None = None,
    graph_client: GraphApiClient | None = None,
) -> MeetingBotServices:
    """Create the service graph, sharing one guard and one locator."""
    guard = join_guard if join_guard is not None else JoinGuard()
    tokens = token_provider or GraphTokenProvider(config)
    graph = graph_client or GraphApiClient(config)
    locator = MeetingLocator(graph, tokens)

    return MeetingBotServices(
        config=config,
        guard=guard,
        joiner=CallJoinOrchestrator(config, graph, tokens, locator, guard),
        lifecycle=CallLifecycleController(graph, tokens, guard),
        transcripts=TranscriptRetriever(graph, tokens, locator),
        call_events=CallEventService(guard, release_on_call_end=config.release_guard_on_call_end),
    )


def handle_meeting_bot_error(error: MeetingBotError):
    """Turn any service error into a structured JSON response."""
    if error.http_status >= 500:
        logger.error("%s: %s", type(error).__name__, error.to_dict())
    return jsonify(error.to_dict()), error.http_status


def create_app(
    config: MeetingBotConfig | None = None,
    *,
    join_guard: JoinGuard | None = None,
    token_provider: GraphTokenProvider | None = None,
    graph_client: GraphApiClient | None = None,
    flask_config: dict[str, Any] | None = None,
) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Meeting bot configuration (defaults to the env singleton)
        join_guard: Duplicate-join registry (a new one if omitted)
        token_provider: Graph token source (client secret credential if omitted)
        graph_client: Graph REST client
        flask_config: Extra Flask config (e.g. TESTING, RATELIMIT_ENABLED)

    Returns:
        Configured Flask app
    """
    config = config or get_meeting_bot_config()

    app = Flask(__name__)
    if flask_config:
        app.config.update(flask_config)

    missing = config.missing_credentials()
    if missing:
        logger.warning(
            "Missing env vars: %s. /join & /transcripts will fail until set.",
            ", ".join(missing),
        )
    if not config.api_key:
        logger.warning("API_KEY not set - protected endpoints will answer 500")
    if config.rate_limit_storage_uri == "memory://":
        logger.info("Rate limiting uses in-memory storage (not shared across instances)")

    app.extensions["teams_meeting_bot"] = build_services(
        config,
        join_guard=join_guard,
        token_provider=token_provider,
        graph_client=graph_client,
    )

    # One limiter per app so apps never share counters.
    # memory:// is per-process only; use redis://[host]:[port] across instances.
    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        storage_uri=config.rate_limit_storage_uri,
        strategy="fixed-window",
    )
    app.register_blueprint(meeting_bot_bp)
    app.view_functions[JOIN_ENDPOINT] = limiter.limit(join_rate_limit)(
        app.view_functions[JOIN_ENDPOINT]
    )
    app.register_error_handler(MeetingBotError, handle_meeting_bot_error)

    return app
