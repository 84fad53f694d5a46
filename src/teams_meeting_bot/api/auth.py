"""
Authentication for the meeting bot API.

Protected routes require the shared secret configured as API_KEY in the
X-API-Key header. A server without API_KEY refuses every protected
request instead of silently running open.
"""

import functools
import hmac
import logging

from flask import current_app, request

from ..errors import ServerMisconfiguredError, UnauthorizedError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


def verify_api_key(provided: str | None, expected: str) -> bool:
    """Constant-time comparison of the provided key with the configured one."""
    if not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_api_key(f):
    """
    Decorator to require the shared API key on a route.

    Usage:
        @bp.route('/join', methods=['POST'])
        @require_api_key
        def join_meeting():
            ...
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        config = current_app.extensions["teams_meeting_bot"].config

        if not config.api_key:
            logger.error("API_KEY not set - rejecting %s %s", request.method, request.path)
            raise ServerMisconfiguredError("API_KEY not configured on server")

        if not verify_api_key(request.headers.get(API_KEY_HEADER), config.api_key):
            raise UnauthorizedError("Unauthorized")

        return f(*args, **kwargs)

    return decorated
