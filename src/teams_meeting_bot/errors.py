"""
Error types for the meeting bot.

Every failure raised by the services carries an ErrorKind discriminator,
an HTTP status for the API layer, and a diagnostic payload (attempted
query, upstream response) so operators can debug without log access.
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Error taxonomy."""

    INVALID_INPUT = "invalid_input"
    INVALID_LINK = "invalid_link"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM = "upstream"
    UNAUTHORIZED = "unauthorized"


class MeetingBotError(Exception):
    """Base class for all meeting bot errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM
    http_status: int = 500

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Structured error body for API responses."""
        return {
            "ok": False,
            "error": self.message,
            "kind": self.kind.value,
            **self.details,
        }


class InvalidInputError(MeetingBotError):
    """Missing or malformed request fields or identifiers."""

    kind = ErrorKind.INVALID_INPUT
    http_status = 400


class MissingThreadIdError(InvalidInputError):
    """Meeting found, but it has no chat thread to join or guard on."""

    def __init__(self, meeting_id: str | None) -> None:
        super().__init__(
            "Online meeting found, but chatInfo.threadId is missing.",
            meetingId=meeting_id,
        )
        self.meeting_id = meeting_id


class InvalidLinkError(MeetingBotError):
    """Join link cannot be parsed or carries no organizer context."""

    kind = ErrorKind.INVALID_LINK
    http_status = 400


class NotFoundError(MeetingBotError):
    kind = ErrorKind.NOT_FOUND
    http_status = 404


class NoTranscriptError(NotFoundError):
    def __init__(self, meeting_id: str) -> None:
        super().__init__(
            "No transcripts found yet. Transcription may not be started "
            "or still processing.",
            meetingId=meeting_id,
        )
        self.meeting_id = meeting_id


class DuplicateJoinError(MeetingBotError):
    """The bot already has an active call for this meeting thread."""

    kind = ErrorKind.CONFLICT
    http_status = 409

    def __init__(self, existing_call_id: str, thread_id: str) -> None:
        super().__init__(
            "Bot already joined this meeting",
            callId=existing_call_id,
            threadId=thread_id,
        )
        self.existing_call_id = existing_call_id
        self.thread_id = thread_id


class UpstreamError(MeetingBotError):
    """
    Failure reported by Microsoft Graph or the token endpoint.

    Attributes:
        status_code: Upstream HTTP status (None for transport errors)
        payload: Upstream error body (parsed JSON when possible)
    """

    kind = ErrorKind.UPSTREAM
    http_status = 502

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: Any = None,
        **details: Any,
    ) -> None:
        super().__init__(
            message, upstreamStatus=status_code, upstreamError=payload, **details
        )
        self.status_code = status_code
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class UnauthorizedError(MeetingBotError):
    kind = ErrorKind.UNAUTHORIZED
    http_status = 401


class ServerMisconfiguredError(UnauthorizedError):
    """The server itself lacks a required secret (API key or Graph credentials)."""

    http_status = 500
