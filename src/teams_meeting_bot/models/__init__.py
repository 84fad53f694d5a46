"""Data models for meetings, transcripts and calls."""

from .call import STATE_NOT_FOUND_OR_ENDED, CallState, HangupResult
from .meeting import (
    JoinResult,
    MeetingRecord,
    TranscriptContent,
    TranscriptRecord,
)

__all__ = [
    "CallState",
    "HangupResult",
    "JoinResult",
    "MeetingRecord",
    "STATE_NOT_FOUND_OR_ENDED",
    "TranscriptContent",
    "TranscriptRecord",
]
