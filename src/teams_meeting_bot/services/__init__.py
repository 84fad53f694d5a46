"""
Meeting bot services.

Business logic for joining meetings, managing calls and fetching
transcripts, independent of the Flask layer.
"""

from .call_event_service import CallEventService
from .call_join import CallJoinOrchestrator
from .call_lifecycle import CallLifecycleController
from .join_guard import JoinGuard
from .meeting_locator import MeetingLocator
from .transcript_service import TranscriptRetriever

__all__ = [
    "CallEventService",
    "CallJoinOrchestrator",
    "CallLifecycleController",
    "JoinGuard",
    "MeetingLocator",
    "TranscriptRetriever",
]
