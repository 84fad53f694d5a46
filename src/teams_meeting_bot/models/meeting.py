"""
Meeting data models.

Read-only snapshots of Graph onlineMeeting and callTranscript resources.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MeetingRecord:
    """
    Online meeting as returned by Graph.

    A fresh snapshot is fetched on every operation; nothing is cached.
    """

    id: str
    subject: str | None = None
    thread_id: str | None = None
    join_meeting_id: str | None = None
    passcode: str | None = None
    join_web_url: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MeetingRecord":
        """
        Create MeetingRecord from a Graph onlineMeeting resource.

        Args:
            data: onlineMeeting JSON

        Returns:
            MeetingRecord instance
        """
        chat_info = data.get("chatInfo") or {}
        join_settings = data.get("joinMeetingIdSettings") or {}

        return cls(
            id=data.get("id", ""),
            subject=data.get("subject") or None,
            thread_id=chat_info.get("threadId") or None,
            join_meeting_id=join_settings.get("joinMeetingId") or None,
            passcode=join_settings.get("passcode"),
            join_web_url=data.get("joinWebUrl"),
            raw=data,
        )

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "subject": self.subject, "threadId": self.thread_id}


@dataclass
class TranscriptRecord:
    """Transcript metadata; content is fetched separately."""

    id: str
    created_date_time: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranscriptRecord":
        return cls(
            id=data.get("id", ""),
            created_date_time=data.get("createdDateTime") or "",
        )


@dataclass
class TranscriptContent:
    """Raw WebVTT transcript text plus where it came from."""

    meeting_id: str
    transcript_id: str
    created_date_time: str
    content: str
    content_type: str = "text/vtt; charset=utf-8"


@dataclass
class JoinResult:
    """Outcome of a successful join."""

    organizer_identity: str
    meeting: MeetingRecord
    call: dict[str, Any]

    @property
    def call_id(self) -> str:
        return self.call.get("id", "")

    def to_dict(self) -> dict[str, Any]:
        """
        Convert JoinResult to the API response body.

        Returns:
            Dictionary representation
        """
        return {
            "ok": True,
            "organizerIdentityUsed": self.organizer_identity,
            "meeting": self.meeting.summary(),
            "call": self.call,
        }
