"""
Transcript retrieval service.

Fetches the latest Teams transcript for a meeting as raw WebVTT.
"""

import logging

from ..errors import NoTranscriptError
from ..graph import GraphApiClient, GraphTokenProvider
from ..models import TranscriptContent, TranscriptRecord
from ..utils import OrganizerIdentityResolver, require_organizer_identity
from .meeting_locator import MeetingLocator

logger = logging.getLogger(__name__)


class TranscriptRetriever:
    """Service for listing and downloading meeting transcripts."""

    def __init__(
        self,
        graph: GraphApiClient,
        token_provider: GraphTokenProvider,
        locator: MeetingLocator,
        resolver: OrganizerIdentityResolver | None = None,
    ) -> None:
        self.graph = graph
        self.token_provider = token_provider
        self.locator = locator
        self.resolver = resolver or OrganizerIdentityResolver()

    @staticmethod
    def select_latest(transcripts: list[TranscriptRecord]) -> TranscriptRecord:
        """
        Pick the most recent transcript.

        ISO-8601 timestamps compare correctly as strings. The sort is
        stable, so among equal timestamps the one listed last wins.
        """
        return sorted(transcripts, key=lambda t: t.created_date_time)[-1]

    def list_transcripts(
        self, organizer_identity: str, meeting_id: str, token: str
    ) -> list[TranscriptRecord]:
        data = self.graph.get_json(
            f"users/{organizer_identity}/onlineMeetings/{meeting_id}/transcripts",
            token,
        )
        return [TranscriptRecord.from_dict(t) for t in data.get("value") or []]

    def fetch_latest_transcript(
        self, join_link: str, organizer_identity: str | None = None
    ) -> TranscriptContent:
        """
        Download the latest transcript for the meeting behind a join link.

        Args:
            join_link: Teams meeting join URL
            organizer_identity: Organizer object id (parsed from the link if omitted)

        Returns:
            TranscriptContent holding the unparsed WebVTT text

        Raises:
            InvalidInputError: If organizer_identity is not a GUID
            InvalidLinkError: If the organizer cannot be read from the link
            NotFoundError: If the meeting cannot be found
            NoTranscriptError: If the meeting has no transcripts yet
            UpstreamError: If Graph fails listing or downloading
        """
        if organizer_identity:
            require_organizer_identity(organizer_identity)
        else:
            organizer_identity = self.resolver.resolve(join_link)

        token = self.token_provider.get_token()
        meeting = self.locator.find(organizer_identity, join_link, token=token)

        transcripts = self.list_transcripts(organizer_identity, meeting.id, token)
        if not transcripts:
            raise NoTranscriptError(meeting.id)

        latest = self.select_latest(transcripts)
        logger.info(
            "Fetching transcript %s (%s) of %d for meeting %s",
            latest.id,
            latest.created_date_time,
            len(transcripts),
            meeting.id,
        )

        content = self.graph.get_text(
            f"users/{organizer_identity}/onlineMeetings/{meeting.id}"
            f"/transcripts/{latest.id}/content",
            token,
            accept="text/vtt",
        )

        return TranscriptContent(
            meeting_id=meeting.id,
            transcript_id=latest.id,
            created_date_time=latest.created_date_time,
            content=content,
        )
