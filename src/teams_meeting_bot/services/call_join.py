"""
Meeting join orchestration.

Handles the join flow for the bot:
- Resolving the organizer from the join link
- Locating the online meeting
- Rejecting a second join into a meeting the bot is already in
- Building the Graph call payload and creating the call
"""

import logging
from typing import Any

from ..config import MeetingBotConfig
from ..errors import DuplicateJoinError, InvalidInputError, MissingThreadIdError, UpstreamError
from ..graph import GraphApiClient, GraphTokenProvider
from ..models import JoinResult, MeetingRecord
from ..utils import OrganizerIdentityResolver, require_organizer_identity
from .join_guard import JoinGuard
from .meeting_locator import MeetingLocator

logger = logging.getLogger(__name__)

CREATE_CALL_PATH = "communications/calls"


class CallJoinOrchestrator:
    """Joins the bot into scheduled Teams meetings."""

    def __init__(
        self,
        config: MeetingBotConfig,
        graph: GraphApiClient,
        token_provider: GraphTokenProvider,
        locator: MeetingLocator,
        guard: JoinGuard,
        resolver: OrganizerIdentityResolver | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Tenant id and calling callback URI
            graph: Graph REST client
            token_provider: Source of bearer tokens
            locator: Meeting lookup shared with transcript retrieval
            guard: Duplicate-join registry
            resolver: Join link parser
        """
        self.config = config
        self.graph = graph
        self.token_provider = token_provider
        self.locator = locator
        self.guard = guard
        self.resolver = resolver or OrganizerIdentityResolver()

    def join(self, join_link: str, organizer_identity: str | None = None) -> JoinResult:
        """
        Join the bot into the meeting behind a join link.

        Args:
            join_link: Teams meeting join URL
            organizer_identity: Organizer object id (parsed from the link if omitted)

        Returns:
            JoinResult with the organizer used, meeting summary and created call

        Raises:
            InvalidInputError: If join_link is missing or organizer_identity
                is not a GUID
            InvalidLinkError: If the organizer cannot be read from the link
            NotFoundError: If no meeting matches
            MissingThreadIdError: If the meeting has no chat thread id
            DuplicateJoinError: If the bot already has a call in this meeting
            UpstreamError: If Graph rejects the call
        """
        if not join_link:
            raise InvalidInputError("Missing joinLink (Teams meeting join link).")

        if organizer_identity:
            require_organizer_identity(organizer_identity)
        else:
            organizer_identity = self.resolver.resolve(join_link)

        token = self.token_provider.get_token()
        meeting = self.locator.find(organizer_identity, join_link, token=token)

        thread_id = meeting.thread_id
        if not thread_id:
            raise MissingThreadIdError(meeting.id)

        # Must happen before the call is created
        existing_call_id = self.guard.check(thread_id)
        if existing_call_id:
            logger.info(
                "Rejecting duplicate join for thread %s (active call %s)",
                thread_id,
                existing_call_id,
            )
            raise DuplicateJoinError(existing_call_id, thread_id)

        payload = self.build_payload(meeting, organizer_identity)
        call = self.graph.post_json(CREATE_CALL_PATH, token, payload)

        call_id = call.get("id")
        if not call_id:
            raise UpstreamError(
                "Graph created a call without an id", payload=call, meetingId=meeting.id
            )

        self.guard.register(thread_id, call_id)
        logger.info(
            "Joined meeting %s (thread %s) as call %s", meeting.id, thread_id, call_id
        )

        return JoinResult(
            organizer_identity=organizer_identity,
            meeting=meeting,
            call=call,
        )

    def build_payload(self, meeting: MeetingRecord, organizer_identity: str) -> dict[str, Any]:
        """
        Build the Graph call creation payload.

        Meetings with join-by-id settings are joined through the lobby with
        joinMeetingId + passcode. Otherwise the bot joins as the organizer's
        guest via the chat thread, allowed to start without a host present.
        """
        payload: dict[str, Any] = {
            "@odata.type": "#microsoft.graph.call",
            "callbackUri": self.config.callback_uri,
            "requestedModalities": ["audio"],
            "mediaConfig": {"@odata.type": "#microsoft.graph.serviceHostedMediaConfig"},
        }

        if meeting.join_meeting_id:
            payload["meetingInfo"] = {
                "@odata.type": "#microsoft.graph.joinMeetingIdMeetingInfo",
                "joinMeetingId": meeting.join_meeting_id,
                # null, never omitted
                "passcode": meeting.passcode,
            }
        else:
            payload["chatInfo"] = {
                "@odata.type": "#microsoft.graph.chatInfo",
                "threadId": meeting.thread_id,
                "messageId": "0",
            }
            payload["meetingInfo"] = {
                "@odata.type": "#microsoft.graph.organizerMeetingInfo",
                "organizer": {
                    "@odata.type": "#microsoft.graph.identitySet",
                    "user": {
                        "@odata.type": "#microsoft.graph.identity",
                        "id": organizer_identity,
                        "tenantId": self.config.tenant_id,
                    },
                },
                "allowConversationWithoutHost": True,
            }

        payload["tenantId"] = self.config.tenant_id
        return payload
