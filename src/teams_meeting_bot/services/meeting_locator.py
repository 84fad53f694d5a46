"""
Online meeting lookup.

Finds the Graph onlineMeeting for an organizer by exact match on its
join URL. Every call queries Graph; results are never cached, so joins
and transcript fetches always see the meeting's current state.
"""

import logging
from urllib.parse import quote

from ..errors import NotFoundError, UpstreamError
from ..graph import GraphApiClient, GraphTokenProvider
from ..models import MeetingRecord

logger = logging.getLogger(__name__)


class MeetingLocator:
    """Resolves organizer + join link to a MeetingRecord."""

    def __init__(self, graph: GraphApiClient, token_provider: GraphTokenProvider) -> None:
        self.graph = graph
        self.token_provider = token_provider

    def filter_url(self, organizer_identity: str, join_link: str) -> str:
        """
        Build the onlineMeetings filter URL.

        Graph expects the join URL percent-encoded inside the OData string
        literal, and the spaces around ``eq`` as ``%20``.
        """
        encoded_link = quote(join_link, safe="")
        return self.graph.url(
            f"users/{organizer_identity}/onlineMeetings"
            f"?$filter=JoinWebUrl%20eq%20'{encoded_link}'"
        )

    def find(
        self,
        organizer_identity: str,
        join_link: str,
        token: str | None = None,
    ) -> MeetingRecord:
        """
        Find the meeting whose join URL matches exactly.

        If Graph returns several matches the first one is used.

        Args:
            organizer_identity: Organizer object id (scopes the lookup)
            join_link: Teams join URL
            token: Bearer token for this operation (acquired if omitted)

        Returns:
            MeetingRecord for the first match

        Raises:
            NotFoundError: If no meeting matches or the lookup fails. The
                error carries the URL tried and any upstream error body.
        """
        if token is None:
            token = self.token_provider.get_token()

        url = self.filter_url(organizer_identity, join_link)

        try:
            data = self.graph.get_json(url, token)
        except UpstreamError as e:
            logger.warning("Meeting lookup failed for organizer %s: %s", organizer_identity, e)
            raise NotFoundError(
                "Online meeting not found for organizer + join link.",
                tried=url,
                lookupError=e.payload,
                organizerIdentityUsed=organizer_identity,
            ) from e

        meetings = data.get("value") or []
        if not meetings:
            raise NotFoundError(
                "Online meeting not found for organizer + join link.",
                tried=url,
                lookupError=None,
                organizerIdentityUsed=organizer_identity,
            )

        if len(meetings) > 1:
            logger.info(
                "%d meetings match join link for organizer %s; using the first",
                len(meetings),
                organizer_identity,
            )

        return MeetingRecord.from_dict(meetings[0])
