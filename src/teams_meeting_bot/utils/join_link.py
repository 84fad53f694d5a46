"""
Join link parsing.

Teams join links embed the meeting's tenant and organizer as URL-encoded
JSON in the ``context`` query parameter, e.g.:

    https://teams.microsoft.com/l/meetup-join/19%3ameeting_X%40thread.v2/0
        ?context=%7b%22Tid%22%3a%22<tenant>%22%2c%22Oid%22%3a%22<organizer>%22%7d
"""

import json
from urllib.parse import parse_qs, unquote, urlparse

from ..errors import InvalidLinkError
from .identifiers import is_guid


class OrganizerIdentityResolver:
    """Extracts the organizer object id (``Oid``) from a join link."""

    @staticmethod
    def resolve(join_link: str) -> str:
        """
        Return the organizer identity embedded in a join link.

        Args:
            join_link: Teams meeting join URL

        Returns:
            The ``Oid`` value from the link's context

        Raises:
            InvalidLinkError: If the link is malformed, has no context,
                the context is not a JSON object, or Oid is missing or
                not GUID-shaped
        """
        if not join_link or not isinstance(join_link, str):
            raise InvalidLinkError("Join link is required")

        try:
            parsed = urlparse(join_link)
        except ValueError as e:
            raise InvalidLinkError(f"Invalid join link: {e!s}") from e

        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidLinkError("Join link must be an absolute http(s) URL")

        values = parse_qs(parsed.query).get("context")
        if not values or not values[0]:
            raise InvalidLinkError(
                "Could not extract organizer Oid from join link: missing context parameter"
            )

        # parse_qs decodes once; links are often encoded twice
        try:
            context = json.loads(unquote(values[0]))
        except json.JSONDecodeError as e:
            raise InvalidLinkError(
                "Could not extract organizer Oid from join link: context is not valid JSON"
            ) from e

        if not isinstance(context, dict):
            raise InvalidLinkError(
                "Could not extract organizer Oid from join link: context is not an object"
            )

        oid = context.get("Oid")
        if not oid or not isinstance(oid, str):
            raise InvalidLinkError(
                "Could not extract organizer Oid from join link context"
            )

        if not is_guid(oid):
            raise InvalidLinkError(
                "Organizer Oid in join link context is not a GUID", oid=oid
            )

        return oid

