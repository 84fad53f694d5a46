"""
Tests for MeetingLocator.

Test coverage:
- Filter URL encoding
- First match returned
- Not found: empty collection and failed lookups, with diagnostics
"""

from unittest.mock import MagicMock
from urllib.parse import quote

import pytest

from conftest import ORGANIZER_ID
from teams_meeting_bot.errors import NotFoundError, UpstreamError
from teams_meeting_bot.models import MeetingRecord
from teams_meeting_bot.services import MeetingLocator


@pytest.fixture
def locator(graph: MagicMock, token_provider: MagicMock) -> MeetingLocator:
    return MeetingLocator(graph, token_provider)


class TestFilterUrl:
    def test_filter_encoding(self, locator: MeetingLocator, join_link: str) -> None:
        url = locator.filter_url(ORGANIZER_ID, join_link)

        assert url == (
            f"https://graph.microsoft.com/v1.0/users/{ORGANIZER_ID}/onlineMeetings"
            f"?$filter=JoinWebUrl%20eq%20'{quote(join_link, safe='')}'"
        )
        # No raw spaces or unencoded link characters in the query
        assert " " not in url
        assert "https%3A%2F%2Fteams.microsoft.com" in url
        # The link's own %-escapes are escaped again
        assert "%253a" in url


class TestFind:
    def test_returns_first_match(
        self,
        locator: MeetingLocator,
        graph: MagicMock,
        join_link: str,
        meeting_data: dict,
    ) -> None:
        other = {**meeting_data, "id": "second"}
        graph.get_json.return_value = {"value": [meeting_data, other]}

        meeting = locator.find(ORGANIZER_ID, join_link, token="tok")

        assert isinstance(meeting, MeetingRecord)
        assert meeting.id == meeting_data["id"]
        assert meeting.thread_id == "19:meeting_NzA1@thread.v2"
        graph.get_json.assert_called_once_with(locator.filter_url(ORGANIZER_ID, join_link), "tok")

    def test_acquires_token_when_missing(
        self,
        locator: MeetingLocator,
        graph: MagicMock,
        token_provider: MagicMock,
        join_link: str,
        meeting_data: dict,
    ) -> None:
        graph.get_json.return_value = {"value": [meeting_data]}

        locator.find(ORGANIZER_ID, join_link)

        token_provider.get_token.assert_called_once()
        assert graph.get_json.call_args.args[1] == "graph-token"

    def test_not_found_includes_filter(
        self, locator: MeetingLocator, graph: MagicMock, join_link: str
    ) -> None:
        graph.get_json.return_value = {"value": []}

        with pytest.raises(NotFoundError) as exc_info:
            locator.find(ORGANIZER_ID, join_link, token="tok")

        details = exc_info.value.details
        assert details["tried"] == locator.filter_url(ORGANIZER_ID, join_link)
        assert details["lookupError"] is None
        assert details["organizerIdentityUsed"] == ORGANIZER_ID

    def test_missing_value_key(
        self, locator: MeetingLocator, graph: MagicMock, join_link: str
    ) -> None:
        graph.get_json.return_value = {}

        with pytest.raises(NotFoundError):
            locator.find(ORGANIZER_ID, join_link, token="tok")

    def test_lookup_failure_surfaces_upstream_payload(
        self, locator: MeetingLocator, graph: MagicMock, join_link: str
    ) -> None:
        payload = {"error": {"code": "Forbidden", "message": "No application access policy"}}
        graph.get_json.side_effect = UpstreamError("Graph GET returned 403", 403, payload)

        with pytest.raises(NotFoundError) as exc_info:
            locator.find(ORGANIZER_ID, join_link, token="tok")

        assert exc_info.value.details["lookupError"] == payload
        assert exc_info.value.details["tried"].startswith("https://graph.microsoft.com/v1.0/users/")
