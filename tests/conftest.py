"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and makes fixtures
available to all test modules.
"""

import json
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch
from urllib.parse import quote

import pytest

# Add src/ to Python path so we can import the package without installing it
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from teams_meeting_bot.config import MeetingBotConfig  # noqa: E402
from teams_meeting_bot.graph import GraphApiClient  # noqa: E402

TENANT_ID = "72f988bf-86f1-41af-91ab-2d7cd011db47"
ORGANIZER_ID = "0b0c8b6e-3c1a-4b9e-9f55-5d1d2f0a1e77"
CALL_ID = "421f1100-9d5b-4bd6-8d0a-37a7c2b0b1a5"

TEST_ENV = {
    "TENANT_ID": TENANT_ID,
    "MICROSOFT_APP_ID": "app-client-id",
    "MICROSOFT_APP_PASSWORD": "app-client-secret",
    "SERVICE_URL": "https://bot.example.com",
    "API_KEY": "test-api-key",
}


def build_join_link(oid: str | None = ORGANIZER_ID, tid: str = TENANT_ID) -> str:
    """Teams-style join link with a double-encoded context parameter."""
    context: dict = {"Tid": tid}
    if oid is not None:
        context["Oid"] = oid
    encoded = quote(json.dumps(context, separators=(",", ":")), safe="")
    return (
        "https://teams.microsoft.com/l/meetup-join/"
        f"19%3ameeting_NzA1%40thread.v2/0?context={encoded}"
    )


@pytest.fixture
def join_link() -> str:
    return build_join_link()


@pytest.fixture
def config() -> MeetingBotConfig:
    """MeetingBotConfig built from a complete test environment."""
    with patch.dict(os.environ, TEST_ENV, clear=True):
        return MeetingBotConfig()


@pytest.fixture
def token_provider() -> MagicMock:
    """Mock GraphTokenProvider returning a fixed token."""
    provider = MagicMock()
    provider.get_token.return_value = "graph-token"
    return provider


@pytest.fixture
def graph(config: MeetingBotConfig) -> MagicMock:
    """Mock GraphApiClient that still builds real Graph URLs."""
    mock = MagicMock()
    mock.url.side_effect = GraphApiClient(config).url
    return mock


@pytest.fixture
def meeting_data() -> dict:
    """Graph onlineMeeting resource without join-by-id settings."""
    return {
        "id": "MSpkYzE3Njc0Yy04MWQ5",
        "subject": "Weekly sync",
        "joinWebUrl": build_join_link(),
        "chatInfo": {"threadId": "19:meeting_NzA1@thread.v2", "messageId": "0"},
    }
