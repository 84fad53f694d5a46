"""Tests for meeting bot configuration."""

import os
from unittest.mock import patch

from teams_meeting_bot.config import (
    DEFAULT_GRAPH_API_BASE_URL,
    DEFAULT_GRAPH_SCOPE,
    MeetingBotConfig,
)


class TestMeetingBotConfig:
    """Tests for MeetingBotConfig."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = MeetingBotConfig()
            assert config.tenant_id == ""
            assert config.client_id == ""
            assert config.callback_uri == ""
            assert config.graph_base_url == DEFAULT_GRAPH_API_BASE_URL
            assert config.graph_scope == DEFAULT_GRAPH_SCOPE
            assert config.graph_timeout == 30.0
            assert config.release_guard_on_call_end is False
            assert config.rate_limit_storage_uri == "memory://"
            assert not config.is_configured

    def test_configured_from_env(self):
        env = {
            "TENANT_ID": "tenant",
            "MICROSOFT_APP_ID": "client",
            "MICROSOFT_APP_PASSWORD": "secret",
            "SERVICE_URL": "https://bot.example.com/",
        }
        with patch.dict(os.environ, env, clear=True):
            config = MeetingBotConfig()
            assert config.is_configured
            assert config.callback_uri == "https://bot.example.com/api/calling"

    def test_explicit_callback_uri_wins(self):
        env = {
            "SERVICE_URL": "https://bot.example.com",
            "CALLING_CALLBACK_URI": "https://other.example.com/calls",
        }
        with patch.dict(os.environ, env, clear=True):
            assert MeetingBotConfig().callback_uri == "https://other.example.com/calls"

    def test_missing_credentials(self):
        with patch.dict(os.environ, {"MICROSOFT_APP_ID": "client"}, clear=True):
            config = MeetingBotConfig()
            assert config.missing_credentials() == ["TENANT_ID", "MICROSOFT_APP_PASSWORD"]

    def test_validate_missing_fields(self):
        with patch.dict(os.environ, {}, clear=True):
            errors = MeetingBotConfig().validate()
            assert any("TENANT_ID" in e for e in errors)
            assert any("CALLING_CALLBACK_URI" in e for e in errors)
            assert any("API_KEY" in e for e in errors)

    def test_validate_all_configured(self, config: MeetingBotConfig):
        assert config.validate() == []

    def test_to_dict_no_secrets(self, config: MeetingBotConfig):
        d = config.to_dict()
        assert "app-client-secret" not in str(d)
        assert "test-api-key" not in str(d)
        assert d["MICROSOFT_APP_PASSWORD"] == "SET"
        assert d["API_KEY"] == "SET"
        assert d["TENANT_ID"] == config.tenant_id

    def test_release_flag(self):
        with patch.dict(os.environ, {"RELEASE_GUARD_ON_CALL_END": "true"}, clear=True):
            assert MeetingBotConfig().release_guard_on_call_end is True

    def test_invalid_timeout_defaults(self):
        with patch.dict(os.environ, {"GRAPH_TIMEOUT_SECONDS": "soon"}, clear=True):
            assert MeetingBotConfig().graph_timeout == 30.0

    def test_base_url_trailing_slash_stripped(self):
        env = {"GRAPH_API_BASE_URL": "https://graph.microsoft.com/beta/"}
        with patch.dict(os.environ, env, clear=True):
            assert MeetingBotConfig().graph_base_url == "https://graph.microsoft.com/beta"
