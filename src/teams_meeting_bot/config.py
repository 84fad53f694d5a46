"""
Configuration for the Teams meeting bot.

Environment variables:
    TENANT_ID: Azure AD tenant ID (GUID)
    MICROSOFT_APP_ID: App registration (client) ID
    MICROSOFT_APP_PASSWORD: App registration client secret value
    CALLING_CALLBACK_URI: Calling webhook registered on the Azure Bot
        (auto-detected from SERVICE_URL if not set)
    SERVICE_URL: Public base URL of this service
    API_KEY: Shared secret required in the X-API-Key header
    GRAPH_API_BASE_URL: Microsoft Graph base URL
    GRAPH_SCOPE: Token scope requested from Azure AD
    GRAPH_TIMEOUT_SECONDS: Timeout for every Graph request (default: 30)
    RELEASE_GUARD_ON_CALL_END: Release join guard entries when a call
        terminated notification arrives (default: false)
    JOIN_RATE_LIMIT: Flask-Limiter rule for POST /join
    RATE_LIMIT_STORAGE_URI: Flask-Limiter storage backend
    BUILD_TAG: Build identifier reported by /health
"""

import os

from . import __version__

DEFAULT_GRAPH_API_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_GRAPH_SCOPE = "https://graph.microsoft.com/.default"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class MeetingBotConfig:
    """
    Configuration for Graph access, the calling callback and the API surface.

    Reads from environment variables. Missing Graph credentials do not stop
    the service from starting; validate() reports them instead.
    """

    def __init__(self) -> None:
        # Azure AD app credentials
        self.tenant_id = os.getenv("TENANT_ID", "")
        self.client_id = os.getenv("MICROSOFT_APP_ID", "")
        self.client_secret = os.getenv("MICROSOFT_APP_PASSWORD", "")

        # Calling webhook (must match Azure Bot -> Teams channel -> Calling)
        self.service_url = os.getenv("SERVICE_URL", "")
        self.callback_uri = os.getenv("CALLING_CALLBACK_URI", "")
        if not self.callback_uri and self.service_url:
            self.callback_uri = f"{self.service_url.rstrip('/')}/api/calling"

        # Shared secret for our own endpoints
        self.api_key = os.getenv("API_KEY", "").strip()

        # Graph
        self.graph_base_url = os.getenv(
            "GRAPH_API_BASE_URL", DEFAULT_GRAPH_API_BASE_URL
        ).rstrip("/")
        self.graph_scope = os.getenv("GRAPH_SCOPE", DEFAULT_GRAPH_SCOPE)
        try:
            self.graph_timeout = float(os.getenv("GRAPH_TIMEOUT_SECONDS", "30"))
        except ValueError:
            self.graph_timeout = 30.0

        self.release_guard_on_call_end = _env_flag("RELEASE_GUARD_ON_CALL_END")

        # Rate limiting
        self.join_rate_limit = os.getenv("JOIN_RATE_LIMIT", "30 per minute")
        self.rate_limit_storage_uri = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")

        self.build_tag = os.getenv("BUILD_TAG", __version__)

    @property
    def is_configured(self) -> bool:
        """Check if Graph app credentials are configured."""
        return bool(self.tenant_id and self.client_id and self.client_secret)

    def missing_credentials(self) -> list[str]:
        """Names of unset Graph credential variables."""
        missing = []
        if not self.tenant_id:
            missing.append("TENANT_ID")
        if not self.client_id:
            missing.append("MICROSOFT_APP_ID")
        if not self.client_secret:
            missing.append("MICROSOFT_APP_PASSWORD")
        return missing

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error strings (empty if valid)
        """
        errors = [f"{name} is required" for name in self.missing_credentials()]

        if not self.callback_uri:
            errors.append("CALLING_CALLBACK_URI or SERVICE_URL is required")
        if not self.api_key:
            errors.append("API_KEY is required")

        return errors

    def to_dict(self) -> dict:
        """Return safe (no secrets) configuration summary."""
        return {
            "TENANT_ID": self.tenant_id or None,
            "MICROSOFT_APP_ID": "SET" if self.client_id else None,
            "MICROSOFT_APP_PASSWORD": "SET" if self.client_secret else None,
            "API_KEY": "SET" if self.api_key else None,
            "CALLING_CALLBACK_URI": self.callback_uri or None,
            "GRAPH_API_BASE_URL": self.graph_base_url,
            "RELEASE_GUARD_ON_CALL_END": self.release_guard_on_call_end,
            "BUILD_TAG": self.build_tag,
        }


# Singleton instance
_config: MeetingBotConfig | None = None


def get_meeting_bot_config() -> MeetingBotConfig:
    """Get the meeting bot config singleton."""
    global _config
    if _config is None:
        _config = MeetingBotConfig()
    return _config
