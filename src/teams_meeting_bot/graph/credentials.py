"""
Bearer tokens for Microsoft Graph.

Uses the app registration's client secret (client credentials flow).
Token caching is left to azure-identity.
"""

import logging

from azure.core.exceptions import AzureError
from azure.identity import ClientSecretCredential

from ..config import MeetingBotConfig, get_meeting_bot_config
from ..errors import ServerMisconfiguredError, UpstreamError

logger = logging.getLogger(__name__)


class GraphTokenProvider:
    """Exchanges the configured app credentials for a Graph access token."""

    def __init__(
        self,
        config: MeetingBotConfig | None = None,
        credential: ClientSecretCredential | None = None,
    ) -> None:
        self.config = config or get_meeting_bot_config()
        self._credential = credential

    @property
    def credential(self) -> ClientSecretCredential:
        """Get the client secret credential (lazy initialization)."""
        if self._credential is None:
            missing = self.config.missing_credentials()
            if missing:
                raise ServerMisconfiguredError(
                    "Graph credentials not configured on server",
                    missing=missing,
                )
            self._credential = ClientSecretCredential(
                tenant_id=self.config.tenant_id,
                client_id=self.config.client_id,
                client_secret=self.config.client_secret,
            )
        return self._credential

    def get_token(self) -> str:
        """
        Acquire an access token for the Graph scope.

        Returns:
            Raw bearer token string

        Raises:
            ServerMisconfiguredError: If app credentials are not set
            UpstreamError: If Azure AD rejects the credentials or is unreachable
        """
        credential = self.credential
        try:
            access_token = credential.get_token(self.config.graph_scope)
        except AzureError as e:
            logger.error("Graph token acquisition failed: %s", e.message)
            raise UpstreamError(
                "Failed to acquire Graph access token",
                status_code=getattr(e, "status_code", None),
                payload=e.message,
            ) from e
        return access_token.token
