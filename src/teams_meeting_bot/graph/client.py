"""
Microsoft Graph REST client.

Thin wrapper over requests: bearer auth, timeouts, and conversion of
every failed response into UpstreamError with the upstream status and
error body attached.

API docs: https://learn.microsoft.com/graph/api/resources/communications-api-overview
"""

import logging
from typing import Any

import requests

from ..config import MeetingBotConfig, get_meeting_bot_config
from ..errors import UpstreamError

logger = logging.getLogger(__name__)


def _error_payload(resp: requests.Response) -> Any:
    """Upstream error body, parsed as JSON when possible."""
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


class GraphApiClient:
    """Client for the Microsoft Graph v1.0 REST API."""

    def __init__(self, config: MeetingBotConfig | None = None) -> None:
        self.config = config or get_meeting_bot_config()

    def url(self, path: str) -> str:
        """Absolute Graph URL for a path (absolute URLs pass through)."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.config.graph_base_url}/{path.lstrip('/')}"

    def get_json(self, path: str, token: str) -> dict[str, Any]:
        resp = self._request("GET", path, token)
        return self._json_body(resp, "GET", path)

    def get_text(self, path: str, token: str, accept: str = "text/vtt") -> str:
        """GET a non-JSON representation (e.g. transcript content as WebVTT)."""
        resp = self._request("GET", path, token, headers={"Accept": accept})
        return resp.text

    def post_json(self, path: str, token: str, payload: dict[str, Any]) -> dict[str, Any]:
        resp = self._request(
            "POST",
            path,
            token,
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        return self._json_body(resp, "POST", path)

    def delete(self, path: str, token: str) -> None:
        self._request("DELETE", path, token)

    def _json_body(self, resp: requests.Response, method: str, path: str) -> dict[str, Any]:
        """Decode a successful response; an empty body reads as {}."""
        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError:
            data = None

        if not isinstance(data, dict):
            url = self.url(path)
            logger.warning("Graph %s %s returned a non-JSON-object body", method, url)
            raise UpstreamError(
                f"Graph {method} returned a non-JSON body",
                status_code=resp.status_code,
                payload=resp.text,
                method=method,
                url=url,
            )
        return data

    def _request(
        self,
        method: str,
        path: str,
        token: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Send one request to Graph.

        Raises:
            UpstreamError: On transport failure or any 4xx/5xx response
        """
        url = self.url(path)
        all_headers = {"Authorization": f"Bearer {token}"}
        if headers:
            all_headers.update(headers)

        try:
            resp = requests.request(
                method,
                url,
                headers=all_headers,
                timeout=self.config.graph_timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.error("Graph %s %s failed: %s", method, url, e)
            raise UpstreamError(
                f"Graph request failed: {e}", payload=str(e), method=method, url=url
            ) from e

        if resp.status_code >= 400:
            payload = _error_payload(resp)
            if resp.status_code != 404:
                logger.warning(
                    "Graph %s %s returned %s: %s", method, url, resp.status_code, payload
                )
            raise UpstreamError(
                f"Graph {method} returned {resp.status_code}",
                status_code=resp.status_code,
                payload=payload,
                method=method,
                url=url,
            )

        return resp
