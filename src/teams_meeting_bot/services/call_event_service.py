"""
Calling webhook handler.

Graph pushes call lifecycle notifications to the calling callback URI:
{
    "value": [
        {
            "changeType": "updated" | "deleted",
            "resource": "/app/calls/<callId>",
            "resourceUrl": "/communications/calls/<callId>",
            "resourceData": {
                "@odata.type": "#microsoft.graph.call",
                "state": "establishing" | "established" | "terminated" | ...,
                ...
            }
        }
    ]
}

Notifications are logged and acknowledged. By default they do not touch
the join guard, so a call that ends outside this service keeps its guard
entry until hangup is called. With RELEASE_GUARD_ON_CALL_END enabled, a
terminated or deleted call releases its entry.
"""

import logging
from typing import Any

from .join_guard import JoinGuard

logger = logging.getLogger(__name__)

TERMINATED_STATE = "terminated"


def _resource_data(notification: dict[str, Any]) -> dict[str, Any]:
    data = notification.get("resourceData")
    return data if isinstance(data, dict) else {}


def _call_id_from_notification(notification: dict[str, Any]) -> str | None:
    resource_data = _resource_data(notification)
    if resource_data.get("id"):
        return resource_data["id"]

    resource = notification.get("resourceUrl") or notification.get("resource") or ""
    if not isinstance(resource, str):
        return None
    # Format: /communications/calls/{id} or /app/calls/{id}
    parts = [p for p in resource.split("/") if p]
    if len(parts) >= 2 and parts[-2] == "calls":
        return parts[-1]
    return None


class CallEventService:
    """Handles Graph call notifications posted to the calling webhook."""

    def __init__(self, guard: JoinGuard, release_on_call_end: bool = False) -> None:
        """
        Args:
            guard: Join guard to release entries from
            release_on_call_end: Release guard entries for terminated calls
        """
        self.guard = guard
        self.release_on_call_end = release_on_call_end

    def handle_notification(self, payload: dict[str, Any] | None) -> dict[str, Any]:
        """
        Process one webhook delivery.

        Malformed items are logged and skipped; this never raises.

        Returns:
            Dict with number of notifications received and released call ids
        """
        notifications = payload.get("value") if isinstance(payload, dict) else None
        if not isinstance(notifications, list):
            logger.info("Calling webhook payload without notifications: %s", payload)
            return {"received": 0, "released": []}

        released = []
        for notification in notifications:
            if not isinstance(notification, dict):
                logger.warning("Skipping malformed call notification: %r", notification)
                continue

            change_type = notification.get("changeType", "")
            state = _resource_data(notification).get("state")
            call_id = _call_id_from_notification(notification)

            logger.info(
                "Call notification: call=%s change=%s state=%s",
                call_id,
                change_type,
                state,
            )

            if not self.release_on_call_end or not call_id:
                continue

            if state == TERMINATED_STATE or change_type == "deleted":
                if self.guard.release_by_call(call_id):
                    released.append(call_id)

        return {"received": len(notifications), "released": released}
