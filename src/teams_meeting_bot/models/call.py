"""
Call data models.

Calls are owned by the Graph communications API; this service only
references them by id.
"""

from dataclasses import dataclass
from typing import Any

# Graph deletes call resources once they end, so a 404 means "gone".
STATE_NOT_FOUND_OR_ENDED = "not_found_or_ended"


@dataclass
class CallState:
    """Current state of a Graph call."""

    id: str
    state: str | None
    termination_reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CallState":
        """
        Create CallState from a Graph call resource.

        Args:
            data: call JSON

        Returns:
            CallState instance
        """
        return cls(
            id=data.get("id", ""),
            state=data.get("state"),
            termination_reason=data.get("terminationReason") or None,
        )

    @classmethod
    def not_found_or_ended(cls, call_id: str) -> "CallState":
        return cls(id=call_id, state=STATE_NOT_FOUND_OR_ENDED)

    @property
    def is_gone(self) -> bool:
        return self.state == STATE_NOT_FOUND_OR_ENDED

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": True,
            "id": self.id,
            "state": self.state,
            "terminationReason": self.termination_reason,
        }


@dataclass
class HangupResult:
    call_id: str
    already_ended: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "callId": self.call_id, "alreadyEnded": self.already_ended}
