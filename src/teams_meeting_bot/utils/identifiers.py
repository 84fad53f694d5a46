"""Identifier validation."""

import re

from ..errors import InvalidInputError

# Same shape check Graph ids get: 36 hex digits and hyphens.
_GUID_RE = re.compile(r"[0-9a-fA-F-]{36}")


def is_guid(value: object) -> bool:
    """
    Check that a value looks like a GUID.

    Examples:
        >>> is_guid("3f2504e0-4f89-11d3-9a0c-0305e82c3301")
        True

        >>> is_guid("not-a-guid")
        False
    """
    return isinstance(value, str) and bool(_GUID_RE.fullmatch(value))


def require_call_id(call_id: str) -> str:
    """Return call_id, or raise InvalidInputError if it is not GUID-shaped."""
    if not is_guid(call_id):
        raise InvalidInputError("callId must be a GUID", callId=call_id)
    return call_id


def require_organizer_identity(organizer_identity: str) -> str:
    """
    Return a caller-supplied organizer id, or raise InvalidInputError.

    The id becomes a Graph URL path segment, so anything that is not
    GUID-shaped is refused.
    """
    if not is_guid(organizer_identity):
        raise InvalidInputError(
            "organizerIdentity must be a GUID", organizerIdentity=organizer_identity
        )
    return organizer_identity
