from .identifiers import is_guid, require_call_id, require_organizer_identity
from .join_link import OrganizerIdentityResolver

__all__ = [
    "OrganizerIdentityResolver",
    "is_guid",
    "require_call_id",
    "require_organizer_identity",
]
