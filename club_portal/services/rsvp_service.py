"""Event RSVP recording"""

import logging

from club_portal.errors import InvalidInput
from club_portal.services.document_store import EVENT_RSVPS, DocumentStore, now_iso

logger = logging.getLogger(__name__)


class RsvpService:
    """Append-only attendance records.

    No capacity check and no dedup: RSVPing twice stores two records.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def rsvp(self, event_id: str, user_id: str) -> dict:
        if not event_id or not user_id:
            raise InvalidInput("Missing event or user id")

        record = self.store.insert(EVENT_RSVPS, {
            "event_id": event_id,
            "user_id": user_id,
            "created_at": now_iso(),
        })
        logger.info(f"RSVP recorded: user {user_id} -> event {event_id}")
        return record
