from pydantic import ValidationError

from walkathon import storage
from walkathon.errors import CacheMiss, ParseFailure
from walkathon.participant import Participant
from walkathon.tiers import SyncOutcome, SyncTier, register


@register
class CachedFeed(SyncTier):
    """Returns the last successfully fetched list, however old it is."""

    outcome = SyncOutcome.CACHED
    priority = 1

    def load(self):
        records = self.store.get_json(storage.SHEET_DATA_KEY)
        if records is None:
            raise CacheMiss("No cached pre-registration data")
        if not isinstance(records, list):
            raise ParseFailure("Cached pre-registration data is not a list")
        try:
            return [Participant.from_record(r) for r in records]
        except ValidationError as e:
            raise ParseFailure(f"Cached pre-registration data is invalid: {e}") from e
