import logging

from walkathon import storage
from walkathon.errors import SyncInProgressError
from walkathon.participant import Participant
from walkathon.tiers import SyncOutcome, SyncTier, TierResult
from walkathon.utils import sync_timestamp

logger = logging.getLogger(__name__)


class SyncController:
    """
    Keeps the pre-registration list in step with the external spreadsheet.

    Tries each tier in order (live feed, local cache, built-in sample) and stops
    at the first that delivers. Only a live fetch refreshes the cache and the
    last-sync time; a failed fetch never clears what was cached before.

    Attributes:
        tiers (list[SyncTier]): Fallback chain, tried in list order.
        store (LocalStore): Durable storage for the cache and sync time.
        participants (list[Participant]): Current external collection.
        outcome (SyncOutcome or None): Outcome of the most recent sync.
        last_sync_time (str or None): When the feed was last fetched live.
        is_syncing (bool): True while a sync is running.
    """

    def __init__(self, tiers: list[SyncTier], store, clock=sync_timestamp):
        self.tiers = tiers
        self.store = store
        self.clock = clock
        self.participants: list[Participant] = []
        self.outcome: SyncOutcome | None = None
        self.last_sync_time: str | None = store.get(storage.LAST_SYNC_KEY)
        self.is_syncing = False
        # observers receive (event_type, payload) so a front end can grey out its sync button
        self.observers = []

    def add_observer(self, observer):
        """Register a sync observer callback.

        Args:
            observer: Callable accepting (event_type: str, payload: dict).
        """
        self.observers.append(observer)

    def _notify(self, event_type: str, payload: dict):
        for observer in self.observers:
            observer(event_type, payload)

    def sync(self) -> tuple[list[Participant], SyncOutcome]:
        """
        Refresh the external collection through the tier chain.

        Returns:
            tuple[list[Participant], SyncOutcome]: The new external collection
            and which tier produced it.

        Raises:
            SyncInProgressError: If called while another sync is running.
            RuntimeError: If every tier failed (the built-in sample never does).
        """
        if self.is_syncing:
            raise SyncInProgressError("A sync is already in progress")

        self.is_syncing = True
        try:
            self._notify("sync_started", {})
            result = self._run_tiers()
            if result.outcome is SyncOutcome.LIVE:
                self._save_cache(result.participants)
            self.participants = result.participants
            self.outcome = result.outcome
        finally:
            self.is_syncing = False

        self._notify(
            "sync_finished",
            {"outcome": self.outcome, "count": len(self.participants)},
        )
        return self.participants, self.outcome

    def _run_tiers(self) -> TierResult:
        for tier in self.tiers:
            result = tier.attempt()
            if result.succeeded:
                logger.info(
                    "Sync tier %s delivered %d participant(s)",
                    tier,
                    len(result.participants),
                )
                return result
            logger.warning("Sync tier %s failed: %s", tier, result.error)
            self._notify(
                "tier_failed", {"tier": result.outcome, "error": str(result.error)}
            )
        raise RuntimeError("Every sync tier failed")

    def _save_cache(self, participants: list[Participant]) -> None:
        self.last_sync_time = self.clock()
        self.store.set(storage.LAST_SYNC_KEY, self.last_sync_time)
        self.store.set_json(
            storage.SHEET_DATA_KEY, [p.to_record() for p in participants]
        )
