from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from walkathon.errors import CacheMiss, FetchFailure, ParseFailure
from walkathon.participant import Participant


class SyncOutcome(str, Enum):
    """Which tier produced the pre-registration list."""

    LIVE = "live"
    CACHED = "cached"
    DEFAULT = "default"


@dataclass
class TierResult:
    """Result-or-failure value returned by every tier attempt."""

    outcome: SyncOutcome
    participants: list[Participant] | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.participants is not None


class SyncTier(ABC):
    """
    Interface for one strategy in the sync fallback chain.

    Tiers are tried in ascending `priority`; the first one that succeeds wins.
    """

    outcome: SyncOutcome
    priority: int

    def __init__(self, config, store, http_client=None):
        self.config = config
        self.store = store
        self.http_client = http_client

    def __repr__(self):
        return f"{type(self).__name__}"

    @abstractmethod
    def load(self) -> list[Participant]:
        """
        Produce the pre-registration list.

        Raises:
            FetchFailure, ParseFailure, or CacheMiss when this tier cannot deliver.
        """
        raise NotImplementedError

    def attempt(self) -> TierResult:
        """Run `load` and wrap its outcome so the controller never has to catch."""
        try:
            participants = self.load()
        except (FetchFailure, ParseFailure, CacheMiss) as e:
            return TierResult(self.outcome, error=e)
        return TierResult(self.outcome, participants=participants)
