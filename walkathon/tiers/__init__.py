from walkathon.tiers._base import SyncOutcome, SyncTier, TierResult
from walkathon.tiers._registry import build_tiers, get_tier, get_tiers, register

__all__ = [
    "SyncOutcome",
    "SyncTier",
    "TierResult",
    "build_tiers",
    "get_tier",
    "get_tiers",
    "register",
]
