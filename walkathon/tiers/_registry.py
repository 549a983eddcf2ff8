import importlib
import pkgutil
from typing import Dict, Type

from walkathon import tiers
from walkathon.tiers._base import SyncTier

_registry: Dict[str, Type[SyncTier]] = {}


def register(cls: Type[SyncTier]) -> Type[SyncTier]:
    """Register a SyncTier under its module name.

    Args:
        cls: SyncTier subclass to register.

    Returns:
        Type[SyncTier]: The registered class.
    """
    module_name = cls.__module__.rsplit(".", 1)[-1]
    _registry[module_name] = cls
    return cls


def _discover_tiers() -> None:
    """Import tier modules so that @register runs."""
    for _, module_name, _ in pkgutil.iter_modules(tiers.__path__):
        if module_name.startswith("_"):
            continue
        importlib.import_module(f"{tiers.__name__}.{module_name}")


def get_tiers() -> list[Type[SyncTier]]:
    """All registered tiers, in the order they should be attempted."""
    _discover_tiers()
    return sorted(_registry.values(), key=lambda cls: cls.priority)


def get_tier(name: str) -> Type[SyncTier]:
    _discover_tiers()
    try:
        return _registry[name]
    except KeyError:
        raise ValueError(f"No sync tier named {name!r}")


def build_tiers(config, store, http_client=None) -> list[SyncTier]:
    """Instantiate every registered tier in fallback order."""
    return [cls(config, store, http_client) for cls in get_tiers()]
