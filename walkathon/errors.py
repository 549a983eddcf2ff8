class WalkathonError(Exception):
    """Base class for all walkathon errors."""


class ConfigError(WalkathonError):
    """Configuration file is missing, unreadable, or invalid."""


class FetchFailure(WalkathonError):
    """The pre-registration feed could not be fetched, or the payload was too small."""


class ParseFailure(WalkathonError):
    """The pre-registration feed could not be turned into participants."""


class EmptyDatasetError(ParseFailure):
    """The feed has no data rows below its header line."""


class CacheMiss(WalkathonError):
    """No cached pre-registration data is available."""


class SyncInProgressError(WalkathonError):
    """A sync was requested while another one is still running."""


class PersistenceFailure(WalkathonError):
    """The remote store is unreachable or rejected a write or query."""


class MirrorFailure(PersistenceFailure):
    """A check-in or check-out flag could not be mirrored to the remote store."""


class RegistrationError(WalkathonError):
    """A registration form is incomplete or the waiver is unsigned."""


class DonationError(WalkathonError):
    """A donation amount is missing or below the minimum."""
