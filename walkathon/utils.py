import time
from datetime import date, datetime, timezone


def now_iso() -> str:
    """
    Current UTC time as an ISO-8601 string, e.g. `2025-08-16T14:30:00.123456+00:00`.

    Used for registration times and check-in/check-out mirror timestamps.
    """
    return datetime.now(timezone.utc).isoformat()


def sync_timestamp() -> str:
    """
    Human-readable local time for the "last synced" label, e.g. `8/16/2025, 7:42:10 AM`.
    """
    now = datetime.now()
    hour = now.hour % 12 or 12
    suffix = "AM" if now.hour < 12 else "PM"
    return (
        f"{now.month}/{now.day}/{now.year}, "
        f"{hour}:{now.minute:02d}:{now.second:02d} {suffix}"
    )


def today_stamp() -> str:
    """Current date as YYYY-MM-DD, used in export file names."""
    return date.today().isoformat()


class LocalIdGenerator:
    """
    Hands out millisecond-timestamp identifiers for locally saved registrations.

    Two registrations in the same millisecond would collide, so each new ID is
    at least one greater than the previous one.
    """

    def __init__(self, clock=time.time):
        self.clock = clock
        self.last_id = 0

    def __call__(self) -> int:
        candidate = int(self.clock() * 1000)
        self.last_id = max(candidate, self.last_id + 1)
        return self.last_id


def slugify(name: str) -> str:
    """
    Turns an event name into a file name prefix.

    Args:
        name (str): Event name, e.g. "Sangamam Walkathon 2025".

    Returns:
        str: Lower-case, hyphen-separated prefix, e.g. "sangamam-walkathon-2025".
    """
    cleaned = "".join(c.lower() if c.isalnum() else " " for c in name)
    return "-".join(cleaned.split()) or "walkathon"
