from enum import Enum

from walkathon.participant import Participant


class Status(str, Enum):
    """Attendance status derived from the tracker; never stored."""

    REGISTERED = "Registered"
    CHECKED_IN = "Checked In"
    COMPLETED = "Completed"


def merge(external: list[Participant], app: list[Participant]) -> list[Participant]:
    """
    Spreadsheet participants followed by on-site registrations.

    No de-duplication: someone who pre-registered and also registers on site
    appears twice, once per intake path.
    """
    return [*external, *app]


def filter_participants(collection: list[Participant], query: str) -> list[Participant]:
    """
    Search by name, email, or phone.

    Name and email match case-insensitively; phone matches the raw text.
    An empty query returns everything.
    """
    if not query:
        return list(collection)
    needle = query.lower()
    return [
        p
        for p in collection
        if needle in p.full_name.lower()
        or (p.email and needle in p.email.lower())
        or (p.phone and query in p.phone)
    ]


def status(participant: Participant, tracker) -> Status:
    if tracker.is_checked_out(participant.id):
        return Status.COMPLETED
    if tracker.is_checked_in(participant.id):
        return Status.CHECKED_IN
    return Status.REGISTERED


def summary(external: list[Participant], app: list[Participant], tracker) -> dict:
    """
    Dashboard counters.

    Returns:
        dict: pre_registered, registered, checked_in, and completed counts.
    """
    checked_in, checked_out = tracker.snapshot()
    return {
        "pre_registered": len(external),
        "registered": len(app),
        "checked_in": len(checked_in),
        "completed": len(checked_out),
    }
