import logging

from walkathon import storage
from walkathon.utils import now_iso

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """
    Tracks who has arrived and who has finished the walk.

    Both sets only grow: a participant cannot "un-arrive". Every change is
    written to local storage straight away and mirrored to the remote store
    through the gateway when one is configured. Local state is authoritative;
    a failed mirror never undoes a check-in.

    Attributes:
        checked_in (set): Identifiers of participants who checked in.
        checked_out (set): Identifiers of participants who completed the walk.
    """

    def __init__(self, store, gateway=None, clock=now_iso):
        self.store = store
        self.gateway = gateway
        self.clock = clock
        self.checked_in = set(store.get_json(storage.CHECKED_IN_KEY, default=[]))
        self.checked_out = set(store.get_json(storage.CHECKED_OUT_KEY, default=[]))

    def __repr__(self):
        return f"AttendanceTracker({len(self.checked_in)} in, {len(self.checked_out)} out)"

    def check_in(self, participant_id) -> None:
        """Mark a participant as arrived. Repeating the call changes nothing."""
        if participant_id in self.checked_in:
            return
        self.checked_in.add(participant_id)
        self._persist()
        self._mirror(participant_id, "checked_in")

    def check_out(self, participant_id) -> None:
        """
        Mark a participant as having completed the walk.

        Checking out someone who never checked in is allowed; the missing
        check-in is recorded as well so every completed participant is also
        counted as arrived.
        """
        if participant_id in self.checked_out:
            return
        if participant_id not in self.checked_in:
            logger.warning("Checking out %s without a prior check-in", participant_id)
            self.check_in(participant_id)
        self.checked_out.add(participant_id)
        self._persist()
        self._mirror(participant_id, "checked_out")

    def is_checked_in(self, participant_id) -> bool:
        return participant_id in self.checked_in

    def is_checked_out(self, participant_id) -> bool:
        return participant_id in self.checked_out

    def snapshot(self) -> tuple[frozenset, frozenset]:
        """Immutable copies of (checked_in, checked_out)."""
        return frozenset(self.checked_in), frozenset(self.checked_out)

    def _persist(self) -> None:
        self.store.set_json(storage.CHECKED_IN_KEY, sorted(self.checked_in, key=str))
        self.store.set_json(storage.CHECKED_OUT_KEY, sorted(self.checked_out, key=str))

    def _mirror(self, participant_id, field: str) -> None:
        if self.gateway is not None:
            self.gateway.update_attendance_flag(participant_id, field, self.clock())
