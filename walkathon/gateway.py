import logging

from pydantic import ValidationError

from walkathon import storage
from walkathon.errors import MirrorFailure, PersistenceFailure
from walkathon.mirror import MirrorWorker
from walkathon.normalizer import ID_PREFIX
from walkathon.participant import Participant
from walkathon.utils import LocalIdGenerator

logger = logging.getLogger(__name__)

# attendance flag -> remote timestamp column
FLAG_TIME_COLUMNS = {
    "checked_in": "check_in_time",
    "checked_out": "check_out_time",
}


def records_to_participants(records) -> list[Participant]:
    """Validate stored records, dropping (and logging) any that are malformed."""
    participants = []
    for record in records or []:
        try:
            participants.append(Participant.from_record(record))
        except ValidationError as e:
            logger.warning("Skipping malformed registration record: %s", e)
    return participants


class PersistenceGateway:
    """
    Where on-site registrations live.

    Uses the remote store when one is configured and always keeps a local copy,
    so a registration is never lost and a failed remote query can fall back to
    the last-known local snapshot. Callers see the same contract either way.

    Attributes:
        store (LocalStore): Durable local storage.
        remote (SupabaseStore or None): Remote store, if configured.
        mirror (MirrorWorker): Background queue for attendance flag writes.
    """

    def __init__(self, store, remote=None, id_generator=None):
        self.store = store
        self.remote = remote
        self.next_id = id_generator or LocalIdGenerator()
        self.mirror = MirrorWorker(self._mirror)

    def __repr__(self):
        backing = self.remote if self.remote_enabled else self.store
        return f"PersistenceGateway({backing})"

    @property
    def remote_enabled(self) -> bool:
        return self.remote is not None

    def _load_local(self) -> list[Participant]:
        return records_to_participants(
            self.store.get_json(storage.PARTICIPANTS_KEY, default=[])
        )

    def _save_local(self, participants: list[Participant]) -> None:
        self.store.set_json(
            storage.PARTICIPANTS_KEY, [p.to_record() for p in participants]
        )

    def insert_registration(
        self, participant: Participant
    ) -> tuple[Participant, PersistenceFailure | None]:
        """
        Save a new registration.

        The record gets a local identifier first; a successful remote insert
        replaces it with the identifier the remote store assigned. A remote
        failure is returned rather than raised, because the record is already
        safe in local storage.

        Args:
            participant (Participant): Registration to save.

        Returns:
            tuple[Participant, PersistenceFailure or None]: The saved record and
            the remote failure, if there was one.
        """
        saved = participant.model_copy(update={"id": self.next_id()})
        failure = None

        if self.remote_enabled:
            try:
                row = self.remote.insert(saved.to_row())
                if row.get("id") is not None:
                    saved = saved.model_copy(update={"id": row["id"]})
            except PersistenceFailure as e:
                logger.warning("Remote save failed, keeping registration locally: %s", e)
                failure = e

        local = self._load_local()
        local.append(saved)
        self._save_local(local)
        return saved, failure

    def list_registrations(self) -> list[Participant]:
        """
        Load every on-site registration.

        With a remote store this is the remote table newest first, followed by
        any local records the remote has never seen (saved while it was down).
        If the remote query fails, the local snapshot is returned instead.
        """
        local = self._load_local()
        if not self.remote_enabled:
            return local

        try:
            remote = records_to_participants(self.remote.select_ordered())
        except PersistenceFailure as e:
            logger.warning("Remote query failed, using local registrations: %s", e)
            return local

        remote_ids = {p.id for p in remote}
        merged = remote + [p for p in local if p.id not in remote_ids]
        self._save_local(merged)
        return merged

    def update_attendance_flag(self, participant_id, field: str, timestamp: str) -> None:
        """
        Mirror a check-in or check-out to the remote store, fire-and-forget.

        The write is queued on the mirror worker and this call returns at once,
        so a slow or unreachable remote never holds up the check-in table.
        Failures are logged and never raised. Spreadsheet participants have no
        remote row, so they are not mirrored.

        Args:
            participant_id: Participant identifier.
            field (str): "checked_in" or "checked_out".
            timestamp (str): ISO-8601 time of the change.
        """
        if field not in FLAG_TIME_COLUMNS:
            raise ValueError(f"Unknown attendance flag: {field}")
        if not self.remote_enabled:
            return
        if str(participant_id).startswith(ID_PREFIX):
            logger.debug("Not mirroring %s for spreadsheet row %s", field, participant_id)
            return

        self.mirror.submit(participant_id, field, timestamp)

    def flush(self) -> None:
        """Wait for every queued attendance mirror to finish."""
        self.mirror.flush()

    def _mirror(self, participant_id, field: str, timestamp: str) -> None:
        try:
            self._mirror_flag(participant_id, field, timestamp)
        except MirrorFailure as e:
            logger.error("Could not mirror %s for %s: %s", field, participant_id, e)

    def _mirror_flag(self, participant_id, field: str, timestamp: str) -> None:
        try:
            self.remote.update(
                participant_id, {field: True, FLAG_TIME_COLUMNS[field]: timestamp}
            )
        except PersistenceFailure as e:
            raise MirrorFailure(str(e)) from e
