import logging
from pathlib import Path

from walkathon import export, view
from walkathon.attendance import AttendanceTracker
from walkathon.gateway import PersistenceGateway
from walkathon.notify import ConfirmationEmailer
from walkathon.registration import Registrar
from walkathon.remote import SupabaseStore
from walkathon.roster import generate_roster_pdf
from walkathon.storage import LocalStore
from walkathon.sync import SyncController
from walkathon.tiers import build_tiers
from walkathon.utils import slugify, today_stamp

logger = logging.getLogger(__name__)


class Walkathon:
    """
    The check-in station: every service object, built once and wired together.

    Attributes:
        config (Config): Station configuration.
        store (LocalStore): Durable local storage.
        gateway (PersistenceGateway): Registration persistence.
        tracker (AttendanceTracker): Check-in/check-out state.
        syncer (SyncController): Pre-registration list sync.
        registrar (Registrar): Registration workflow.
        registrations (list[Participant]): On-site registrations (append-only).
    """

    def __init__(self, config, store, gateway, tracker, syncer, registrar):
        self.config = config
        self.store = store
        self.gateway = gateway
        self.tracker = tracker
        self.syncer = syncer
        self.registrar = registrar
        self.registrations = []

    def __repr__(self):
        return f"{self.config.name}"

    @property
    def pre_registered(self):
        return self.syncer.participants

    def startup(self):
        """Load registrations, then sync the pre-registration list."""
        self.registrations = self.gateway.list_registrations()
        return self.syncer.sync()

    def register(self, form, selected_id=None):
        outcome = self.registrar.register(form, selected_id=selected_id)
        self.registrations.append(outcome.participant)
        return outcome

    def all_participants(self):
        return view.merge(self.pre_registered, self.registrations)

    def search(self, query: str):
        return view.filter_participants(self.all_participants(), query)

    def find(self, participant_id):
        for p in self.all_participants():
            if p.id == participant_id:
                return p
        raise ValueError(f"Participant ID {participant_id} not found")

    def status(self, participant):
        return view.status(participant, self.tracker)

    def summary(self) -> dict:
        return view.summary(self.pre_registered, self.registrations, self.tracker)

    def export(self, export_dir=None, roster=True) -> dict[str, Path]:
        """
        Write the JSON snapshot, the CSV table, and (optionally) the PDF roster.

        Returns:
            dict[str, Path]: Paths keyed by "json", "csv", and "pdf".
        """
        export_dir = Path(export_dir or self.config.export_dir)
        prefix = slugify(self.config.name)
        paths = export.write_exports(
            self.pre_registered, self.registrations, self.tracker, export_dir, prefix
        )
        if roster:
            pdf_path = export_dir / f"{prefix}-roster-{today_stamp()}.pdf"
            generate_roster_pdf(
                self.all_participants(),
                self.tracker,
                pdf_path,
                title=f"{self.config.event.name} Check-in Roster",
            )
            paths["pdf"] = pdf_path
        return paths


def load_walkathon(config, http_client=None) -> Walkathon:
    """Build a Walkathon from configuration.

    The remote store is chosen once here: Supabase when both its URL and key
    are configured, otherwise local storage only.

    Args:
        config: Validated Config.
        http_client: Optional shared httpx.Client, mainly for tests.

    Returns:
        Walkathon: The wired station (not yet started).
    """
    store = LocalStore(config.storage_dir)

    remote = None
    if config.remote_configured:
        remote = SupabaseStore(
            config.supabase_url,
            config.supabase_key,
            table=config.supabase_table,
            client=http_client,
        )
    gateway = PersistenceGateway(store, remote=remote)
    tracker = AttendanceTracker(store, gateway=gateway)
    syncer = SyncController(build_tiers(config, store, http_client), store)
    registrar = Registrar(gateway, ConfirmationEmailer(config, client=http_client))

    logger.debug("Loaded %s with %r", config.name, gateway)
    return Walkathon(config, store, gateway, tracker, syncer, registrar)


def main(walkathon: Walkathon, export_dir=None, echo=print):
    """Start the station, report the sync outcome and counts, and export.

    Args:
        walkathon: Station built by `load_walkathon`.
        export_dir: Optional export directory override.
        echo: Output function for progress lines.

    Returns:
        dict[str, Path]: Paths of the exported files.
    """
    participants, outcome = walkathon.startup()
    echo(f"\n  Pre-registration list: {len(participants)} participant(s) ({outcome.value})")
    if walkathon.syncer.last_sync_time:
        echo(f"  Last synced: {walkathon.syncer.last_sync_time}")

    echo("\n  Dashboard")
    echo("  ---------")
    for label, count in walkathon.summary().items():
        echo(f"  {label.replace('_', ' ').rjust(15)}: {count}")

    paths = walkathon.export(export_dir)
    echo()
    for kind, path in paths.items():
        echo(f"  {kind.upper()} saved to {path}")
    return paths
