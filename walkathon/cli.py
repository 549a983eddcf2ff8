from pathlib import Path

import click
import questionary

from walkathon.app import load_walkathon, main
from walkathon.config import load_config
from walkathon.donation import donation_message
from walkathon.errors import (
    ConfigError,
    DonationError,
    RegistrationError,
    SyncInProgressError,
)
from walkathon.logs import setup_logging
from walkathon.registration import Registrar, RegistrationForm

NEW_REGISTRATION = "New walk-up registration"
WAIVER_TEXT = (
    "I voluntarily participate in this walkathon, understand it involves physical "
    "activity, and release the organizers from liability for injury or loss."
)


def load_config_option(ctx, param, value):
    try:
        return load_config(value)
    except ConfigError as e:
        raise click.BadParameter(str(e))


def _label(walkathon, p) -> str:
    contact = p.email or p.phone or "no contact"
    return f"{p.full_name} <{contact}> [{walkathon.status(p).value}] #{p.id}"


def _choose_participant(walkathon, participants, prompt):
    """Autocomplete over participants; returns None when cancelled or unmatched."""
    if not participants:
        click.echo("\n  Nobody to choose from.")
        return None
    labels = {_label(walkathon, p): p for p in participants}
    answer = questionary.autocomplete(
        prompt,
        choices=list(labels),
        qmark="",
        ignore_case=True,
        match_middle=True,
    ).ask()
    if answer is None:
        return None
    if answer not in labels:
        click.echo(f"\n  No participant matches {answer!r}.")
        return None
    return labels[answer]


def _ask_text(prompt, default=""):
    return questionary.text(prompt, default=default or "", qmark="").ask() or ""


def run_registration(walkathon):
    pre_registered = {
        _label(walkathon, p): p for p in walkathon.pre_registered
    }
    choice = questionary.autocomplete(
        "\nPre-registered as (or choose new):",
        choices=[NEW_REGISTRATION, *pre_registered],
        qmark="",
        ignore_case=True,
        match_middle=True,
    ).ask()
    if choice is None:
        return

    selected = pre_registered.get(choice)
    form = Registrar.prefill(selected) if selected else RegistrationForm()

    form.first_name = _ask_text("First name:", form.first_name)
    form.last_name = _ask_text("Last name:", form.last_name)
    form.email = _ask_text("Email:", form.email)
    form.phone = _ask_text("Phone:", form.phone)
    form.emergency_contact = _ask_text("Emergency contact:")
    form.emergency_phone = _ask_text("Emergency phone:")
    form.additional_party = _ask_text("Additional party members:")

    click.echo(f"\n  Waiver: {WAIVER_TEXT}\n")
    form.waiver_signed = bool(
        questionary.confirm("I have read and agree to the waiver", qmark="").ask()
    )
    form.signature = _ask_text("Signature (type full name):")

    try:
        outcome = walkathon.register(
            form, selected_id=selected.id if selected else None
        )
    except RegistrationError as e:
        click.echo(f"\n  {e}")
        return

    click.echo(f"\n  Registration completed for {outcome.participant.full_name}!")
    if outcome.advisory:
        click.echo(f"  {outcome.advisory}")
    elif outcome.email_sent:
        click.echo("  A confirmation email is on its way.")


def run_check_in(walkathon):
    waiting = [
        p for p in walkathon.all_participants()
        if not walkathon.tracker.is_checked_in(p.id)
    ]
    participant = _choose_participant(walkathon, waiting, "\nCheck in:")
    if participant:
        walkathon.tracker.check_in(participant.id)
        click.echo(f"\n  {participant.full_name} checked in.")


def run_check_out(walkathon):
    walking = [
        p for p in walkathon.all_participants()
        if not walkathon.tracker.is_checked_out(p.id)
    ]
    participant = _choose_participant(walkathon, walking, "\nCheck out:")
    if participant:
        walkathon.tracker.check_out(participant.id)
        click.echo(f"\n  {participant.full_name} completed the walk.")


def run_search(walkathon):
    query = _ask_text("\nSearch name, email, or phone:")
    matches = walkathon.search(query)
    click.echo(f"\n  {len(matches)} match(es)\n")
    for p in matches:
        click.echo(f"  - {_label(walkathon, p)}")


def run_dashboard(walkathon):
    syncer = walkathon.syncer
    click.echo("\n  Dashboard")
    click.echo("  ---------")
    for label, count in walkathon.summary().items():
        click.echo(f"  {label.replace('_', ' ').rjust(15)}: {count}")
    outcome = syncer.outcome.value if syncer.outcome else "not synced"
    click.echo(f"\n  Pre-registration source: {outcome}")
    click.echo(f"  Last synced: {syncer.last_sync_time or 'never'}")


def run_sync(walkathon):
    try:
        participants, outcome = walkathon.syncer.sync()
    except SyncInProgressError as e:
        click.echo(f"\n  {e}")
        return
    click.echo(f"\n  {len(participants)} pre-registered participant(s) ({outcome.value})")


def run_export(walkathon):
    paths = walkathon.export()
    for kind, path in paths.items():
        click.echo(f"\n  {kind.upper()} saved to {path}")


def run_donation(walkathon):
    amount = _ask_text("\nDonation amount ($):")
    try:
        click.echo(f"\n{donation_message(amount, walkathon.config)}")
    except DonationError as e:
        click.echo(f"\n  {e}")


ACTIONS = {
    "Sync pre-registration list": run_sync,
    "Register a participant": run_registration,
    "Check in a participant": run_check_in,
    "Check out a participant": run_check_out,
    "Search participants": run_search,
    "Show dashboard": run_dashboard,
    "Export data": run_export,
    "Make a donation": run_donation,
}


@click.command(context_settings={"max_content_width": 120})
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    callback=load_config_option,
    help="Path to walkathon configuration file.",
)
@click.option(
    "--interactive/--no-interactive",
    default=True,
    help="Run the check-in menu, or just sync and export.",
)
@click.option(
    "--export-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where to write exports (overrides the config file).",
)
@click.option("--verbose", is_flag=True, help="Show debug logging.")
def cli(config, interactive: bool, export_dir: Path | None, verbose: bool):

    setup_logging(verbose)
    if export_dir is not None:
        config.export_dir = export_dir
    walkathon = load_walkathon(config)

    if not interactive:
        main(walkathon, echo=click.echo)
        return

    participants, outcome = walkathon.startup()
    click.echo(f"\n{config.event.name}")
    click.echo(f"\n  {len(participants)} pre-registered participant(s) ({outcome.value})")

    while True:

        click.echo("\n---")

        choice = questionary.select(
            "\nAction:",
            choices=[*ACTIONS, "Quit"],
            qmark="",
            instruction=" ",
        ).ask()

        if choice is None or choice == "Quit":
            if walkathon.gateway.mirror.pending:
                click.echo("\n  Finishing remote attendance updates...")
            walkathon.gateway.flush()
            click.echo("\nProgram terminated.\n")
            return

        ACTIONS[choice](walkathon)


if __name__ == "__main__":
    cli()
