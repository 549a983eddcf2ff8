import csv
import io
import json
import logging
from pathlib import Path

from walkathon import view
from walkathon.utils import now_iso, today_stamp

logger = logging.getLogger(__name__)

TABLE_HEADER = [
    "Name",
    "Email",
    "Phone",
    "Emergency Contact",
    "Emergency Phone",
    "Additional Party",
    "Source",
    "Status",
    "Registration Time",
]


def to_snapshot(external, app, tracker, clock=now_iso) -> dict:
    """
    Full point-in-time dump of both collections and both attendance sets.

    Field names match the admin dashboard's JSON export so older exports stay
    comparable.
    """
    checked_in, checked_out = tracker.snapshot()
    counts = view.summary(external, app, tracker)
    return {
        "participants": [p.to_record() for p in app],
        "registeredParticipants": [p.to_record() for p in external],
        "checkedIn": sorted(checked_in, key=str),
        "checkedOut": sorted(checked_out, key=str),
        "exportDate": clock(),
        "totalRegistered": counts["registered"],
        "totalPreRegistered": counts["pre_registered"],
        "totalCheckedIn": counts["checked_in"],
        "totalCompleted": counts["completed"],
    }


def to_table(external, app, tracker) -> str:
    """
    One CSV line per participant, spreadsheet rows first.

    The header line is plain; every data field is quoted, with embedded double
    quotes doubled so a nickname such as `"AJ"` survives the round trip.
    """
    buffer = io.StringIO()
    buffer.write(",".join(TABLE_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for p in view.merge(external, app):
        writer.writerow(
            [
                p.full_name,
                p.email,
                p.phone,
                p.emergency_contact,
                p.emergency_phone,
                p.additional_party,
                p.source.value if p.source else "unknown",
                view.status(p, tracker).value,
                p.registration_time or "",
            ]
        )
    return buffer.getvalue().removesuffix("\n")


def write_exports(external, app, tracker, export_dir, prefix: str) -> dict[str, Path]:
    """
    Write the JSON snapshot and CSV table, named with today's date.

    Args:
        export_dir: Directory to write into (created if missing).
        prefix (str): File name prefix, e.g. "walkathon".

    Returns:
        dict[str, Path]: Paths keyed by "json" and "csv".
    """
    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    date = today_stamp()

    json_path = export_dir / f"{prefix}-data-{date}.json"
    json_path.write_text(
        json.dumps(to_snapshot(external, app, tracker), indent=2), encoding="utf-8"
    )

    csv_path = export_dir / f"{prefix}-participants-{date}.csv"
    csv_path.write_text(to_table(external, app, tracker), encoding="utf-8")

    logger.info("Exported %s and %s", json_path, csv_path)
    return {"json": json_path, "csv": csv_path}
