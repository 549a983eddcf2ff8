"""Turns the pre-registration spreadsheet's CSV export into participants."""

import logging

from walkathon.errors import EmptyDatasetError
from walkathon.participant import Participant, Provenance

logger = logging.getLogger(__name__)

ID_PREFIX = "gs_"

# spreadsheet header (lower-cased) -> Participant field
HEADER_FIELDS = {
    "first name": "first_name",
    "firstname": "first_name",
    "last name": "last_name",
    "lastname": "last_name",
    "email": "email",
    "email address": "email",
    "phone": "phone",
    "phone number": "phone",
    "mobile": "phone",
}
MAPPED_FIELDS = frozenset(HEADER_FIELDS.values())


def clean_cell(cell: str) -> str:
    """Trims whitespace and removes every double quote from a cell."""
    return cell.strip().replace('"', "")


def split_row(line: str) -> list[str]:
    """
    Splits one CSV line into cleaned cells.

    There is no handling of quoted commas: a value such as `"Patel, Jr."`
    becomes two cells and shifts every column after it.

    Args:
        line (str): A single line of CSV text.

    Returns:
        list[str]: Cells with whitespace trimmed and double quotes removed.
    """
    return [clean_cell(cell) for cell in line.split(",")]


def map_header(header: str) -> str:
    """
    Maps a spreadsheet header to a Participant field name.

    Unrecognized headers are returned with all whitespace removed so they can be
    kept as pass-through columns in `Participant.extra`.
    """
    key = header.lower()
    if key in HEADER_FIELDS:
        return HEADER_FIELDS[key]
    return "".join(header.split())


def normalize(raw_text: str) -> list[Participant]:
    """
    Parses CSV text (first row = headers) into external participants.

    Rows with fewer cells than headers, rows where every cell is blank, and
    rows without both a first and last name are skipped without error.

    Args:
        raw_text (str): CSV payload from the spreadsheet.

    Returns:
        list[Participant]: Valid rows, tagged `external_source`, with IDs
        `gs_<line index>`.

    Raises:
        EmptyDatasetError: If there is no data line below the header.
    """
    lines = [line for line in raw_text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise EmptyDatasetError(
            f"Expected a header line and at least one data line, got {len(lines)} line(s)"
        )

    headers = [clean_cell(h).lower() for h in lines[0].split(",")]
    fields = [map_header(h) for h in headers]

    participants = []
    skipped = 0
    for i, line in enumerate(lines[1:], start=1):
        values = split_row(line)
        if len(values) < len(headers) or not any(values):
            skipped += 1
            continue

        known = {}
        extra = {}
        for field, value in zip(fields, values):
            if field in MAPPED_FIELDS:
                known[field] = value
            else:
                extra[field] = value

        participant = Participant(
            id=f"{ID_PREFIX}{i}",
            source=Provenance.EXTERNAL_SOURCE,
            extra=extra,
            **known,
        )
        if not participant.is_valid:
            skipped += 1
            continue
        participants.append(participant)

    logger.debug(
        "Normalized %d participant(s) from %d data line(s), %d skipped",
        len(participants),
        len(lines) - 1,
        skipped,
    )
    return participants
