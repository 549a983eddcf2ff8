"""Printable check-in roster for running the sign-in table on paper."""

import logging

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from walkathon import view

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
FONT_NAME_BOLD = "Helvetica-Bold"
FONT_SIZE = 9
CELL_PADDING = 12
# the In/Out columns are blank boxes for a pen; keep them a fixed, tickable width
MARK_COLUMN_WIDTH = 0.45 * inch
HEADERS = ["#", "Name", "Phone", "Source", "Status", "In", "Out"]
SOURCE_LABELS = {
    "external_source": "Pre-registered",
    "on_site_registration": "On site",
    "pre_registered_confirmed": "Confirmed",
}


def generate_roster_pdf(participants, tracker, output_path, title="Check-in Roster"):
    """
    Build a sign-in sheet with one row per participant, sorted by last name.

    Participants who already checked in or out are pre-marked with an "X".

    Args:
        participants (list[Participant]): Merged participant list.
        tracker (AttendanceTracker): Current attendance state.
        output_path: Where to write the PDF.
        title (str): Heading printed on the first page.

    Returns:
        str: Path to the generated PDF.
    """
    pdf_path = str(output_path)
    doc = SimpleDocTemplate(pdf_path, pagesize=letter, topMargin=0.75 * inch)
    available_width = letter[0] - doc.leftMargin - doc.rightMargin

    styles = getSampleStyleSheet()
    arrived = sum(1 for p in participants if tracker.is_checked_in(p.id))
    completed = sum(1 for p in participants if tracker.is_checked_out(p.id))
    subtitle = (
        f"{len(participants)} participants | {arrived} checked in | "
        f"{completed} completed"
    )

    elements = [
        Paragraph(title, styles["Title"]),
        Paragraph(subtitle, styles["Normal"]),
        Spacer(1, 8),
        _build_roster_table(participants, tracker, available_width),
    ]
    doc.build(elements, canvasmaker=NumberedCanvas)
    logger.info("Check-in roster saved to %s", pdf_path)
    return pdf_path


def _build_roster_table(participants, tracker, available_width):
    ordered = sorted(participants, key=lambda p: (p.last_name.lower(), p.first_name.lower()))
    rows = [HEADERS]
    for i, p in enumerate(ordered, start=1):
        rows.append(
            [
                str(i),
                f"{p.last_name}, {p.first_name}",
                p.phone,
                SOURCE_LABELS.get(p.source.value, p.source.value),
                view.status(p, tracker).value,
                "X" if tracker.is_checked_in(p.id) else "",
                "X" if tracker.is_checked_out(p.id) else "",
            ]
        )

    text_width = available_width - 2 * MARK_COLUMN_WIDTH
    col_widths = _compute_scaled_col_widths(
        [row[:-2] for row in rows], FONT_NAME, FONT_SIZE, CELL_PADDING, text_width
    ) + [MARK_COLUMN_WIDTH, MARK_COLUMN_WIDTH]

    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("ALIGN", (-2, 0), (-1, -1), "CENTER"),
                ("FONTNAME", (0, 0), (-1, 0), FONT_NAME_BOLD),
                ("FONTNAME", (0, 1), (-1, -1), FONT_NAME),
                ("FONTSIZE", (0, 0), (-1, -1), FONT_SIZE),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
            ]
        )
    )
    return table


def _compute_scaled_col_widths(data, font_name, font_size, padding, total_width):
    """Scale each column to its widest cell so the table fills `total_width`."""
    max_widths = [0] * len(data[0])
    for row in data:
        for idx, cell in enumerate(row):
            max_widths[idx] = max(max_widths[idx], stringWidth(str(cell), font_name, font_size))
    raw_widths = [width + padding for width in max_widths]
    raw_total = sum(raw_widths)
    return [width * total_width / raw_total for width in raw_widths]


class NumberedCanvas(canvas.Canvas):
    """Canvas subclass that prints 'Page X of Y' in the footer."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.setFont(FONT_NAME, FONT_SIZE)
            self.drawCentredString(
                self._pagesize[0] / 2,
                0.5 * inch,
                f"Page {self.getPageNumber()} of {total}",
            )
            super().showPage()
        super().save()
