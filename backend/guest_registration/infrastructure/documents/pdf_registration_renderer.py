"""PDF rendering of a stored guest registration using reportlab.

Layout (A4, 50 pt margins):
    header → submission details → legal notice → guest information →
    accommodation details → consents → uploaded documents → footer

Every timestamp printed comes from the stored record, so rendering the same
record twice yields the same bytes (``invariant=1`` pins the PDF metadata).
"""

import logging
from datetime import datetime, timezone, tzinfo
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from guest_registration.application.interfaces import DocumentRenderer
from guest_registration.domain.entities import ImageData, RegistrationRecord

logger = logging.getLogger(__name__)

MARGIN = 50
LABEL_COLUMN = 120
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
IMAGE_MAX_WIDTH = 200
IMAGE_MAX_HEIGHT = 150

_DATE_FMT = "%Y-%m-%d %H:%M"
_TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"


def _checkbox(checked: bool) -> str:
    # Standard Type 1 Helvetica has no check mark glyph
    return "[x]" if checked else "[ ]"


def _split_lines(value: str, size: float, width: float) -> list[str]:
    """Word-wrap *value*, breaking single words wider than *width* by character."""
    lines: list[str] = []
    for line in simpleSplit(value, FONT, size, width) or [""]:
        while len(line) > 1 and stringWidth(line, FONT, size) > width:
            cut = len(line) - 1
            while cut > 1 and stringWidth(line[:cut], FONT, size) > width:
                cut -= 1
            lines.append(line[:cut])
            line = line[cut:]
        lines.append(line)
    return lines


class _PageCursor:
    """Tracks the current page and vertical position, adding pages on demand."""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf
        self.width, self.height = A4
        self.y = self.height - MARGIN

    def ensure_space(self, required: float) -> None:
        if self.y - required < MARGIN:
            self.pdf.showPage()
            self.y = self.height - MARGIN

    def text(self, value: str, *, x: float = MARGIN, size: float = 10, bold: bool = False) -> None:
        self.pdf.setFont(FONT_BOLD if bold else FONT, size)
        self.pdf.drawString(x, self.y, value)

    def wrapped(
        self,
        value: str,
        *,
        x: float = MARGIN,
        size: float = 10,
        max_width: float | None = None,
    ) -> None:
        """Draw *value* word-wrapped to *max_width*; leaves y on the last line."""
        width = max_width if max_width is not None else self.width - x - MARGIN
        lines = _split_lines(value, size, width)
        for i, line in enumerate(lines):
            if i:
                self.y -= size + 2
                self.ensure_space(size)
            self.text(line, x=x, size=size)

    def move(self, amount: float) -> None:
        self.y -= amount


class PdfRegistrationRenderer(DocumentRenderer):
    """Renders a RegistrationRecord as a printable PDF for compliance records."""

    media_type = "application/pdf"
    file_extension = "pdf"

    def __init__(
        self,
        *,
        title: str = "Guest Registration & Agreement",
        jurisdiction: str = "Republic of South Africa",
        host_name: str = "[Your Business Name]",
        host_address: str = "[Your Business Address]",
        legal_notice: str = "",
        zone: tzinfo | None = None,
        compress: bool = True,
    ):
        self._title = title
        self._jurisdiction = jurisdiction
        self._host_name = host_name
        self._host_address = host_address
        self._legal_notice = legal_notice
        self._zone = zone or timezone.utc
        self._compress = compress

    def render(self, record: RegistrationRecord) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(
            buffer,
            pagesize=A4,
            invariant=1,
            pageCompression=1 if self._compress else 0,
        )
        d = record.data
        pdf.setTitle(f"Guest Registration - {d.full_name}")
        pdf.setSubject(self._title)
        pdf.setKeywords(["guest", "registration", "accommodation", self._jurisdiction.lower()])
        pdf.setCreator("Guest Registration System")
        pdf.setAuthor(self._host_name)

        cursor = _PageCursor(pdf)
        registered = self._format_created(record)

        # Header
        cursor.text(self._title, size=16, bold=True)
        cursor.move(20)
        cursor.text(self._jurisdiction, size=12, bold=True)
        cursor.move(25)

        # Submission details
        cursor.text(f"Submission ID: {record.id}", size=9)
        cursor.move(12)
        cursor.text(f"Registered: {registered}", size=9)
        cursor.move(12)
        cursor.text(f"Host: {self._host_name}", size=9)
        cursor.move(12)
        cursor.text(f"Address: {self._host_address}", size=9)
        cursor.move(20)

        if self._legal_notice:
            cursor.wrapped(self._legal_notice, size=9)
            cursor.move(25)

        self._section(cursor, "GUEST INFORMATION")
        self._field(cursor, "Full Name", d.full_name)
        self._field(cursor, "ID/Passport Number", d.id_or_passport)
        self._field(cursor, "Nationality", d.nationality)
        self._field(cursor, "Residence Status", d.residence_status)
        self._field(cursor, "Home Address", d.home_address)
        self._field(cursor, "Phone Number", d.phone)
        self._field(cursor, "Email Address", d.email)
        cursor.move(10)

        self._section(cursor, "ACCOMMODATION DETAILS")
        self._field(cursor, "Check-in", d.check_in.astimezone(self._zone).strftime(_DATE_FMT))
        self._field(cursor, "Check-out", d.check_out.astimezone(self._zone).strftime(_DATE_FMT))
        self._field(cursor, "Number of Guests", str(d.guests))
        cursor.move(15)

        self._section(cursor, "CONSENTS & ACKNOWLEDGMENTS")
        popia = "Granted" if d.popia_consent else "Not granted"
        refund = "Acknowledged" if d.non_refund_ack else "Not acknowledged"
        cursor.text(f"{_checkbox(d.popia_consent)} POPIA Consent: {popia}")
        cursor.move(14)
        cursor.text(f"{_checkbox(d.non_refund_ack)} Non-Refund Policy: {refund}")
        cursor.move(25)

        cursor.ensure_space(45)
        cursor.text("UPLOADED DOCUMENTS", size=12, bold=True)
        cursor.move(25)
        self._image(cursor, "Selfie Photo", d.selfie)
        self._image(cursor, "ID/Passport Document", d.id_image)
        self._image(cursor, "Digital Signature", d.signature)

        # Footer
        cursor.ensure_space(50)
        cursor.move(20)
        cursor.text("--- End of Registration ---", size=9)
        cursor.move(15)
        cursor.text(f"Registered on {registered}", size=8)

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    # ── Layout helpers ──────────────────────────────────────────────

    def _format_created(self, record: RegistrationRecord) -> str:
        created: datetime = record.created_at_datetime.astimezone(self._zone)
        return created.strftime(_TIMESTAMP_FMT)

    @staticmethod
    def _section(cursor: _PageCursor, heading: str) -> None:
        cursor.ensure_space(45)
        cursor.text(heading, size=12, bold=True)
        cursor.move(20)

    @staticmethod
    def _field(cursor: _PageCursor, label: str, value: str) -> None:
        cursor.ensure_space(30)
        cursor.text(f"{label}:", bold=True)
        cursor.wrapped(
            value,
            x=MARGIN + LABEL_COLUMN,
            max_width=cursor.width - 2 * MARGIN - LABEL_COLUMN,
        )
        cursor.move(16)

    @staticmethod
    def _image(cursor: _PageCursor, label: str, data_url: str) -> None:
        try:
            image = ImageData.parse(data_url)
            reader = ImageReader(BytesIO(image.content))
            src_width, src_height = reader.getSize()
            if not src_width or not src_height:
                raise ValueError("image has no dimensions")
            # full decode here; the header alone does not catch truncated pixel data
            reader.getRGBData()
        except Exception as e:
            logger.warning("Could not embed %s: %s", label, e)
            cursor.ensure_space(20)
            cursor.text(f"{label}: [Image processing failed]")
            cursor.move(20)
            return

        aspect = src_width / src_height
        width = IMAGE_MAX_WIDTH
        height = width / aspect
        if height > IMAGE_MAX_HEIGHT:
            height = IMAGE_MAX_HEIGHT
            width = height * aspect

        cursor.ensure_space(height + 40)
        cursor.text(f"{label}:", bold=True)
        cursor.move(15)
        cursor.pdf.drawImage(
            reader, MARGIN, cursor.y - height, width=width, height=height, mask="auto"
        )
        cursor.move(height + 20)
