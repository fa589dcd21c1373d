"""fpdf2-based SOAP note PDF renderer.

Lays a NoteDraft out on letter-size pages, measured in points.
No disk I/O; returns bytes directly via FPDF.output().
"""

from __future__ import annotations

import re
from typing import Optional

from fpdf import FPDF
from fpdf.enums import MethodReturnValue

from soapnote.compose.composer import SOAP_SECTIONS, format_cpt_entry
from soapnote.config import get_settings
from soapnote.models.note import NoteDraft

TITLE_SIZE = 16
BODY_SIZE = 11
LEFT_MARGIN = 40
TOP_MARGIN = 50
LINE_HEIGHT = 14
BOTTOM_LIMIT = 80  # new page once the cursor is this close to the bottom edge

MISSING = "N/A"


class SoapNotePDF(FPDF):
    """Letter-size PDF with a manual line cursor and page-number footer."""

    def __init__(self):
        super().__init__(orientation="P", unit="pt", format="letter")
        self.set_margins(LEFT_MARGIN, TOP_MARGIN, LEFT_MARGIN)
        self.set_auto_page_break(auto=False)

    @property
    def content_width(self) -> float:
        return self.w - 2 * LEFT_MARGIN

    def footer(self):
        self.set_y(-30)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(128, 128, 128)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")
        self.set_text_color(0, 0, 0)

    def ensure_room(self) -> None:
        if self.get_y() > self.h - BOTTOM_LIMIT:
            self.add_page()

    def write_line(self, text: str, style: str = "", size: int = BODY_SIZE, height: float = LINE_HEIGHT) -> None:
        self.ensure_room()
        self.set_font("Helvetica", style, size)
        self.set_x(LEFT_MARGIN)
        self.cell(self.content_width, height, _sanitize(text), new_x="LMARGIN", new_y="NEXT")

    def write_wrapped(self, text: str) -> None:
        """Word-wrap body text to the content width, one cursor step per line."""
        self.set_font("Helvetica", "", BODY_SIZE)
        lines = self.multi_cell(
            self.content_width,
            LINE_HEIGHT,
            _sanitize(text),
            dry_run=True,
            output=MethodReturnValue.LINES,
        )
        for line in lines:
            self.write_line(line)

    def gap(self, height: float = LINE_HEIGHT / 2) -> None:
        self.ln(height)


def build_note_pdf(draft: NoteDraft, title: Optional[str] = None) -> SoapNotePDF:
    """Lay out the note and return the unrendered document."""
    title = title or get_settings().note_title
    billing = draft.billing

    pdf = SoapNotePDF()
    pdf.alias_nb_pages()
    pdf.add_page()

    pdf.write_line(title, style="B", size=TITLE_SIZE, height=TITLE_SIZE + 6)
    pdf.gap()

    # --- Identifying header ---
    pdf.write_line(f"Child: {draft.child_name or MISSING}")
    pdf.write_line(f"Date: {draft.date or MISSING}")
    pdf.write_line(f"Therapist: {draft.therapist or MISSING}")
    pdf.write_line(f"Session Duration (documented): {duration_label(draft.duration)}")
    pdf.gap()

    # --- Codes ---
    pdf.write_line("ICD-10 Codes:", style="B")
    pdf.write_wrapped(draft.icd_pretty or MISSING)
    pdf.gap()

    pdf.write_line("CPT Codes (calculated):", style="B")
    if billing.entries:
        for entry in billing.entries:
            pdf.write_wrapped(format_cpt_entry(entry))
    else:
        pdf.write_wrapped(MISSING)
    pdf.write_line(
        f"Total billed time (calculated): {billing.total_minutes} min "
        f"({billing.total_units} unit(s) x 15 min)"
    )
    pdf.gap()

    # --- SOAP sections ---
    for letter, label, field in SOAP_SECTIONS:
        pdf.write_line(f"{letter} - {label}:", style="B")
        pdf.write_wrapped(getattr(draft, field) or MISSING)
        pdf.gap()

    # --- Signature line ---
    pdf.gap(LINE_HEIGHT)
    pdf.write_line(f"Therapist Signature: _________________________      Date: {draft.date or MISSING}")

    return pdf


def generate_note_pdf(draft: NoteDraft, title: Optional[str] = None) -> bytes:
    """Generate a SOAP note PDF and return raw bytes."""
    return bytes(build_note_pdf(draft, title=title).output())


def pdf_filename(child_name: str) -> str:
    """``"Jane  Doe"`` -> ``"Jane_Doe_SOAP_Note.pdf"``."""
    return f"{filename_stem(child_name)}_SOAP_Note.pdf"


# --- Helpers ---

def duration_label(duration: Optional[int]) -> str:
    """A documented 0 prints as ``0 min``; only a missing value is N/A."""
    return MISSING if duration is None else f"{duration} min"


def filename_stem(child_name: str) -> str:
    return re.sub(r"\s+", "_", (child_name or "").strip()) or "Child"


def _sanitize(text: str) -> str:
    """Replace Unicode characters that Helvetica (latin-1) can't render."""
    text = (
        text
        .replace("—", "-")   # em-dash
        .replace("–", "-")   # en-dash
        .replace("‘", "'")
        .replace("’", "'")
        .replace("“", '"')
        .replace("”", '"')
        .replace("•", "-")   # bullet
    )
    return text.encode("latin-1", "replace").decode("latin-1")
