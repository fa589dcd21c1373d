"""Export module: text and PDF renderings of a composed note."""

from soapnote.export.outputs import NoteOutput, PdfNoteOutput, TextNoteOutput, get_output
from soapnote.export.pdf_generator import build_note_pdf, generate_note_pdf, pdf_filename

__all__ = [
    "NoteOutput",
    "PdfNoteOutput",
    "TextNoteOutput",
    "get_output",
    "build_note_pdf",
    "generate_note_pdf",
    "pdf_filename",
]
