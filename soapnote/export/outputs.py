"""Output adapters: the same composed note, printed as text or paginated as PDF."""

from __future__ import annotations

from abc import ABC, abstractmethod

from soapnote.compose.composer import ComposedNote
from soapnote.export.pdf_generator import filename_stem, generate_note_pdf, pdf_filename
from soapnote.models.note import NoteDraft


class NoteOutput(ABC):
    """Renders a composed note into a downloadable document."""

    label: str = "Note"
    media_type: str = "application/octet-stream"

    @abstractmethod
    def filename(self, draft: NoteDraft) -> str:
        """File name for the rendered note."""

    @abstractmethod
    def render(self, note: ComposedNote) -> bytes:
        """Render the note to document bytes."""


class TextNoteOutput(NoteOutput):
    """Plain text note, as shown on screen and printed."""

    label = "Text"
    media_type = "text/plain; charset=utf-8"

    def filename(self, draft: NoteDraft) -> str:
        return f"{filename_stem(draft.child_name)}_SOAP_Note.txt"

    def render(self, note: ComposedNote) -> bytes:
        return (note.text + "\n").encode("utf-8")


class PdfNoteOutput(NoteOutput):
    """Paginated letter-size PDF."""

    label = "PDF"
    media_type = "application/pdf"

    def __init__(self, title: str | None = None):
        self.title = title

    def filename(self, draft: NoteDraft) -> str:
        return pdf_filename(draft.child_name)

    def render(self, note: ComposedNote) -> bytes:
        return generate_note_pdf(note.draft, title=self.title)


OUTPUTS: dict[str, type[NoteOutput]] = {
    "text": TextNoteOutput,
    "pdf": PdfNoteOutput,
}


def get_output(kind: str) -> NoteOutput:
    try:
        return OUTPUTS[kind]()
    except KeyError:
        raise ValueError(f"Unknown output format: {kind}. Use one of: {', '.join(OUTPUTS)}")
