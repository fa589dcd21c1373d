"""Data models for SoapNote."""

from soapnote.models.note import NoteDraft, NoteForm

__all__ = [
    "NoteDraft",
    "NoteForm",
]
