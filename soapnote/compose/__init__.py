"""Note composition: form snapshot to draft to printable text."""

from soapnote.compose.composer import (
    ComposedNote,
    build_draft,
    compose_note,
    compose_note_text,
    format_cpt_entry,
)

__all__ = [
    "ComposedNote",
    "build_draft",
    "compose_note",
    "compose_note_text",
    "format_cpt_entry",
]
