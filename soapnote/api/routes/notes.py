"""Note endpoints: generation and text/PDF export."""

from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from soapnote.billing.aggregator import reconcile_duration
from soapnote.billing.cpt_interpreter import CptEntry
from soapnote.compose.composer import compose_note
from soapnote.export.outputs import NoteOutput, PdfNoteOutput, TextNoteOutput
from soapnote.models.note import NoteForm

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


class NoteGenerationResponse(BaseModel):
    note: str
    cpt_entries: list[CptEntry]
    total_minutes: int
    total_units: int
    icd_pretty: str
    status: str
    duration: Optional[int] = None


def _safe_filename(raw: str) -> str:
    """Sanitize a string for use in Content-Disposition filename."""
    return re.sub(r'[^a-zA-Z0-9_\-.]', '_', raw)


def _export(form: NoteForm, output: NoteOutput) -> Response:
    note = compose_note(form)
    try:
        content = output.render(note)
    except Exception:
        logger.exception("%s generation failed", output.label)
        raise HTTPException(status_code=500, detail=f"{output.label} generation failed")

    filename = _safe_filename(output.filename(note.draft))
    return Response(
        content=content,
        media_type=output.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/template", response_model=NoteForm)
async def note_template() -> NoteForm:
    """A cleared form with default values."""
    return NoteForm.blank()


@router.post("/generate", response_model=NoteGenerationResponse)
async def generate_note(form: NoteForm) -> NoteGenerationResponse:
    """Compose the note text and billing totals from a form snapshot."""
    note = compose_note(form)
    draft = note.draft
    billing = draft.billing

    logger.info(
        "Generated note: %d CPT entries, %d min, %d units",
        billing.entry_count,
        billing.total_minutes,
        billing.total_units,
    )

    return NoteGenerationResponse(
        note=note.text,
        cpt_entries=billing.entries,
        total_minutes=billing.total_minutes,
        total_units=billing.total_units,
        icd_pretty=draft.icd_pretty,
        status=billing.status_line(),
        duration=reconcile_duration(form.duration, billing),
    )


@router.post("/export/pdf")
async def export_note_pdf(form: NoteForm) -> Response:
    """Render the note as a downloadable PDF."""
    return _export(form, PdfNoteOutput())


@router.post("/export/text")
async def export_note_text(form: NoteForm) -> Response:
    """Render the note as a downloadable text file."""
    return _export(form, TextNoteOutput())
