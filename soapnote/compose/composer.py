"""SOAP note composition.

Builds a NoteDraft from a form snapshot (CPT interpretation, billing
totals, ICD-10 normalization) and renders the printable text note.
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from soapnote.billing.aggregator import summarize_billing
from soapnote.billing.cpt_interpreter import CptEntry
from soapnote.billing.icd10 import clean_icd10_codes, split_icd10
from soapnote.config import get_settings
from soapnote.models.note import NoteDraft, NoteForm

logger = logging.getLogger(__name__)

BLANK = "________________"
BLANK_DATE = "____/__/__"
BLANK_DURATION = "_____"
SIGNATURE_LINE = "_________________________"

SOAP_SECTIONS = [
    ("S", "Subjective", "subjective"),
    ("O", "Objective", "objective"),
    ("A", "Assessment", "assessment"),
    ("P", "Plan", "plan"),
]


class ComposedNote(BaseModel):
    """Rendered note text together with the draft it came from."""

    text: str
    draft: NoteDraft


def build_draft(form: NoteForm) -> NoteDraft:
    """Interpret and aggregate a form snapshot into a draft."""
    entries = form.cpt_source().interpret()
    billing = summarize_billing(entries, fallback_minutes=form.duration)

    if form.icd_selected is not None:
        icd_codes = clean_icd10_codes(form.icd_selected)
    else:
        icd_codes = split_icd10(form.icd)

    if billing.unparsed_count:
        logger.debug("%d of %d CPT entries unparsed", billing.unparsed_count, billing.entry_count)

    return NoteDraft(
        child_name=form.child_name,
        date=form.date,
        therapist=form.therapist,
        duration=form.duration,
        icd_codes=icd_codes,
        billing=billing,
        subjective=form.subjective,
        objective=form.objective,
        assessment=form.assessment,
        plan=form.plan,
    )


def format_cpt_entry(entry: CptEntry) -> str:
    if entry.units > 0:
        return f"{entry.code} x {entry.units} unit(s) ({entry.minutes} min)"
    return f"{entry.raw} (unparsed)"


def compose_note_text(draft: NoteDraft, title: Optional[str] = None) -> str:
    """Render the printable note. Blank fields become underscore placeholders."""
    title = title or get_settings().note_title
    billing = draft.billing
    date = draft.date or BLANK_DATE
    duration = BLANK_DURATION if draft.duration is None else draft.duration

    cpt_lines = [format_cpt_entry(e) for e in billing.entries]

    lines = [
        title,
        f"Child: {draft.child_name or BLANK}",
        f"Date: {date}",
        f"Therapist: {draft.therapist or BLANK}",
        f"Session Duration (documented): {duration} min",
        "",
        "ICD-10 Codes:",
        draft.icd_pretty or BLANK,
        "",
        "CPT Codes (calculated):",
        "\n".join(cpt_lines) if cpt_lines else BLANK,
        f"Total billed time (calculated): {billing.total_minutes} min "
        f"({billing.total_units} unit(s) x 15 min)",
    ]

    for letter, label, field in SOAP_SECTIONS:
        lines += [
            "",
            f"{letter} — {label}:",
            getattr(draft, field) or BLANK,
        ]

    lines += [
        "",
        f"Therapist Signature: {SIGNATURE_LINE}      Date: {date}",
    ]
    return "\n".join(lines)


def compose_note(form: NoteForm, title: Optional[str] = None) -> ComposedNote:
    """Full generation cycle: form snapshot to rendered text."""
    draft = build_draft(form)
    return ComposedNote(text=compose_note_text(draft, title=title), draft=draft)
