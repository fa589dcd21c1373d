"""CPT interpretation endpoints: live recalculation as the form changes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from soapnote.billing.aggregator import BillingSummary, summarize_billing
from soapnote.billing.cpt_interpreter import (
    CptEntry,
    CptSelection,
    FreeTextCptSource,
    SelectionCptSource,
    toggle_selection,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cpt", tags=["cpt"])


class InterpretRequest(BaseModel):
    text: str = ""
    items: Optional[list[CptSelection]] = None
    fallback_minutes: Optional[int] = Field(None, ge=0)


class InterpretResponse(BaseModel):
    entries: list[CptEntry]
    total_minutes: int
    total_units: int
    entry_count: int
    parsed_count: int
    unparsed_count: int
    status: str

    @classmethod
    def from_summary(cls, summary: BillingSummary) -> "InterpretResponse":
        return cls(
            entries=summary.entries,
            total_minutes=summary.total_minutes,
            total_units=summary.total_units,
            entry_count=summary.entry_count,
            parsed_count=summary.parsed_count,
            unparsed_count=summary.unparsed_count,
            status=summary.status_line(),
        )


class ToggleRequest(BaseModel):
    item: CptSelection
    selected: bool


@router.post("/interpret", response_model=InterpretResponse)
async def interpret_cpt(payload: InterpretRequest) -> InterpretResponse:
    """Interpret CPT text (or picker selections) and return billing totals."""
    if payload.items is not None:
        source = SelectionCptSource(payload.items)
    else:
        source = FreeTextCptSource(payload.text)

    summary = summarize_billing(source.interpret(), fallback_minutes=payload.fallback_minutes)
    logger.debug("Interpreted %d CPT entries (%d unparsed)", summary.entry_count, summary.unparsed_count)
    return InterpretResponse.from_summary(summary)


@router.post("/toggle", response_model=CptSelection)
async def toggle_cpt(payload: ToggleRequest) -> CptSelection:
    """Apply a checkbox change to a picker item."""
    return toggle_selection(payload.item, payload.selected)
