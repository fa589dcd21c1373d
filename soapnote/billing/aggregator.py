"""Billing time aggregation.

Total treatment time is the sum of entry minutes. When nothing billable
was interpreted, the clinician's documented session length stands in for
the total. Units are always ceil(total_minutes / 15):

  0 min       = 0 units
  1-15 min    = 1 unit
  16-30 min   = 2 units
  31-45 min   = 3 units
  (pattern: each additional unit = +15 min)
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from soapnote.billing.cpt_interpreter import MINUTES_PER_UNIT, CptEntry

logger = logging.getLogger(__name__)


class BillingSummary(BaseModel):
    """Totals derived from one set of interpreted entries."""

    entries: list[CptEntry] = Field(default_factory=list)
    total_minutes: int = Field(default=0, ge=0)
    total_units: int = Field(default=0, ge=0)

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    @property
    def parsed_count(self) -> int:
        return sum(1 for e in self.entries if e.is_parsed)

    @property
    def unparsed_count(self) -> int:
        return self.entry_count - self.parsed_count

    def status_line(self) -> str:
        """One-line summary shown next to the generated note."""
        return (
            f"CPT entries: {self.entry_count} (parsed: {self.parsed_count}). "
            f"Calculated total: {self.total_minutes} min — {self.total_units} unit(s)."
        )


def minutes_to_units(minutes: int) -> int:
    """Smallest unit count covering ``minutes``; exact multiples of 15 do not round up."""
    if minutes <= 0:
        return 0
    return -(-minutes // MINUTES_PER_UNIT)


def summarize_billing(
    entries: list[CptEntry],
    fallback_minutes: Optional[int] = None,
) -> BillingSummary:
    """Aggregate entries into total minutes and units.

    Args:
        entries: Interpreted CPT entries, in input order.
        fallback_minutes: Documented session length, used only when the
            entries add up to zero minutes.

    Returns:
        BillingSummary with the entries and their totals.
    """
    total_minutes = sum(e.minutes for e in entries)

    if total_minutes == 0 and fallback_minutes:
        logger.info(
            "No billable CPT minutes in %d entries; using documented duration of %d min",
            len(entries),
            fallback_minutes,
        )
        total_minutes = fallback_minutes

    return BillingSummary(
        entries=list(entries),
        total_minutes=total_minutes,
        total_units=minutes_to_units(total_minutes),
    )


def reconcile_duration(duration: Optional[int], summary: BillingSummary) -> Optional[int]:
    """Session duration to show back on the form after a generation.

    An empty or zero duration takes the calculated total; a documented
    duration is never overwritten.
    """
    if summary.total_minutes and not duration:
        return summary.total_minutes
    return duration
