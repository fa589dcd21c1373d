"""CPT entry interpretation from clinician input.

Turns loosely formatted procedure lines into canonical billing entries.
Accepts lines like:

  97530 x 2
  97535 x 1 unit
  97530, units:2
  97530 (30 min)
  97110

Structured input (a checkbox per code with a units selector) goes through
``interpret_selections`` instead and produces the same entries.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

MINUTES_PER_UNIT = 15

# ── Line patterns, tried in priority order ───────────────────────────────────

_COUNT_RE = re.compile(r"(\d{5}).*?(?<![a-z])[x×]\s*(\d+)", re.IGNORECASE)
_UNITS_RE = re.compile(r"(\d{5}).*units?\s*[:=]?\s*(\d+)", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d{5}).*?\(?\s*(?<!\d)(\d{1,3})\s*min\s*\)?", re.IGNORECASE)
_CODE_RE = re.compile(r"(\d{5})")

_LINE_SPLIT_RE = re.compile(r"\r?\n")


class CptEntry(BaseModel):
    """A single interpreted CPT line."""

    model_config = ConfigDict(frozen=True)

    code: str
    units: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    raw: str = ""

    @model_validator(mode="after")
    def _minutes_match_units(self) -> "CptEntry":
        if self.minutes != self.units * MINUTES_PER_UNIT:
            raise ValueError(
                f"minutes ({self.minutes}) must equal units ({self.units}) x {MINUTES_PER_UNIT}"
            )
        return self

    @classmethod
    def from_units(cls, code: str, units: int, raw: str) -> "CptEntry":
        return cls(code=code, units=units, minutes=units * MINUTES_PER_UNIT, raw=raw)

    @classmethod
    def unparsed(cls, raw: str) -> "CptEntry":
        """Entry for a line with no recognizable code; the line itself is kept as the code."""
        return cls(code=raw, units=0, minutes=0, raw=raw)

    @property
    def is_parsed(self) -> bool:
        return self.units > 0 or self.minutes > 0


class CptSelection(BaseModel):
    """One checkbox-and-selector pair from the structured CPT picker."""

    model_config = ConfigDict(str_strip_whitespace=True)

    code: str
    selected: bool = False
    units: Optional[Union[int, str]] = None


def split_cpt_lines(text: str) -> list[str]:
    """Split a CPT text blob into trimmed, non-empty lines."""
    return [line.strip() for line in _LINE_SPLIT_RE.split(text or "") if line.strip()]


def parse_cpt_line(raw: str) -> CptEntry:
    """Interpret one CPT line.

    Strategies, first match wins:
      1. ``<code> ... x <n>``           -> n units
      2. ``<code> ... units: <n>``      -> n units
      3. ``<code> ... (<m> min)``       -> ceil(m / 15) units
      4. ``<code>``                     -> 1 unit
      5. anything else                  -> unparsed (0 units)

    Minutes are always ``units * 15``; an annotated "20 min" is billed
    and displayed as 2 units / 30 min.
    """
    m = _COUNT_RE.search(raw)
    if m:
        return CptEntry.from_units(m.group(1), int(m.group(2)), raw)

    m = _UNITS_RE.search(raw)
    if m:
        return CptEntry.from_units(m.group(1), int(m.group(2)), raw)

    m = _MINUTES_RE.search(raw)
    if m:
        minutes = int(m.group(2))
        units = -(-minutes // MINUTES_PER_UNIT)
        return CptEntry.from_units(m.group(1), units, raw)

    m = _CODE_RE.search(raw)
    if m:
        return CptEntry.from_units(m.group(1), 1, raw)

    logger.debug("No CPT code found in line %r", raw)
    return CptEntry.unparsed(raw)


def parse_cpt_text(text: str) -> list[CptEntry]:
    """Interpret every line of a free-text CPT blob, preserving order."""
    return [parse_cpt_line(line) for line in split_cpt_lines(text)]


# ── Structured selection ─────────────────────────────────────────────────────


def parse_units_choice(value: Optional[Union[int, str]]) -> int:
    """Read a units selector value; anything unparseable counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        units = int(str(value).strip())
    except ValueError:
        return 0
    return max(units, 0)


def interpret_selections(items: list[CptSelection]) -> list[CptEntry]:
    """Build entries for the selected items only, in picker order."""
    entries: list[CptEntry] = []
    for item in items:
        if not item.selected:
            continue
        units = parse_units_choice(item.units)
        entries.append(CptEntry.from_units(item.code, units, item.code))
    return entries


def toggle_selection(item: CptSelection, selected: bool) -> CptSelection:
    """Apply a checkbox change to an item.

    Checking a box whose selector is empty or zero sets the selector to 1.
    """
    updated = item.model_copy(update={"selected": selected})
    if selected and not item.selected and parse_units_choice(item.units) == 0:
        updated = updated.model_copy(update={"units": 1})
    return updated


# ── Sources ──────────────────────────────────────────────────────────────────


class CptSource(ABC):
    """Where CPT entries for a note come from."""

    @abstractmethod
    def interpret(self) -> list[CptEntry]:
        """Return the interpreted entries in input order."""


class FreeTextCptSource(CptSource):
    """CPT lines typed as free text."""

    def __init__(self, text: str):
        self.text = text

    def interpret(self) -> list[CptEntry]:
        return parse_cpt_text(self.text)


class SelectionCptSource(CptSource):
    """CPT codes picked from a fixed checkbox list."""

    def __init__(self, items: list[CptSelection]):
        self.items = list(items)

    def interpret(self) -> list[CptEntry]:
        return interpret_selections(self.items)
