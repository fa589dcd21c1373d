"""Form snapshot and note draft models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from soapnote.billing.aggregator import BillingSummary
from soapnote.billing.cpt_interpreter import (
    CptEntry,
    CptSelection,
    CptSource,
    FreeTextCptSource,
    SelectionCptSource,
)
from soapnote.config import get_settings


class NoteForm(BaseModel):
    """Everything the clinician entered, captured at generation time."""

    model_config = ConfigDict(str_strip_whitespace=True)

    child_name: str = ""
    date: str = ""
    therapist: str = ""
    duration: Optional[int] = Field(None, ge=0, description="Documented session length, minutes")

    # ICD-10: free text blob, or the checked boxes
    icd: str = ""
    icd_selected: Optional[list[str]] = None

    # CPT: free text blob, or the checkbox + units picker
    cpt: str = ""
    cpt_items: Optional[list[CptSelection]] = None

    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""

    @field_validator("duration", mode="before")
    @classmethod
    def _empty_duration(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def blank(cls) -> "NoteForm":
        """A cleared form, with the session length reset to the default."""
        return cls(duration=get_settings().default_session_minutes)

    def cpt_source(self) -> CptSource:
        if self.cpt_items is not None:
            return SelectionCptSource(self.cpt_items)
        return FreeTextCptSource(self.cpt)


class NoteDraft(BaseModel):
    """Flat snapshot of one note, ready to render."""

    model_config = ConfigDict(frozen=True)

    child_name: str = ""
    date: str = ""
    therapist: str = ""
    duration: Optional[int] = None

    icd_codes: list[str] = Field(default_factory=list)
    billing: BillingSummary = Field(default_factory=BillingSummary)

    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""

    @property
    def icd_pretty(self) -> str:
        return ", ".join(self.icd_codes)

    @property
    def cpt_entries(self) -> list[CptEntry]:
        return self.billing.entries

    @property
    def soap(self) -> dict[str, str]:
        return {
            "subjective": self.subjective,
            "objective": self.objective,
            "assessment": self.assessment,
            "plan": self.plan,
        }
