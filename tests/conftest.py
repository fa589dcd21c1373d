"""Pytest configuration and fixtures."""

import pytest

from soapnote.billing.cpt_interpreter import CptSelection
from soapnote.config import get_settings
from soapnote.models.note import NoteForm


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; clear between tests so env overrides don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_cpt_text():
    return "97530 x 2\n97112, units:1\nunrecognized text"


@pytest.fixture
def sample_form(sample_cpt_text):
    """A fully filled-in free-text form."""
    return NoteForm(
        child_name="Jane Doe",
        date="2026-02-18",
        therapist="Sam Rivera, OTR/L",
        duration=45,
        icd="E11.9, F80.1\nR62.0",
        cpt=sample_cpt_text,
        subjective="Parent reports improved tolerance for tooth brushing.",
        objective="Completed 3-step obstacle course with min verbal cues x 4 trials.",
        assessment="Progressing toward bilateral coordination goals.",
        plan="Continue 1x/week. Add graded handwriting tasks.",
    )


@pytest.fixture
def picker_items():
    """Structured CPT picker state: two checked codes, one unchecked."""
    return [
        CptSelection(code="97530", selected=True, units="2"),
        CptSelection(code="97535", selected=False, units="3"),
        CptSelection(code="97112", selected=True, units=1),
    ]
