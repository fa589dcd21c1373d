"""Billing module: CPT interpretation, billing time aggregation, ICD-10 lists."""

from soapnote.billing.cpt_interpreter import (
    CptEntry,
    CptSelection,
    CptSource,
    FreeTextCptSource,
    SelectionCptSource,
    interpret_selections,
    parse_cpt_line,
    parse_cpt_text,
    toggle_selection,
)
from soapnote.billing.aggregator import (
    BillingSummary,
    minutes_to_units,
    reconcile_duration,
    summarize_billing,
)
from soapnote.billing.icd10 import (
    clean_icd10_codes,
    normalize_icd10,
    normalize_icd10_selection,
    split_icd10,
)

__all__ = [
    "CptEntry",
    "CptSelection",
    "CptSource",
    "FreeTextCptSource",
    "SelectionCptSource",
    "interpret_selections",
    "parse_cpt_line",
    "parse_cpt_text",
    "toggle_selection",
    "BillingSummary",
    "minutes_to_units",
    "reconcile_duration",
    "summarize_billing",
    "clean_icd10_codes",
    "normalize_icd10",
    "normalize_icd10_selection",
    "split_icd10",
]
