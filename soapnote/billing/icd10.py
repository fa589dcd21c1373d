"""ICD-10 code list normalization.

Codes arrive either as a free-text blob (newline and/or comma separated)
or as a list of checked boxes. Both render as one comma-joined line.
No lookup against the ICD-10-CM table is done.
"""
from __future__ import annotations

import re
from typing import Iterable

_SEPARATOR_RE = re.compile(r"[\n,]+")


def clean_icd10_codes(codes: Iterable[str]) -> list[str]:
    """Trim codes and drop blanks and repeats, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for code in codes:
        code = code.strip()
        if not code or code in seen:
            continue
        seen.add(code)
        result.append(code)
    return result


def split_icd10(blob: str) -> list[str]:
    return clean_icd10_codes(_SEPARATOR_RE.split(blob or ""))


def normalize_icd10(blob: str) -> str:
    """``"E11.9, F80.1\\nR62.0"`` -> ``"E11.9, F80.1, R62.0"``."""
    return ", ".join(split_icd10(blob))


def normalize_icd10_selection(codes: list[str]) -> str:
    """Join checked ICD-10 codes in the order they were checked."""
    return ", ".join(clean_icd10_codes(codes))
