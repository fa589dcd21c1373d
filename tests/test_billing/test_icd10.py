"""Tests for ICD-10 list normalization."""

from soapnote.billing.icd10 import (
    clean_icd10_codes,
    normalize_icd10,
    normalize_icd10_selection,
    split_icd10,
)


class TestNormalizeBlob:
    def test_commas_and_newlines(self):
        assert normalize_icd10("E11.9, F80.1\nR62.0") == "E11.9, F80.1, R62.0"

    def test_blank_parts_dropped(self):
        assert normalize_icd10(" ,F82,,\n\n  R27.8 ,") == "F82, R27.8"

    def test_duplicates_removed_first_kept(self):
        assert normalize_icd10("F80.1\nR62.0, F80.1") == "F80.1, R62.0"

    def test_empty(self):
        assert normalize_icd10("") == ""
        assert split_icd10("   ") == []


class TestSelection:
    def test_checked_codes_joined_in_order(self):
        assert normalize_icd10_selection(["F82", "R62.0"]) == "F82, R62.0"

    def test_clean_codes(self):
        assert clean_icd10_codes([" F82 ", "", "F82", "Q90.9"]) == ["F82", "Q90.9"]
