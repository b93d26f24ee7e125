"""Tests for the statement format catalog and header detection."""

import pytest
from pydantic import ValidationError

from kassa.domain.banking.services import (
    FORMAT_CATALOG,
    GENERIC_MAPPING,
    SWEDBANK_EE_MAPPING,
    detect_format,
    get_mapping,
    resolve_mapping,
)
from kassa.domain.banking.value_objects import CSVColumnMapping, StatementFormat

SWEDBANK_HEADER = [
    "Kuupäev",
    "Väärtuspäev",
    "Valuuta",
    "Summa",
    "Tüüp",
    "Viitenumber",
    "Selgitus",
    "Saaja/maksja nimi",
    "Konto",
]


class TestDetectFormat:
    """Tests for detect_format."""

    def test_swedbank_header(self):
        assert detect_format(SWEDBANK_HEADER) == StatementFormat.SWEDBANK_EE

    def test_detection_ignores_case(self):
        header = [h.upper() for h in SWEDBANK_HEADER]

        assert detect_format(header) == StatementFormat.SWEDBANK_EE

    def test_detection_ignores_byte_order_mark(self):
        header = ["\ufeffKuupäev", *SWEDBANK_HEADER[1:]]

        assert detect_format(header) == StatementFormat.SWEDBANK_EE

    def test_decomposed_umlaut_still_matches(self):
        """macOS exports may carry 'a' + combining diaeresis."""
        header = ["Kuupa\u0308ev", *SWEDBANK_HEADER[1:]]

        assert detect_format(header) == StatementFormat.SWEDBANK_EE

    def test_partial_signature_is_generic(self):
        assert detect_format(["Kuupäev", "Summa"]) == StatementFormat.GENERIC

    def test_empty_header_is_generic(self):
        assert detect_format([]) == StatementFormat.GENERIC


class TestGetMapping:
    """Tests for catalog lookup by format tag."""

    def test_every_catalog_entry_carries_its_own_tag(self):
        for statement_format, mapping in FORMAT_CATALOG.items():
            assert mapping.format == statement_format

    def test_swedbank_mapping(self):
        mapping = get_mapping(StatementFormat.SWEDBANK_EE)

        assert mapping is SWEDBANK_EE_MAPPING
        assert mapping.decimal_separator == ","
        assert mapping.thousands_separator == " "
        assert mapping.date_format == "%d.%m.%Y"

    def test_lowercase_tag_string(self):
        assert get_mapping("swedbank_ee") is SWEDBANK_EE_MAPPING

    @pytest.mark.parametrize("tag", ["SEB_EE", "LHV_EE", "NORDEA", "", None])
    def test_tags_without_layout_fall_back_to_generic(self, tag):
        assert get_mapping(tag) is GENERIC_MAPPING


class TestResolveMapping:
    """Tests for resolve_mapping."""

    def test_explicit_tag_overrides_detection(self):
        mapping = resolve_mapping(SWEDBANK_HEADER, StatementFormat.GENERIC)

        assert mapping is GENERIC_MAPPING

    def test_detects_when_no_tag_given(self):
        assert resolve_mapping(SWEDBANK_HEADER) is SWEDBANK_EE_MAPPING

    def test_no_header_is_generic(self):
        assert resolve_mapping(None) is GENERIC_MAPPING


class TestCSVColumnMapping:
    """Tests for mapping validation."""

    def test_separators_must_differ(self):
        with pytest.raises(ValidationError):
            CSVColumnMapping(decimal_separator=",", thousands_separator=",")

    def test_empty_thousands_separator_is_allowed(self):
        mapping = CSVColumnMapping(thousands_separator="")

        assert mapping.thousands_separator == ""

    def test_negative_column_is_rejected(self):
        with pytest.raises(ValidationError):
            CSVColumnMapping(amount_column=-1)

    def test_header_rows_counts_skipped_rows_and_header(self):
        assert CSVColumnMapping(skip_rows=2).header_rows == 3
        assert CSVColumnMapping(has_header=False).header_rows == 0

    def test_mapping_is_frozen(self):
        with pytest.raises(ValidationError):
            GENERIC_MAPPING.date_column = 4

    def test_statement_format_parse(self):
        assert StatementFormat.parse(" lhv_ee ") == StatementFormat.LHV_EE
        assert StatementFormat.parse("bogus") == StatementFormat.GENERIC
