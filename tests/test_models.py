"""Tests for the segment and record model helpers."""

import pytest

from xlf_translator.core.models import (
    Record,
    Segment,
    extract_category,
    format_active,
    is_active,
    parse_max_width,
    record_from_row,
    record_to_row,
)


class TestExtractCategory:

    def test_first_token(self):
        assert extract_category("PicklistValue.Contact.Type.Owner") == "PicklistValue"

    def test_no_dot(self):
        assert extract_category("NoDotHere") == "NoDotHere"

    def test_empty_and_none(self):
        assert extract_category("") == ""
        assert extract_category(None) == ""

    def test_leading_dot(self):
        assert extract_category(".Hidden") == ""


class TestIsActive:

    @pytest.mark.parametrize("value", [True, "TRUE", "true", "2024-01-01", "yes", 1])
    def test_active_values(self, value):
        assert is_active(value) is True

    @pytest.mark.parametrize("value", [False, "false", "FALSE", "0", "", None, 0])
    def test_inactive_values(self, value):
        assert is_active(value) is False


class TestParseMaxWidth:

    def test_integer_text(self):
        assert parse_max_width("25") == 25

    def test_float_text(self):
        assert parse_max_width("12.5") == 12.5
        assert parse_max_width("40.0") == 40

    @pytest.mark.parametrize("value", ["", "  ", "abc", "0", "-3", None, "nan", "inf"])
    def test_unconstrained(self, value):
        assert parse_max_width(value) is None


class TestRecord:

    def test_from_segment(self):
        """A new record gets a derived category, is active and has empty translations."""
        segment = Segment(id="CustomLabel.Greeting", source="Hello", max_width=20, size_unit="char")
        record = Record.from_segment(segment, ["French", "German"])

        assert record.category == "CustomLabel"
        assert record.source == "Hello"
        assert record.max_width == "20"
        assert record.size_unit == "char"
        assert record.active is True
        assert record.translations == {"French": "", "German": ""}

    def test_unknown_column_reads_empty(self):
        record = Record(id="a", category="a", source="x", translations={"French": "y"})
        assert record.translation("Japanese") == ""
        assert record.translation("French") == "y"


class TestRowConversion:

    def test_row_round_trip_keeps_unknown_columns(self):
        """Columns the engine does not know end up in translations and are written back."""
        columns = ["id", "category", "maxwidth", "size-unit", "English", "active", "French", "Reviewer"]
        row = {
            "id": "CustomLabel.Greeting",
            "category": "CustomLabel",
            "maxwidth": "20",
            "size-unit": "char",
            "English": "Hello",
            "active": "TRUE",
            "French": "Bonjour",
            "Reviewer": "marie",
        }

        record = record_from_row(row, "English")
        assert record.translations == {"French": "Bonjour", "Reviewer": "marie"}
        assert record_to_row(record, columns, "English") == [row[c] for c in columns]

    def test_missing_columns_default_to_empty(self):
        record = record_from_row({"id": "a.b", "English": "Text"}, "English")
        assert record.category == ""
        assert record.max_width == ""
        assert record.active == ""
        assert record.is_active is False

    def test_format_active(self):
        assert format_active(True) == "TRUE"
        assert format_active(False) == "FALSE"
        assert format_active("2024-01-01") == "2024-01-01"
        assert format_active(None) == ""
