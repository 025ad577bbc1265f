"""Tests for the language registry."""

import pytest

from xlf_translator.config import DEFAULT_CONFIG
from xlf_translator.core.languages import LanguageRegistry
from xlf_translator.exceptions import UnknownLanguage


@pytest.fixture
def three_languages():
    return LanguageRegistry({"French": "fr", "Spanish": "es", "German": "de"})


class TestLanguageRegistry:

    def test_intersection_in_configured_order(self, three_languages):
        """Only configured languages present as columns, in configured order."""
        columns = ["id", "English", "German", "active", "French", "Klingon"]
        assert three_languages.available_languages(columns) == ["French", "German"]

    def test_no_columns_returns_everything(self, three_languages):
        assert three_languages.available_languages(None) == ["French", "Spanish", "German"]

    def test_empty_store(self, three_languages):
        assert three_languages.available_languages([]) == []

    def test_code_for(self, three_languages):
        assert three_languages.code_for("Spanish") == "es"

    def test_code_for_unknown(self, three_languages):
        with pytest.raises(UnknownLanguage):
            three_languages.code_for("Klingon")

    def test_resolve_requires_store_column(self, three_languages):
        """A configured language missing from the store is not exportable."""
        with pytest.raises(UnknownLanguage) as exc_info:
            three_languages.resolve("Spanish", ["French", "German"])
        assert exc_info.value.details["available"] == ["French", "German"]

    def test_resolve(self, three_languages):
        assert three_languages.resolve("German", ["German"]) == "de"

    def test_from_default_config(self):
        registry = LanguageRegistry.from_config(DEFAULT_CONFIG)
        assert len(registry) == 28
        assert registry.code_for("Portuguese") == "pt_BR"
        assert registry.names[0] == "Spanish"
        assert "Hebrew" in registry
