"""
Shared pytest fixtures for the xlf_translator tests.

Provides a temporary SQLite store, a small language configuration and
sample XLF documents.
"""

import copy

import pytest

from xlf_translator.config import DEFAULT_CONFIG, ENV_OVERRIDES, required_columns
from xlf_translator.core.languages import LanguageRegistry
from xlf_translator.core.models import Record
from xlf_translator.store.sqlite_store import SQLiteStore

TEST_LANGUAGES = {"French": "fr", "Spanish": "es", "German": "de"}

FLAT_XLF = b"""<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2">
    <file original="Salesforce" source-language="en_US" target-language="en_US" translation-type="metadata" datatype="xml">
        <body>
            <trans-unit id="ButtonOrLink.Account.Save" maxwidth="10" size-unit="char">
                <source>Save</source>
                <note>Label for the save button</note>
            </trans-unit>
            <trans-unit id="CustomLabel.Greeting" maxwidth="20" size-unit="char">
                <source>Hello</source>
            </trans-unit>
            <trans-unit id="PicklistValue.Contact.Type.Owner">
                <source>Owner</source>
            </trans-unit>
        </body>
    </file>
</xliff>
"""

NESTED_XLF = b"""<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2">
    <file original="Salesforce" source-language="en_US" datatype="xml">
        <body>
            <xliff version="1.2">
                <file original="Salesforce" source-language="en_US" datatype="xml">
                    <body>
                        <trans-unit id="ButtonOrLink.Account.Save" maxwidth="10" size-unit="char">
                            <source>Save</source>
                        </trans-unit>
                        <trans-unit id="CustomLabel.Greeting" maxwidth="20" size-unit="char">
                            <source>Hello</source>
                        </trans-unit>
                        <trans-unit id="PicklistValue.Contact.Type.Owner">
                            <source>Owner</source>
                        </trans-unit>
                    </body>
                </file>
            </xliff>
        </body>
    </file>
</xliff>
"""

MULTI_FILE_XLF = b"""<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2">
    <file original="Salesforce" source-language="en_US" datatype="xml">
        <body>
            <trans-unit id="A.one" maxwidth="10" size-unit="char">
                <source>One</source>
            </trans-unit>
        </body>
    </file>
    <file original="Salesforce" source-language="en_US" datatype="xml">
        <body>
            <trans-unit id="B.two">
                <source>Two</source>
            </trans-unit>
        </body>
    </file>
</xliff>
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the configuration."""
    for name in list(ENV_OVERRIDES) + ["XLF_CONFIG_FILE"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path):
    """Test configuration pointing at a temporary SQLite database."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg["languages"] = dict(TEST_LANGUAGES)
    cfg["store"]["db_file"] = str(tmp_path / "translations.db")
    return cfg


@pytest.fixture
def registry(config):
    return LanguageRegistry.from_config(config)


@pytest.fixture
def store(config):
    """SQLite store with the base columns and French/German language columns."""
    sqlite_store = SQLiteStore(config["store"]["db_file"], source_column=config["source_column"])
    sqlite_store.ensure_columns(required_columns(config) + ["French", "German"])
    return sqlite_store


@pytest.fixture
def flat_xlf():
    return FLAT_XLF


@pytest.fixture
def nested_xlf():
    return NESTED_XLF


def make_record(record_id, source, active=True, max_width="", size_unit="", **translations):
    """Build a Record with a derived category."""
    return Record(
        id=record_id,
        category=record_id.split(".", 1)[0],
        source=source,
        max_width=max_width,
        size_unit=size_unit,
        active=active,
        translations=dict(translations),
    )
