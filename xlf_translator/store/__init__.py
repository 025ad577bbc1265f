"""
Store accessors

This module provides:
- TabularStore: the interface the sync and export engines use
- SQLiteStore: local single-table store
- GoogleSheetsStore: Google Sheets v4 store
- create_store: build the configured store
"""

from typing import Any, Dict, List

from xlf_translator.config import required_columns
from xlf_translator.logger import get_logger
from xlf_translator.store.base import TabularStore
from xlf_translator.store.sheets import GoogleSheetsStore
from xlf_translator.store.sqlite_store import SQLiteStore

logger = get_logger(__name__)


def initialize_store(store: TabularStore, config: Dict[str, Any]) -> List[str]:
    """
    Give a store its schema: base columns, the active flag and one column
    per configured language. Existing columns are left alone.

    Returns:
        The columns that were added
    """
    columns = required_columns(config) + list(config["languages"])
    added = store.ensure_columns(columns)
    logger.info(f"Store schema ensured ({len(added)} columns added)")
    return added


def create_store(config: Dict[str, Any]) -> TabularStore:
    """Create the store accessor selected by config['store']['backend']."""
    backend = config["store"].get("backend", "sqlite")
    source_column = config["source_column"]

    if backend == "sqlite":
        return SQLiteStore(
            config["store"]["db_file"],
            table=config["store"].get("table", "records"),
            source_column=source_column,
        )
    if backend == "google_sheets":
        sheets_config = config["google_sheets"]
        return GoogleSheetsStore(
            sheets_config["sheet_id"],
            sheet_name=sheets_config.get("sheet_name", "Workbench_Transl"),
            token=sheets_config.get("token", ""),
            timeout=sheets_config.get("timeout", 60),
            source_column=source_column,
        )
    raise ValueError(f"Unknown store backend: {backend}")
