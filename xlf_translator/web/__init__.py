"""Web application package for XLF Translator."""

from typing import Any, Dict, Optional

from flask import Flask

from xlf_translator.config import load_config
from xlf_translator.store import TabularStore, create_store, initialize_store
from xlf_translator.store.sqlite_store import SQLiteStore


def create_app(config: Optional[Dict[str, Any]] = None, store: Optional[TabularStore] = None) -> Flask:
    """Application factory for the web interface."""
    if config is None:
        config = load_config()
    if store is None:
        store = create_store(config)
        if isinstance(store, SQLiteStore) and not store.get_columns():
            initialize_store(store, config)

    from .app import build_app  # Import here to avoid circular imports

    return build_app(config, store)


__all__ = ["create_app"]
