"""
Core module - Segment model, reconciliation and export

This module provides:
- models: Segment and Record, category and liveness rules
- languages: Language registry
- sync: Reconciliation of a document with the store (import sync.reconcile)
- export: Per-language export with length checks (import export.export_language)
"""

from xlf_translator.core.models import (
    Record,
    Segment,
    extract_category,
    is_active,
    parse_max_width,
    record_from_row,
    record_to_row,
)

from xlf_translator.core.languages import LanguageRegistry
