"""
XLF document adapter

This module provides:
- extract: XLF bytes -> segments (parser)
- serialize: export segments -> XLF bytes (writer)
"""

from xlf_translator.xliff.parser import (
    DEFAULT_SOURCE_LANGUAGE,
    ExtractedDocument,
    extract,
    validate,
)
from xlf_translator.xliff.writer import serialize
