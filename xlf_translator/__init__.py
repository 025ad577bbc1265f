"""XLF Translator - keeps XLF translation files in sync with a translation store."""

__version__ = "1.0.0"
