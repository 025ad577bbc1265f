"""
XLF Translator Exceptions

Structural failures raised by the document adapter, the language registry
and the store accessors. Length violations are not exceptions, they are
returned as data by the export engine.
"""


class XlfTranslatorError(Exception):
    """Base error with optional code and details."""

    code = "error"

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error": self.message, "type": self.code, "details": self.details}


class MalformedDocument(XlfTranslatorError):
    """The document could not be parsed or contains no segments."""

    code = "malformed_document"


class UnsupportedSourceLanguage(XlfTranslatorError):
    """The document's source language is not the supported one."""

    code = "unsupported_source_language"


class UnknownLanguage(XlfTranslatorError):
    """The requested language is not configured or not present in the store."""

    code = "unknown_language"


class StoreUnavailable(XlfTranslatorError):
    """The tabular store could not be read or written."""

    code = "store_unavailable"
