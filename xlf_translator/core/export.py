"""
Language export.

Builds the output segment list for one target language from the store's
records. Records whose translation is longer than their max width are left
out and reported as length violations. Records with a cell XML cannot hold
(control characters such as NUL or vertical tab) are left out and reported
as invalid text. The rest of the export goes ahead.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from xlf_translator import xliff
from xlf_translator.core.languages import LanguageRegistry
from xlf_translator.core.models import Number, Record, parse_max_width
from xlf_translator.logger import get_logger
from xlf_translator.store.base import TabularStore

logger = get_logger(__name__)

# Characters outside the XML 1.0 Char production
NON_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


@dataclass
class ExportSegment:
    """One trans-unit of an exported document."""
    id: str
    max_width: str
    size_unit: str
    source: str
    target: str


@dataclass
class LengthViolation:
    """A translation longer than its record's max width."""
    id: str
    value: str
    max_width: Number

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "maxwidth": self.max_width}


@dataclass
class InvalidText:
    """A record cell holding characters an XML document cannot contain."""
    id: str
    cell: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "cell": self.cell, "value": self.value}


@dataclass
class ExportResult:
    language: str
    code: str
    segments: List[ExportSegment] = field(default_factory=list)
    violations: List[LengthViolation] = field(default_factory=list)
    invalid: List[InvalidText] = field(default_factory=list)


@dataclass
class GeneratedDocument:
    """A serialized export, ready to be written or downloaded."""
    language: str
    code: str
    content: bytes
    segment_count: int
    violations: List[LengthViolation]
    invalid: List[InvalidText] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"translation_{self.language}_{date.today().isoformat()}.xlf"

    def summary(self) -> Dict[str, Any]:
        return {
            "success": True,
            "language": self.language,
            "code": self.code,
            "segmentCount": self.segment_count,
            "violations": [violation.to_dict() for violation in self.violations],
            "invalid": [item.to_dict() for item in self.invalid],
        }


def _invalid_cell(record: Record, target: str) -> Optional[Tuple[str, str]]:
    """(name, value) of the first exported cell that cannot be written as XML, if any."""
    cells = [
        ("id", record.id),
        ("maxwidth", record.max_width),
        ("size-unit", record.size_unit),
        ("source", record.source),
        ("target", target),
    ]
    for name, value in cells:
        if value and NON_XML_CHARS.search(str(value)):
            return name, str(value)
    return None


def _known_columns(records: Sequence[Record]) -> List[str]:
    columns: Dict[str, None] = {}
    for record in records:
        columns.update(dict.fromkeys(record.translations))
    return list(columns)


def export_language(language: str, records: Sequence[Record], registry: LanguageRegistry,
                    columns: Optional[Sequence[str]] = None) -> ExportResult:
    """
    Project the records onto one target language.

    Only active records with a non-blank translation are considered. A
    translation strictly longer than a valid, positive max width becomes a
    LengthViolation and is excluded. A record with a cell containing
    characters outside XML 1.0 becomes InvalidText and is excluded.
    Everything else is exported in store order.

    Args:
        language: Language display name, e.g. 'French'
        records: Store records, in store order
        registry: Configured languages
        columns: Store columns; defaults to the columns seen on the records

    Returns:
        ExportResult with the output segments, the violations and the invalid text

    Raises:
        UnknownLanguage: If the language is not configured or not a store column
    """
    if columns is None:
        columns = _known_columns(records)
    code = registry.resolve(language, columns)
    result = ExportResult(language=language, code=code)

    for record in records:
        if not record.is_active:
            continue

        target = record.translation(language)
        if not target.strip():
            continue

        invalid_cell = _invalid_cell(record, target)
        if invalid_cell is not None:
            result.invalid.append(InvalidText(id=record.id, cell=invalid_cell[0], value=invalid_cell[1]))
            continue

        max_width = parse_max_width(record.max_width)
        if max_width is not None and len(target) > max_width:
            result.violations.append(LengthViolation(id=record.id, value=target, max_width=max_width))
            continue

        result.segments.append(ExportSegment(
            id=record.id,
            max_width=record.max_width,
            size_unit=record.size_unit,
            source=record.source,
            target=target,
        ))

    if result.violations:
        logger.warning(f"{len(result.violations)} {language} translations exceed their max width")
    if result.invalid:
        logger.warning(f"{len(result.invalid)} {language} records hold characters XML cannot contain")
    logger.info(f"Exported {len(result.segments)} {language} segments")
    return result


def generate_document(language: str, store: TabularStore, registry: LanguageRegistry,
                      config: Dict[str, Any]) -> GeneratedDocument:
    """
    Export one language from the store as an XLF document.

    Raises:
        UnknownLanguage: If the language is not available in the store
        StoreUnavailable: If the store cannot be read
    """
    logger.info(f"Generating {language} document")
    columns = store.get_columns()
    records = store.get_all_records()

    result = export_language(language, records, registry, columns)
    content = xliff.serialize(
        result.code,
        result.segments,
        source_language=config["source_language"],
        original=config.get("document", {}).get("original", "Salesforce"),
    )

    return GeneratedDocument(
        language=language,
        code=result.code,
        content=content,
        segment_count=len(result.segments),
        violations=result.violations,
        invalid=result.invalid,
    )


def get_languages(store: TabularStore, registry: LanguageRegistry) -> List[str]:
    """Languages that are configured and present as store columns."""
    return registry.available_languages(store.get_columns())
