"""
Segment and record models.

A Segment is one trans-unit read from an incoming document. A Record is the
persisted row for one segment id: its last known source text, length
constraint, liveness flag and one cell per language column.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from xlf_translator.config import (
    ACTIVE_COLUMN,
    CATEGORY_COLUMN,
    ID_COLUMN,
    MAXWIDTH_COLUMN,
    SIZE_UNIT_COLUMN,
)

# Cell values that mark a record as not live, besides empty/false-y values
INACTIVE_MARKERS = {"false", "FALSE", "0"}

Number = Union[int, float]


@dataclass
class Segment:
    """One source-language text unit extracted from a document."""
    id: Optional[str]
    source: str
    max_width: Optional[Number] = None
    size_unit: str = ""
    note: str = ""

    @property
    def category(self) -> str:
        return extract_category(self.id)


@dataclass
class Record:
    """A store row: source text, constraints, liveness and translations."""
    id: str
    category: str
    source: str
    max_width: str = ""  # raw cell text, empty when unconstrained
    size_unit: str = ""
    active: Any = True  # bool, or whatever the store holds (e.g. "TRUE", a date)
    translations: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_segment(cls, segment: Segment, language_columns: Iterable[str]) -> "Record":
        """Create a brand-new, active record with every language column empty."""
        return cls(
            id=segment.id,
            category=extract_category(segment.id),
            source=segment.source,
            max_width=format_max_width(segment.max_width),
            size_unit=segment.size_unit,
            active=True,
            translations={column: "" for column in language_columns},
        )

    @property
    def is_active(self) -> bool:
        return is_active(self.active)

    def translation(self, column: str) -> str:
        """Translated text for a column; columns the record has never seen read as empty."""
        value = self.translations.get(column)
        return value if isinstance(value, str) else ""

    def matches_metadata(self, segment: Segment) -> bool:
        return (self.max_width == format_max_width(segment.max_width)
                and self.size_unit == segment.size_unit)


def extract_category(segment_id: Optional[str]) -> str:
    """
    Extract the category from an id (first part before the first dot).

    Example:
        >>> extract_category("PicklistValue.Contact.Type.Owner")
        'PicklistValue'
        >>> extract_category("NoDotHere")
        'NoDotHere'
    """
    if not segment_id or not isinstance(segment_id, str):
        return ''
    return segment_id.split('.', 1)[0]


def is_active(value: Any) -> bool:
    """
    Lenient liveness check.

    Not active: None, False, empty string, zero and the strings
    "false", "FALSE" and "0". Anything else counts as active, which
    covers stores that stamp liveness with a timestamp.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != "" and value not in INACTIVE_MARKERS
    if isinstance(value, (int, float)):
        return value != 0
    return bool(value)


def parse_max_width(value: Any) -> Optional[Number]:
    """Return a positive width from a cell or attribute value, or None when unconstrained."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def format_max_width(value: Optional[Number]) -> str:
    if value is None:
        return ""
    return str(value)


def format_active(value: Any) -> str:
    """Cell text for the active column."""
    if value is True:
        return "TRUE"
    if value is False:
        return "FALSE"
    if value is None:
        return ""
    return str(value)


def record_from_row(row: Dict[str, Any], source_column: str) -> Record:
    """
    Build a Record from a store row.

    Absent columns default to empty. Every column that is not a base column
    or the active flag ends up in translations, including ones this code
    does not know about, so a rewrite keeps them.
    """
    fixed = {ID_COLUMN, CATEGORY_COLUMN, MAXWIDTH_COLUMN, SIZE_UNIT_COLUMN, source_column, ACTIVE_COLUMN}

    def cell(column: str) -> str:
        value = row.get(column)
        return "" if value is None else str(value)

    return Record(
        id=cell(ID_COLUMN),
        category=cell(CATEGORY_COLUMN),
        source=cell(source_column),
        max_width=cell(MAXWIDTH_COLUMN),
        size_unit=cell(SIZE_UNIT_COLUMN),
        active=row.get(ACTIVE_COLUMN, ""),
        translations={
            column: cell(column)
            for column in row
            if column not in fixed
        },
    )


def record_to_row(record: Record, columns: List[str], source_column: str) -> List[str]:
    """Lay a Record out as cell values in the store's column order."""
    values = {
        ID_COLUMN: record.id,
        CATEGORY_COLUMN: record.category,
        MAXWIDTH_COLUMN: record.max_width,
        SIZE_UNIT_COLUMN: record.size_unit,
        source_column: record.source,
        ACTIVE_COLUMN: format_active(record.active),
    }
    return [
        values[column] if column in values else record.translation(column)
        for column in columns
    ]
