"""
Tabular store interface.

A store is a table with a header row of column names and one row per
record. The column set is user-editable: language columns can be added in
the store directly and must survive every write.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Tuple

from xlf_translator.core.models import Record, record_from_row, record_to_row


class TabularStore(ABC):
    """Read all records, read the columns, and write rows back."""

    def __init__(self, source_column: str = "English"):
        self.source_column = source_column

    @abstractmethod
    def get_columns(self) -> List[str]:
        """Column names in header order (empty if the store was never initialized)."""

    @abstractmethod
    def get_all_records(self) -> List[Record]:
        """All records in row order."""

    @abstractmethod
    def ensure_columns(self, columns: Sequence[str]) -> List[str]:
        """Add any missing columns at the end of the header. Returns the added ones."""

    @abstractmethod
    def replace_all(self, records: Sequence[Record]):
        """Replace every row with the given records, keeping the header."""

    @abstractmethod
    def update_records(self, updates: Sequence[Tuple[int, Record]]):
        """Rewrite rows in place; each int is a 0-based position in get_all_records order."""

    @abstractmethod
    def append_records(self, records: Sequence[Record]):
        """Append records after the last row."""

    def close(self):
        """Release any connection held by the store."""

    def to_record(self, row: Dict[str, str]) -> Record:
        return record_from_row(row, self.source_column)

    def to_row(self, record: Record, columns: List[str]) -> List[str]:
        return record_to_row(record, columns, self.source_column)
