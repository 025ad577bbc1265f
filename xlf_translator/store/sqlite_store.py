"""
SQLite-backed store.

One table whose columns mirror the spreadsheet header: base columns, the
active flag, then one TEXT column per language. Row order is rowid order.
For schema changes see ensure_columns(); columns are only ever added.
"""

import sqlite3
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from xlf_translator.core.models import Record
from xlf_translator.exceptions import StoreUnavailable
from xlf_translator.logger import get_logger
from xlf_translator.store.base import TabularStore

logger = get_logger(__name__)


def quote_identifier(name: str) -> str:
    """Quote a column or table name ('size-unit' and language names need it)."""
    return '"' + name.replace('"', '""') + '"'


class SQLiteStore(TabularStore):
    """Store accessor over a single SQLite table."""

    def __init__(self, db_file: Union[str, Path], table: str = "records", source_column: str = "English"):
        super().__init__(source_column)
        self.db_file = Path(db_file)
        self.table = table

    def get_connection(self):
        """Get a database connection."""
        try:
            return sqlite3.connect(self.db_file)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Failed to open database {self.db_file}: {e}") from e

    def _table_columns(self, cursor) -> List[str]:
        cursor.execute(f"PRAGMA table_info({quote_identifier(self.table)})")
        return [row[1] for row in cursor.fetchall()]

    def _insert_sql(self, columns: List[str]) -> str:
        column_list = ", ".join(quote_identifier(c) for c in columns)
        placeholders = ", ".join("?" for _ in columns)
        return f"INSERT INTO {quote_identifier(self.table)} ({column_list}) VALUES ({placeholders})"

    def get_columns(self) -> List[str]:
        conn = self.get_connection()
        try:
            return self._table_columns(conn.cursor())
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Failed to read store columns: {e}") from e
        finally:
            conn.close()

    def get_all_records(self) -> List[Record]:
        conn = self.get_connection()
        conn.row_factory = sqlite3.Row
        try:
            cursor = conn.cursor()
            if not self._table_columns(cursor):
                return []
            cursor.execute(f"SELECT * FROM {quote_identifier(self.table)} ORDER BY rowid")
            return [self.to_record(dict(row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Failed to read store records: {e}") from e
        finally:
            conn.close()

    def ensure_columns(self, columns: Sequence[str]) -> List[str]:
        """Create the table on first use, otherwise add the missing columns."""
        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        conn = self.get_connection()
        cursor = conn.cursor()
        try:
            existing = self._table_columns(cursor)
            missing = [c for c in dict.fromkeys(columns) if c not in existing]

            if not existing:
                if missing:
                    column_defs = ", ".join(f"{quote_identifier(c)} TEXT DEFAULT ''" for c in missing)
                    cursor.execute(f"CREATE TABLE {quote_identifier(self.table)} ({column_defs})")
                    logger.info(f"Created table {self.table} with {len(missing)} columns")
            else:
                for column in missing:
                    logger.info(f"Adding {column} column to {self.table} table")
                    cursor.execute(
                        f"ALTER TABLE {quote_identifier(self.table)} "
                        f"ADD COLUMN {quote_identifier(column)} TEXT DEFAULT ''"
                    )

            conn.commit()
            return missing
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailable(f"Failed to ensure store columns: {e}") from e
        finally:
            conn.close()

    def replace_all(self, records: Sequence[Record]):
        conn = self.get_connection()
        cursor = conn.cursor()
        try:
            columns = self._table_columns(cursor)
            if not columns:
                raise StoreUnavailable(f"No columns found in table {self.table}")

            cursor.execute(f"DELETE FROM {quote_identifier(self.table)}")
            cursor.executemany(self._insert_sql(columns), [self.to_row(r, columns) for r in records])
            conn.commit()
            logger.debug(f"Replaced table {self.table} with {len(records)} rows")
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailable(f"Failed to write store: {e}") from e
        finally:
            conn.close()

    def update_records(self, updates: Sequence[Tuple[int, Record]]):
        conn = self.get_connection()
        cursor = conn.cursor()
        try:
            columns = self._table_columns(cursor)
            cursor.execute(f"SELECT rowid FROM {quote_identifier(self.table)} ORDER BY rowid")
            rowids = [row[0] for row in cursor.fetchall()]

            assignments = ", ".join(f"{quote_identifier(c)} = ?" for c in columns)
            sql = f"UPDATE {quote_identifier(self.table)} SET {assignments} WHERE rowid = ?"

            for position, record in updates:
                if position < 0 or position >= len(rowids):
                    raise StoreUnavailable(
                        f"Row {position} no longer exists in table {self.table}",
                        details={"row": position, "id": record.id},
                    )
                cursor.execute(sql, self.to_row(record, columns) + [rowids[position]])
                logger.debug(f"Updated row {position} (id={record.id})")

            conn.commit()
        except StoreUnavailable:
            conn.rollback()
            raise
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailable(f"Failed to update store rows: {e}") from e
        finally:
            conn.close()

    def append_records(self, records: Sequence[Record]):
        conn = self.get_connection()
        cursor = conn.cursor()
        try:
            columns = self._table_columns(cursor)
            if not columns:
                raise StoreUnavailable(f"No columns found in table {self.table}")
            cursor.executemany(self._insert_sql(columns), [self.to_row(r, columns) for r in records])
            conn.commit()
            logger.debug(f"Appended {len(records)} rows to {self.table}")
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailable(f"Failed to append store rows: {e}") from e
        finally:
            conn.close()
