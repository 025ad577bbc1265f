"""
Google Sheets store.

Talks to the Sheets v4 REST API (values.get/clear/update/batchUpdate/append)
with a bearer token taken from configuration. Row 1 is the header, records
start on row 2. Values are written RAW.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

from xlf_translator.core.models import Record
from xlf_translator.exceptions import StoreUnavailable
from xlf_translator.logger import get_logger
from xlf_translator.store.base import TabularStore

logger = get_logger(__name__)

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"
HEADER_ROW = 1
PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z0-9_]+$")


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 30.0),
            read=timeout_config.get('read', 60.0),
            pool=timeout_config.get('pool', 10.0),
        )
    timeout_value = float(timeout_config) if timeout_config else 60.0
    return httpx.Timeout(connect=10.0, write=30.0, read=timeout_value, pool=10.0)


def column_letter(index: int) -> str:
    """1-based column index to A1 letters (1 -> A, 27 -> AA)."""
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def _error_text(response: httpx.Response) -> str:
    try:
        error_json = response.json()
        if isinstance(error_json, dict) and "error" in error_json:
            error_detail = error_json["error"]
            if isinstance(error_detail, dict):
                return error_detail.get("message", str(error_detail))
            return str(error_detail)
    except ValueError:
        pass
    return response.text[:500]


class GoogleSheetsStore(TabularStore):
    """Store accessor over one sheet of a Google spreadsheet."""

    def __init__(self, sheet_id: str, sheet_name: str = "Workbench_Transl", token: str = "",
                 timeout: Any = 60, source_column: str = "English",
                 client: Optional[httpx.Client] = None, api_url: str = SHEETS_API_URL):
        super().__init__(source_column)
        if not sheet_id:
            raise ValueError("Google Sheets store needs a sheet_id")
        self.sheet_id = sheet_id
        self.sheet_name = sheet_name
        self.api_url = api_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=get_httpx_timeout(timeout))

    def close(self):
        if self._owns_client:
            self.client.close()

    def _a1(self, ref: str) -> str:
        """A1 range on this sheet, quoting the sheet name when needed."""
        name = self.sheet_name
        if not PLAIN_SHEET_NAME.match(name):
            name = "'" + name.replace("'", "''") + "'"
        return f"{name}!{ref}"

    def _values_url(self, ref: str, action: str = "") -> str:
        return f"{self.api_url}/{self.sheet_id}/values/{quote(self._a1(ref), safe='')}{action}"

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.client.request(method, url, headers=self._headers, **kwargs)
            response.raise_for_status()
            return response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise StoreUnavailable(
                f"Google Sheets API error ({status_code}): {_error_text(e.response)}",
                details={"status": status_code},
            ) from e
        except httpx.HTTPError as e:
            raise StoreUnavailable(f"Failed to reach Google Sheets: {e}") from e
        except ValueError as e:
            raise StoreUnavailable(f"Google Sheets returned a non-JSON response: {e}") from e

    def _header(self) -> List[str]:
        """Raw header row, blanks included so positions line up with row cells."""
        data = self._request("GET", self._values_url(f"{HEADER_ROW}:{HEADER_ROW}"))
        values = data.get("values") or [[]]
        return [str(cell) for cell in values[0]]

    def _full_range(self, header: List[str]) -> str:
        return f"A:{column_letter(max(len(header), 1))}"

    def get_columns(self) -> List[str]:
        return [h for h in self._header() if h]

    def get_all_records(self) -> List[Record]:
        data = self._request("GET", self._values_url("A:ZZZ"))
        rows = data.get("values") or []
        if not rows:
            return []

        header = [str(cell) for cell in rows[0]]
        records = []
        for row in rows[1:]:
            record_row = {
                column: (row[index] if index < len(row) else "")
                for index, column in enumerate(header)
                if column
            }
            records.append(self.to_record(record_row))
        logger.debug(f"Read {len(records)} rows from sheet {self.sheet_name}")
        return records

    def ensure_columns(self, columns: Sequence[str]) -> List[str]:
        header = self._header()
        missing = [c for c in dict.fromkeys(columns) if c not in header]
        if missing:
            logger.info(f"Adding columns to sheet {self.sheet_name}: {', '.join(missing)}")
            self._request(
                "PUT",
                self._values_url("A1"),
                params={"valueInputOption": "RAW"},
                json={"values": [header + missing]},
            )
        return missing

    def replace_all(self, records: Sequence[Record]):
        header = self._header()
        if not any(header):
            raise StoreUnavailable(f"No headers found in sheet {self.sheet_name}")

        rows = [header] + [self.to_row(record, header) for record in records]
        self._request("POST", self._values_url(self._full_range(header), ":clear"), json={})
        self._request(
            "PUT",
            self._values_url("A1"),
            params={"valueInputOption": "RAW"},
            json={"values": rows},
        )
        logger.debug(f"Rewrote sheet {self.sheet_name} with {len(records)} rows")

    def update_records(self, updates: Sequence[Tuple[int, Record]]):
        header = self._header()
        data = [
            {
                "range": self._a1(f"A{position + HEADER_ROW + 1}"),
                "values": [self.to_row(record, header)],
            }
            for position, record in updates
        ]
        self._request(
            "POST",
            f"{self.api_url}/{self.sheet_id}/values:batchUpdate",
            json={"valueInputOption": "RAW", "data": data},
        )
        logger.debug(f"Updated {len(data)} rows in sheet {self.sheet_name}")

    def append_records(self, records: Sequence[Record]):
        header = self._header()
        if not any(header):
            raise StoreUnavailable(f"No headers found in sheet {self.sheet_name}")
        self._request(
            "POST",
            self._values_url(self._full_range(header), ":append"),
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": [self.to_row(record, header) for record in records]},
        )
        logger.debug(f"Appended {len(records)} rows to sheet {self.sheet_name}")
