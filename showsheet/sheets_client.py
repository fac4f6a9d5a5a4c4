"""
Google Sheets CSV Export Client

Fetches one tab of a public spreadsheet as CSV through the gviz export
endpoint. Any failure here is fatal for the build: without the venues and
shows tabs there is nothing to publish.
"""

import logging
from typing import List, Optional

import requests

from showsheet.csv_parser import Row, data_rows
from showsheet.exceptions import SheetFetchError, SheetParseError

logger = logging.getLogger(__name__)

EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&gid={gid}"


class SheetsClient:
    """Client for the CSV export of a single Google Sheet."""

    def __init__(
        self,
        sheet_id: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30
    ):
        self.sheet_id = sheet_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def export_url(self, gid: str) -> str:
        return EXPORT_URL.format(sheet_id=self.sheet_id, gid=gid)

    def fetch_csv(self, gid: str) -> str:
        """
        Download one tab as raw CSV text.

        Args:
            gid: Tab identifier

        Raises:
            SheetFetchError: on connection failure or a non-200 response
        """
        url = self.export_url(gid)
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise SheetFetchError(f"Failed to fetch sheet tab {gid}: {e}") from e

        if r.status_code != 200:
            logger.error(f"HTTP {r.status_code}: {r.text}")
            raise SheetFetchError(f"Failed to fetch: {r.status_code}", status_code=r.status_code)

        return r.text

    def fetch_rows(self, gid: str) -> List[Row]:
        """Download one tab and return its data rows (header dropped)."""
        text = self.fetch_csv(gid)
        if not text.strip():
            raise SheetParseError(f"Sheet tab {gid} is empty (no header row)")
        rows = data_rows(text)
        logger.debug(f"Fetched {len(rows)} rows from tab {gid}")
        return rows

    def __repr__(self) -> str:
        return f"SheetsClient(sheet_id={self.sheet_id})"
