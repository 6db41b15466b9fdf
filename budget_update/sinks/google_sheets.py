"""
Google Sheets collaborators for budget-update.

Provides the gspread client factory, the catalog source that reads the budget
index and the append sink that writes ledger rows. Opening a spreadsheet is
idempotent and is retried for transient transport failures using tenacity;
appending is never retried here, since a repeated append would duplicate rows.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, List, Sequence

import gspread
from gspread.exceptions import APIError, SpreadsheetNotFound
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from budget_update.domain.models import PeriodRecord
from budget_update.errors import CatalogRetrievalError
from budget_update.periods.catalog import CATALOG_RANGE, parse_catalog
from budget_update.utils.logging import get_logger

log = get_logger(__name__)


def open_client(app_secret_file: Path, user_auth_file: Path) -> gspread.Client:
    """
    Authorize against Google Sheets with OAuth.

    Parameters
    ----------
    app_secret_file : Path
        OAuth client secret identifying this application.
    user_auth_file : Path
        Cached user credentials; created on first use by the consent flow.

    Returns
    -------
    gspread.Client
        An authorized client.
    """
    return gspread.oauth(
        credentials_filename=str(app_secret_file),
        authorized_user_filename=str(user_auth_file),
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((OSError, ConnectionError)),
    reraise=True,
)
def open_spreadsheet(client: gspread.Client, spreadsheet_id: str) -> gspread.Spreadsheet:
    """
    Open a spreadsheet by ID with automatic retry.

    Retries up to 3 times with exponential backoff for transient transport errors.
    """
    return client.open_by_key(spreadsheet_id)


def _cell_value(value: Any) -> Any:
    """Sheets API payloads are JSON; send amounts as numbers."""
    if isinstance(value, Decimal):
        return float(value)
    return value


class GoogleSheetsCatalog:
    """
    Reads the budget index spreadsheet into PeriodRecords.
    """

    def __init__(self, client: gspread.Client, range_descriptor: str = CATALOG_RANGE) -> None:
        self._client = client
        self.range_descriptor = range_descriptor

    def fetch(self, catalog_id: str) -> List[PeriodRecord]:
        try:
            spreadsheet = open_spreadsheet(self._client, catalog_id)
            response = spreadsheet.values_get(self.range_descriptor)
        except (APIError, SpreadsheetNotFound, OSError) as exc:
            log.error(
                "Unable to retrieve index",
                extra={"catalog_id": catalog_id, "error": str(exc)},
            )
            raise CatalogRetrievalError(
                f"Unable to retrieve index from sheet ID {catalog_id}: {exc}"
            ) from exc

        return parse_catalog(response.get("values", []), catalog_id)


class GoogleSheetsSink:
    """
    Appends ledger rows to a spreadsheet range with a single API call.
    """

    def __init__(self, client: gspread.Client) -> None:
        self._client = client

    def append(
        self, destination_id: str, range_descriptor: str, rows: Sequence[Sequence[Any]]
    ) -> None:
        spreadsheet = open_spreadsheet(self._client, destination_id)
        values = [[_cell_value(cell) for cell in row] for row in rows]
        spreadsheet.values_append(
            range_descriptor,
            params={"valueInputOption": "USER_ENTERED", "insertDataOption": "INSERT_ROWS"},
            body={"range": range_descriptor, "majorDimension": "ROWS", "values": values},
        )


__all__ = [
    "GoogleSheetsCatalog",
    "GoogleSheetsSink",
    "open_client",
    "open_spreadsheet",
]
