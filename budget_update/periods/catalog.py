"""
Budget index (period catalog) parsing.

The index is a spreadsheet listing every budget spreadsheet: one row per
budget, giving its label, the dates it covers and when it was last updated.
This module turns those raw rows into immutable PeriodRecord snapshots and
defines the interface catalog sources implement.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from dateutil import parser as date_parser
from pydantic import ValidationError

from budget_update.domain.models import PeriodRecord
from budget_update.errors import CatalogParseError
from budget_update.utils.logging import get_logger

log = get_logger(__name__)

# Location of the budget list inside the index spreadsheet.
CATALOG_RANGE = "Index!A2:E"

MIN_ROW_CELLS = 5


@runtime_checkable
class CatalogSource(Protocol):
    """
    Supplies the period catalog stored under a catalog (index sheet) ID.

    Implementations raise CatalogRetrievalError when the catalog cannot be
    fetched and CatalogParseError when a row is malformed.
    """

    def fetch(self, catalog_id: str) -> List[PeriodRecord]:
        ...


def _cell(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _parse_timestamp(row_index: int, field: str, value: Any) -> dt.datetime:
    text = _cell(value)
    if not text:
        raise CatalogParseError(row_index, f"{field} is empty", value)
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError) as exc:
        log.warning(
            "Failed to parse date",
            extra={"row": row_index, "field": field, "value": text},
        )
        raise CatalogParseError(row_index, f"cannot parse {field} {text!r}", value) from exc


def period_from_row(
    sequence_index: int, row: Sequence[Any], catalog_id: str = ""
) -> PeriodRecord:
    """
    Convert one index row into a PeriodRecord.

    The row holds [label, start, end, last_updated, destination_id]; extra
    trailing cells are ignored. Start and end are mandatory; a blank
    last_updated means the budget has never been written to. The destination
    sheet ID is mandatory.
    """
    if len(row) < MIN_ROW_CELLS:
        raise CatalogParseError(
            sequence_index, f"expected at least {MIN_ROW_CELLS} cells, got {len(row)}", row
        )

    start = _parse_timestamp(sequence_index, "start date", row[1])
    end = _parse_timestamp(sequence_index, "end date", row[2])
    last_updated: Optional[dt.datetime] = None
    if _cell(row[3]):
        last_updated = _parse_timestamp(sequence_index, "last-updated date", row[3])

    destination_id = _cell(row[4])
    if not destination_id:
        raise CatalogParseError(sequence_index, "destination sheet ID is empty", row)

    try:
        return PeriodRecord(
            sequence_index=sequence_index,
            file_label=_cell(row[0]),
            start=start,
            end=end,
            last_updated=last_updated,
            destination_id=destination_id,
            catalog_id=catalog_id,
        )
    except ValidationError as exc:
        raise CatalogParseError(sequence_index, "start date is after end date", row) from exc


def parse_catalog(rows: Iterable[Sequence[Any]], catalog_id: str = "") -> List[PeriodRecord]:
    """
    Parse every index row, numbering them from 1.

    Aborts on the first malformed row; rows are never silently skipped.
    """
    records = [period_from_row(i, row, catalog_id) for i, row in enumerate(rows, start=1)]
    if not records:
        log.info("No index data found", extra={"catalog_id": catalog_id})
    return records


__all__ = ["CATALOG_RANGE", "CatalogSource", "parse_catalog", "period_from_row"]
