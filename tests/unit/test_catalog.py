from __future__ import annotations

import datetime as dt

import pytest

from budget_update.errors import CatalogParseError
from budget_update.periods.catalog import parse_catalog, period_from_row

INDEX_ID = "index-sheet"


def test_period_from_row_parses_all_fields() -> None:
    row = ["Budget 2018-01", "1/1/2018", "1/31/2018", "2/1/2018 9:15:00", "sheet-jan", "ignored"]

    record = period_from_row(4, row, INDEX_ID)

    assert record.sequence_index == 4
    assert record.file_label == "Budget 2018-01"
    assert record.start == dt.date(2018, 1, 1)
    assert record.end == dt.date(2018, 1, 31)
    assert record.last_updated == dt.datetime(2018, 2, 1, 9, 15)
    assert record.destination_id == "sheet-jan"
    assert record.catalog_id == INDEX_ID


@pytest.mark.parametrize("blank", ["", "   ", None])
def test_blank_last_updated_means_never_updated(blank) -> None:
    record = period_from_row(1, ["Jan", "2018-01-01", "2018-01-31", blank, "sheet-jan"])
    assert record.last_updated is None
    assert record.is_never_updated


def test_month_first_dates_like_the_sheet_displays_them() -> None:
    record = period_from_row(1, ["Feb", "2/3/2018", "3/2/2018", "", "sheet-feb"])
    assert record.start == dt.date(2018, 2, 3)
    assert record.end == dt.date(2018, 3, 2)


@pytest.mark.parametrize(
    ("row", "message"),
    [
        (["Jan", "not a date", "2018-01-31", "", "s"], "start date"),
        (["Jan", "2018-01-01", "", "", "s"], "end date is empty"),
        (["Jan", "2018-01-01", "2018-01-31", "someday", "s"], "last-updated"),
        (["Jan", "2018-02-01", "2018-01-01", "", "s"], "after end"),
        (["Jan", "2018-01-01", "2018-01-31", "", "  "], "destination sheet ID is empty"),
        (["Jan", "2018-01-01", "2018-01-31"], "at least 5 cells"),
    ],
)
def test_malformed_rows_raise_parse_errors(row, message) -> None:
    with pytest.raises(CatalogParseError, match=message) as excinfo:
        period_from_row(7, row)
    assert excinfo.value.row_index == 7


def test_parse_catalog_numbers_rows_from_one_and_aborts_on_bad_row() -> None:
    rows = [
        ["Jan", "2018-01-01", "2018-01-31", "", "sheet-jan"],
        ["Feb", "2018-02-01", "2018-02-28", "", "sheet-feb"],
    ]
    records = parse_catalog(rows, INDEX_ID)
    assert [r.sequence_index for r in records] == [1, 2]
    assert all(r.catalog_id == INDEX_ID for r in records)

    with pytest.raises(CatalogParseError) as excinfo:
        parse_catalog(rows + [["Mar", "garbage", "2018-03-31", "", "sheet-mar"]], INDEX_ID)
    assert excinfo.value.row_index == 3


def test_parse_catalog_of_nothing_is_empty() -> None:
    assert parse_catalog([], INDEX_ID) == []
