from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from budget_update.domain.models import Interval, PeriodRecord, RowLayout, Transaction


def test_period_record_rejects_start_after_end() -> None:
    with pytest.raises(ValidationError, match="after end"):
        PeriodRecord(
            sequence_index=1,
            file_label="Backwards",
            start=dt.date(2018, 2, 1),
            end=dt.date(2018, 1, 1),
            destination_id="sheet-1",
        )


def test_period_record_truncates_datetimes_to_days() -> None:
    record = PeriodRecord(
        sequence_index=1,
        file_label="January",
        start=dt.datetime(2018, 1, 1, 13, 45),
        end=dt.datetime(2018, 1, 31, 23, 59),
        destination_id="sheet-1",
    )
    assert record.start == dt.date(2018, 1, 1)
    assert record.end == dt.date(2018, 1, 31)
    assert record.is_never_updated


def test_period_record_is_frozen() -> None:
    record = PeriodRecord(
        sequence_index=1,
        file_label="January",
        start=dt.date(2018, 1, 1),
        end=dt.date(2018, 1, 31),
        destination_id="sheet-1",
    )
    with pytest.raises(ValidationError):
        record.destination_id = "other"  # type: ignore[misc]


def test_transaction_defaults_amounts_to_zero() -> None:
    txn = Transaction(sequence_index=3, date=dt.datetime(2018, 1, 2, 8, 0))
    assert txn.date == dt.date(2018, 1, 2)
    assert (txn.debit_minor_units, txn.credit_minor_units, txn.balance_minor_units) == (0, 0, 0)


def test_interval_on_and_membership() -> None:
    day = dt.date(2018, 1, 10)
    interval = Interval.on(day)
    assert interval.start == interval.end == day
    assert day in interval
    assert dt.datetime(2018, 1, 10, 18, 30) in interval
    assert dt.date(2018, 1, 11) not in interval
    assert "2018-01-10" not in interval


def test_interval_rejects_reversed_bounds() -> None:
    with pytest.raises(ValidationError):
        Interval(start=dt.date(2018, 1, 2), end=dt.date(2018, 1, 1))


def test_row_layout_ranges_are_consistent() -> None:
    assert RowLayout.LABELED.data_range == "A2:H"
    assert RowLayout.UNLABELED.data_range == "B2:H"
    assert RowLayout.LABELED.width == 8
    assert RowLayout.UNLABELED.width == 7
