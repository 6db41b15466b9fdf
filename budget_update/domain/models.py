"""
Domain models for budget-update.

Defines the period records read from the budget index, the transactions
downloaded from the bank, and the date intervals used to match the two. All
models are frozen; a catalog snapshot and a transaction batch are never
mutated once built.
"""
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def _as_day(value: Any) -> Any:
    """Truncate datetimes to their calendar day; leave everything else to pydantic."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


class PeriodRecord(BaseModel):
    """
    One budget index entry: a ledger spreadsheet covering a date range.
    """

    sequence_index: int = Field(..., description="Position of the row in the index (1-based).")
    file_label: str = Field(..., description="Human-readable name of the budget file.")
    start: dt.date = Field(..., description="First day covered by the budget.")
    end: dt.date = Field(..., description="Last day covered by the budget (inclusive).")
    last_updated: Optional[dt.datetime] = Field(
        None, description="When the budget was last written to; None if never."
    )
    destination_id: str = Field(..., description="Spreadsheet ID transactions are appended to.")
    catalog_id: str = Field("", description="Spreadsheet ID of the index this record came from.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("start", "end", mode="before")
    @classmethod
    def _truncate_dates(cls, value: Any) -> Any:
        return _as_day(value)

    @model_validator(mode="after")
    def _check_span(self) -> "PeriodRecord":
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")
        return self

    @property
    def is_never_updated(self) -> bool:
        return self.last_updated is None


class Transaction(BaseModel):
    """
    A single account-history entry. Amounts are held in minor units (cents).
    """

    sequence_index: int = Field(..., description="Tie-breaker for transactions on the same date.")
    date: dt.date = Field(..., description="Posting date.")
    kind: str = Field("", description="Type description, such as POS, Check or ATM.")
    description: str = Field("", description="Usually the payor or payee.")
    debit_minor_units: int = 0
    credit_minor_units: int = 0
    balance_minor_units: int = 0

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_date(cls, value: Any) -> Any:
        return _as_day(value)


class Interval(BaseModel):
    """
    Inclusive range of calendar days.
    """

    start: dt.date
    end: dt.date

    model_config = {"frozen": True}

    @field_validator("start", "end", mode="before")
    @classmethod
    def _truncate_dates(cls, value: Any) -> Any:
        return _as_day(value)

    @model_validator(mode="after")
    def _check_order(self) -> "Interval":
        if self.start > self.end:
            raise ValueError(f"interval start {self.start} is after end {self.end}")
        return self

    @classmethod
    def on(cls, day: dt.date) -> "Interval":
        """Build a one-day interval."""
        return cls(start=day, end=day)

    def __contains__(self, day: object) -> bool:
        if isinstance(day, dt.datetime):
            day = day.date()
        return isinstance(day, dt.date) and self.start <= day <= self.end


class RowLayout(str, Enum):
    """
    Column layout of a ledger worksheet.

    LABELED sheets carry the category in column A and use A:H; UNLABELED
    sheets start at column B and leave the category out.
    """

    LABELED = "labeled"
    UNLABELED = "unlabeled"

    @property
    def data_range(self) -> str:
        return "A2:H" if self is RowLayout.LABELED else "B2:H"

    @property
    def width(self) -> int:
        return 8 if self is RowLayout.LABELED else 7


__all__ = ["Interval", "PeriodRecord", "RowLayout", "Transaction"]
