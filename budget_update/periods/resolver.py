"""
Active-period resolution.

A period record is *active* for a date interval when the interval reaches
into its span, counting one day of grace after the period's last day, and it
has not been updated after that grace day. Budgets that were touched after
they ended are treated as finalised and never receive new transactions.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from budget_update.domain.models import Interval, PeriodRecord

# Grace after a period's last day during which the period still counts as open.
STALENESS_GRACE = dt.timedelta(days=1)


def overlaps(record: PeriodRecord, interval: Interval) -> bool:
    """
    True when the interval reaches into the record's span.

    The span runs through the day after `record.end`, so an interval starting
    on that grace day still overlaps.
    """
    return interval.start <= record.end + STALENESS_GRACE and interval.end >= record.start


def is_stale(record: PeriodRecord) -> bool:
    """True when the record was last updated after its own period closed."""
    if record.last_updated is None:
        return False
    return record.last_updated.date() > record.end + STALENESS_GRACE


def is_active(record: PeriodRecord, interval: Interval) -> bool:
    """Decide whether a record may receive transactions dated within `interval`."""
    return overlaps(record, interval) and not is_stale(record)


def active_periods(catalog: Iterable[PeriodRecord], interval: Interval) -> List[PeriodRecord]:
    """Return the active records, preserving catalog order."""
    return [record for record in catalog if is_active(record, interval)]


def destination_for(candidates: Iterable[PeriodRecord], day: dt.date) -> Optional[PeriodRecord]:
    """
    Pick the period a transaction dated `day` is appended to.

    Records whose own span contains `day` are preferred over ones that only
    reach it through the grace day. Among those, the last one in catalog
    order (the newest index entry) wins. Returns None if none applies.
    """
    matches = active_periods(candidates, Interval.on(day))
    covering = [record for record in matches if record.start <= day <= record.end]
    pool = covering or matches
    return pool[-1] if pool else None


__all__ = [
    "STALENESS_GRACE",
    "active_periods",
    "destination_for",
    "is_active",
    "is_stale",
    "overlaps",
]
