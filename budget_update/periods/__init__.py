"""
Periods package: the budget index catalog and the active-period resolver.
"""

from budget_update.periods.catalog import (
    CATALOG_RANGE,
    CatalogSource,
    parse_catalog,
    period_from_row,
)
from budget_update.periods.resolver import active_periods, destination_for, is_active

__all__ = [
    "CATALOG_RANGE",
    "CatalogSource",
    "active_periods",
    "destination_for",
    "is_active",
    "parse_catalog",
    "period_from_row",
]
