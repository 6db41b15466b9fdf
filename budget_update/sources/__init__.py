"""
Transaction producers.
"""

from budget_update.sources.csv_history import CsvHistorySource

__all__ = ["CsvHistorySource"]
