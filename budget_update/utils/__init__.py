"""
Utilities package for budget-update.

Exports shared helpers for cross-cutting concerns. Keep this package
lightweight and free of domain-specific logic.
"""

from budget_update.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
