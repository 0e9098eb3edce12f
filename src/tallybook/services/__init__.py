"""Service module exports."""

from . import (
    aggregates,
    comparison,
    filters,
    reports,
    seed,
    statistics,
    time_range,
    transaction_filter,
    transactions,
    validation,
)

__all__ = [
    "aggregates",
    "comparison",
    "filters",
    "reports",
    "seed",
    "statistics",
    "time_range",
    "transaction_filter",
    "transactions",
    "validation",
]
