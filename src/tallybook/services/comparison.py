"""Current-vs-previous period comparison built on the aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from ..logging_config import get_logger
from ..models.category import Category
from ..models.transaction import Transaction
from .aggregates import UNKNOWN_CATEGORY_LABEL, Statistics, aggregate
from .time_range import TimeRange, parse_time_range, previous_bounds, resolve_bounds

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StatisticsChange:
    """Signed deltas, current minus previous; positive means an increase."""

    total_amount: float
    average_amount: float
    count: int
    total_amount_pct: float = 0.0


@dataclass(frozen=True, slots=True)
class PeriodComparison:
    current: Statistics
    previous: Statistics
    change: StatisticsChange


def percent_change(current: float, previous: float) -> float:
    """Relative change in percent; 0 when there is no previous value to compare."""

    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def compute_change(current: Statistics, previous: Statistics) -> StatisticsChange:
    return StatisticsChange(
        total_amount=current.total_amount - previous.total_amount,
        average_amount=current.average_amount - previous.average_amount,
        count=current.count - previous.count,
        total_amount_pct=percent_change(current.total_amount, previous.total_amount),
    )


def compare(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    time_range: Union[TimeRange, str],
    *,
    now: Optional[datetime] = None,
    custom_start: Optional[datetime] = None,
    custom_end: Optional[datetime] = None,
    txn_type: Optional[str] = None,
    unknown_label: str = UNKNOWN_CATEGORY_LABEL,
) -> PeriodComparison:
    """Aggregate the current window and the equal-length window right before it."""

    time_range = parse_time_range(time_range)
    txs = list(transactions)
    cats = list(categories)

    current_bounds = resolve_bounds(time_range, now, custom_start, custom_end)
    prior_bounds = previous_bounds(current_bounds)

    current = aggregate(
        txs,
        cats,
        time_range,
        start_date=current_bounds.start_date,
        end_date=current_bounds.end_date,
        txn_type=txn_type,
        unknown_label=unknown_label,
    )
    previous = aggregate(
        txs,
        cats,
        time_range,
        start_date=prior_bounds.start_date,
        end_date=prior_bounds.end_date,
        txn_type=txn_type,
        unknown_label=unknown_label,
    )
    change = compute_change(current, previous)
    logger.debug(
        "Compared %s: %d vs %d transactions",
        time_range.value,
        current.count,
        previous.count,
        extra={"delta_total": change.total_amount},
    )
    return PeriodComparison(current=current, previous=previous, change=change)
