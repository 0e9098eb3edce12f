"""Statistics over transaction lists: totals, category breakdowns and trends.

Every function here is pure. Degenerate input (no transactions, unknown
category ids, an inverted window) produces zero-valued or empty results
instead of raising; only malformed records raise ``InvalidInputError``.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence, Union

from ..logging_config import get_logger
from ..models.category import Category
from ..models.transaction import Transaction
from .filters import checked_amount, checked_occurred_at, filter_by_period, filter_by_type
from .time_range import DateBounds, Granularity, TimeRange, granularity_for, parse_time_range, resolve_bounds

logger = get_logger(__name__)

UNKNOWN_CATEGORY_LABEL = "Unknown"


@dataclass(frozen=True, slots=True)
class CategoryBreakdown:
    """Per-category subtotal and its share of the grand total."""

    category_id: str
    category_name: str
    total_amount: float
    count: int
    percentage: float


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """Totals for a single trend bucket."""

    period_key: str
    income_total: float
    expense_total: float
    transaction_count: int
    transfer_total: float = 0.0

    @property
    def total(self) -> float:
        return self.income_total + self.expense_total + self.transfer_total


@dataclass(frozen=True, slots=True)
class Statistics:
    time_range: TimeRange
    start_date: datetime
    end_date: datetime
    total_amount: float
    average_amount: float
    max_daily_amount: float
    count: int
    category_breakdown: tuple[CategoryBreakdown, ...]
    trend_data: tuple[TrendPoint, ...]

    @property
    def bounds(self) -> DateBounds:
        return DateBounds(self.start_date, self.end_date)


@dataclass(frozen=True, slots=True)
class Summary:
    """Income vs expense totals for a window."""

    start_date: datetime
    end_date: datetime
    total_income: float
    total_expense: float

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expense


def period_key(moment: datetime, granularity: Union[Granularity, str]) -> str:
    """Bucket label for ``moment``; zero-padded so string order is time order."""

    granularity = Granularity(granularity)
    if granularity is Granularity.HOUR:
        return moment.strftime("%Y-%m-%d %H:00")
    if granularity is Granularity.MONTH:
        return moment.strftime("%Y-%m")
    if granularity is Granularity.WEEK:
        iso_year, iso_week, _ = moment.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return moment.strftime("%Y-%m-%d")


def total_amount(transactions: Iterable[Transaction]) -> float:
    return sum((checked_amount(tx) for tx in transactions), 0.0)


def max_daily_amount(transactions: Iterable[Transaction]) -> float:
    """Largest single-day sum, days keyed by local calendar date."""

    daily: dict[str, float] = defaultdict(float)
    for tx in transactions:
        daily[checked_occurred_at(tx).date().isoformat()] += checked_amount(tx)
    return max(daily.values(), default=0.0)


def calculate_category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    grand_total: Optional[float] = None,
    *,
    unknown_label: str = UNKNOWN_CATEGORY_LABEL,
) -> list[CategoryBreakdown]:
    """Group by category id, largest total first.

    Categories missing from ``categories`` are labelled ``unknown_label``.
    ``sorted`` is stable, so equal totals keep first-encountered order.
    """

    txs = list(transactions)
    names = {c.id: c.name for c in categories}
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for tx in txs:
        totals[tx.category_id] = totals.get(tx.category_id, 0.0) + checked_amount(tx)
        counts[tx.category_id] = counts.get(tx.category_id, 0) + 1

    if grand_total is None:
        grand_total = sum(totals.values(), 0.0)

    breakdown = [
        CategoryBreakdown(
            category_id=cat_id,
            category_name=names.get(cat_id, unknown_label),
            total_amount=amount,
            count=counts[cat_id],
            percentage=(amount / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for cat_id, amount in totals.items()
    ]
    return sorted(breakdown, key=lambda entry: entry.total_amount, reverse=True)


def calculate_trend_data(
    transactions: Iterable[Transaction], granularity: Union[Granularity, str]
) -> list[TrendPoint]:
    """Sparse trend series: only buckets holding a transaction, ascending by key."""

    buckets: dict[str, dict[str, float]] = {}
    for tx in transactions:
        key = period_key(checked_occurred_at(tx), granularity)
        bucket = buckets.setdefault(key, {"income": 0.0, "expense": 0.0, "transfer": 0.0, "count": 0})
        if tx.txn_type == "income":
            bucket["income"] += checked_amount(tx)
        elif tx.txn_type == "transfer":
            bucket["transfer"] += checked_amount(tx)
        else:
            bucket["expense"] += checked_amount(tx)
        bucket["count"] += 1

    return [
        TrendPoint(
            period_key=key,
            income_total=data["income"],
            expense_total=data["expense"],
            transfer_total=data["transfer"],
            transaction_count=int(data["count"]),
        )
        for key, data in sorted(buckets.items())
    ]


def aggregate(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    time_range: Union[TimeRange, str],
    *,
    now: Optional[datetime] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    txn_type: Optional[str] = None,
    unknown_label: str = UNKNOWN_CATEGORY_LABEL,
) -> Statistics:
    """Compute :class:`Statistics` for ``time_range``.

    Explicit ``start_date``/``end_date`` override the resolved bounds while the
    trend granularity still follows ``time_range``; the comparator relies on
    this to aggregate the previous window at the same resolution.
    """

    time_range = parse_time_range(time_range)
    resolved = resolve_bounds(time_range, now, start_date, end_date)
    bounds = DateBounds(
        start_date=start_date if start_date is not None else resolved.start_date,
        end_date=end_date if end_date is not None else resolved.end_date,
    )

    selected = filter_by_type(
        filter_by_period(transactions, bounds.start_date, bounds.end_date), txn_type
    )
    count = len(selected)
    total = total_amount(selected)

    stats = Statistics(
        time_range=time_range,
        start_date=bounds.start_date,
        end_date=bounds.end_date,
        total_amount=total,
        average_amount=total / count if count > 0 else 0.0,
        max_daily_amount=max_daily_amount(selected),
        count=count,
        category_breakdown=tuple(
            calculate_category_breakdown(selected, categories, total, unknown_label=unknown_label)
        ),
        trend_data=tuple(calculate_trend_data(selected, granularity_for(time_range))),
    )
    logger.debug(
        "Aggregated %d transactions for %s",
        count,
        time_range.value,
        extra={"start_date": bounds.start_date, "end_date": bounds.end_date, "total": total},
    )
    return stats


def calculate_summary(
    transactions: Iterable[Transaction], start_date: datetime, end_date: datetime
) -> Summary:
    """Income and expense totals inside the inclusive window."""

    selected = filter_by_period(transactions, start_date, end_date)
    return Summary(
        start_date=start_date,
        end_date=end_date,
        total_income=total_amount(filter_by_type(selected, "income")),
        total_expense=total_amount(filter_by_type(selected, "expense")),
    )


def calculate_type_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    start_date: datetime,
    end_date: datetime,
    txn_type: str,
    *,
    unknown_label: str = UNKNOWN_CATEGORY_LABEL,
) -> list[CategoryBreakdown]:
    """Category breakdown of a single transaction type over a window."""

    selected = filter_by_type(filter_by_period(transactions, start_date, end_date), txn_type)
    return calculate_category_breakdown(selected, categories, unknown_label=unknown_label)


def top_categories(
    breakdown: Sequence[CategoryBreakdown], limit: int = 5
) -> list[CategoryBreakdown]:
    """Return the first ``limit`` entries of an already-sorted breakdown."""

    return list(breakdown[: max(limit, 0)])
