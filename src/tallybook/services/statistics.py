"""Statistics facade: reads from the repositories and runs the engine."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from ..domain.repositories import CategoryRepository, TransactionRepository
from ..models.transaction import Transaction
from .aggregates import (
    UNKNOWN_CATEGORY_LABEL,
    CategoryBreakdown,
    Statistics,
    Summary,
    aggregate,
    calculate_summary,
    calculate_type_breakdown,
)
from .comparison import PeriodComparison, compare
from .time_range import TimeRange
from .transaction_filter import DEFAULT_CRITERIA, FilterCriteria, apply_filter


class StatisticsService:
    """Binds the transaction/category repositories to the aggregation engine.

    Each call takes a fresh snapshot from the repositories (served from their
    cache when one is attached), so results never outlive the data they were
    computed from.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
        *,
        unknown_label: str = UNKNOWN_CATEGORY_LABEL,
    ):
        self.transaction_repo = transaction_repo
        self.category_repo = category_repo
        self.unknown_label = unknown_label

    def statistics(
        self,
        time_range: Union[TimeRange, str],
        *,
        now: Optional[datetime] = None,
        custom_start: Optional[datetime] = None,
        custom_end: Optional[datetime] = None,
        txn_type: Optional[str] = None,
    ) -> Statistics:
        return aggregate(
            self.transaction_repo.load_transactions(),
            self.category_repo.load_categories(),
            time_range,
            now=now,
            start_date=custom_start,
            end_date=custom_end,
            txn_type=txn_type,
            unknown_label=self.unknown_label,
        )

    def comparison(
        self,
        time_range: Union[TimeRange, str],
        *,
        now: Optional[datetime] = None,
        custom_start: Optional[datetime] = None,
        custom_end: Optional[datetime] = None,
        txn_type: Optional[str] = None,
    ) -> PeriodComparison:
        return compare(
            self.transaction_repo.load_transactions(),
            self.category_repo.load_categories(),
            time_range,
            now=now,
            custom_start=custom_start,
            custom_end=custom_end,
            txn_type=txn_type,
            unknown_label=self.unknown_label,
        )

    def summary(self, start_date: datetime, end_date: datetime) -> Summary:
        return calculate_summary(self.transaction_repo.load_transactions(), start_date, end_date)

    def type_breakdown(
        self, start_date: datetime, end_date: datetime, txn_type: str
    ) -> list[CategoryBreakdown]:
        return calculate_type_breakdown(
            self.transaction_repo.load_transactions(),
            self.category_repo.load_categories(),
            start_date,
            end_date,
            txn_type,
            unknown_label=self.unknown_label,
        )

    def list_transactions(self, criteria: FilterCriteria = DEFAULT_CRITERIA) -> list[Transaction]:
        return apply_filter(self.transaction_repo.load_transactions(), criteria)
