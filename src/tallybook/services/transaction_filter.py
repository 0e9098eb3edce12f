"""Filtering and sorting for the transaction list."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional, Union

from ..errors import InvalidInputError
from ..models.transaction import TRANSACTION_TYPES, Transaction
from .filters import checked_amount, checked_occurred_at, filter_by_categories, filter_by_type


class SortOrder(str, Enum):
    HIGHEST = "highest"
    LOWEST = "lowest"
    NEWEST = "newest"
    OLDEST = "oldest"


@dataclass(frozen=True)
class FilterCriteria:
    """What the list shows; the defaults show everything, newest first."""

    type_filter: Optional[str] = None
    selected_categories: tuple[str, ...] = field(default_factory=tuple)
    sort_by: SortOrder = SortOrder.NEWEST

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_by", parse_sort_order(self.sort_by))
        object.__setattr__(self, "selected_categories", tuple(self.selected_categories))


def parse_sort_order(value: Union[SortOrder, str]) -> SortOrder:
    if isinstance(value, SortOrder):
        return value
    try:
        return SortOrder(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in SortOrder)
        raise InvalidInputError(f"Unknown sort order {value!r}; expected one of {allowed}") from exc


DEFAULT_CRITERIA = FilterCriteria()


def normalize_type_filter(raw_value: Optional[str]) -> Optional[str]:
    """Return a transaction type or None, treating blank/'all' as no filter."""

    if not raw_value:
        return None
    lowered = raw_value.strip().lower()
    if lowered in {"all", "any", "none", ""}:
        return None
    if lowered not in TRANSACTION_TYPES:
        raise InvalidInputError(f"Unknown transaction type {raw_value!r}")
    return lowered


def sort_transactions(transactions: Iterable[Transaction], sort_by: Union[SortOrder, str]) -> list[Transaction]:
    """Sort by amount or date; equal keys keep their input order."""

    sort_by = parse_sort_order(sort_by)
    if sort_by is SortOrder.HIGHEST:
        return sorted(transactions, key=checked_amount, reverse=True)
    if sort_by is SortOrder.LOWEST:
        return sorted(transactions, key=checked_amount)
    if sort_by is SortOrder.OLDEST:
        return sorted(transactions, key=checked_occurred_at)
    return sorted(transactions, key=checked_occurred_at, reverse=True)


def apply_filter(
    transactions: Iterable[Transaction], criteria: FilterCriteria = DEFAULT_CRITERIA
) -> list[Transaction]:
    """Narrow by type and categories, then sort."""

    txs = filter_by_type(transactions, criteria.type_filter)
    txs = filter_by_categories(txs, criteria.selected_categories)
    return sort_transactions(txs, criteria.sort_by)


def active_filter_count(criteria: FilterCriteria) -> int:
    """Number of criteria that differ from the defaults (badge display)."""

    count = 0
    if criteria.type_filter is not None:
        count += 1
    if criteria.selected_categories:
        count += 1
    if criteria.sort_by is not SortOrder.NEWEST:
        count += 1
    return count


class TransactionFilter:
    """Holds the list's current criteria between user interactions."""

    def __init__(self, criteria: FilterCriteria = DEFAULT_CRITERIA):
        self.criteria = criteria

    def set_criteria(
        self,
        *,
        type_filter: Optional[str] = None,
        selected_categories: Optional[Iterable[str]] = None,
        sort_by: Optional[Union[SortOrder, str]] = None,
        clear_type: bool = False,
    ) -> FilterCriteria:
        """Update the given fields; pass ``clear_type=True`` to drop the type filter."""

        changes: dict[str, object] = {}
        if clear_type:
            changes["type_filter"] = None
        elif type_filter is not None:
            changes["type_filter"] = normalize_type_filter(type_filter)
        if selected_categories is not None:
            changes["selected_categories"] = tuple(dict.fromkeys(selected_categories))
        if sort_by is not None:
            changes["sort_by"] = parse_sort_order(sort_by)
        self.criteria = replace(self.criteria, **changes)
        return self.criteria

    def reset(self) -> FilterCriteria:
        self.criteria = DEFAULT_CRITERIA
        return self.criteria

    @property
    def active_filter_count(self) -> int:
        return active_filter_count(self.criteria)

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        return apply_filter(transactions, self.criteria)
