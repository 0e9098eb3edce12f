from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from conftest import make_txn

from tallybook.errors import InvalidInputError
from tallybook.services.transaction_filter import (
    DEFAULT_CRITERIA,
    FilterCriteria,
    SortOrder,
    TransactionFilter,
    active_filter_count,
    apply_filter,
    normalize_type_filter,
    parse_sort_order,
)

BASE = datetime(2025, 1, 1, 12)


@pytest.fixture
def txns():
    return [
        make_txn(10, BASE, "food", txn_id="a"),
        make_txn(50, BASE + timedelta(days=2), "transport", txn_id="b"),
        make_txn(30, BASE + timedelta(days=1), "salary", "income", txn_id="c"),
        make_txn(30, BASE + timedelta(days=3), "food", txn_id="d"),
    ]


def _ids(rows):
    return [t.id for t in rows]


def test_highest_sorts_by_amount_descending():
    rows = [make_txn(10, BASE), make_txn(50, BASE), make_txn(30, BASE)]
    result = apply_filter(rows, FilterCriteria(sort_by=SortOrder.HIGHEST))
    assert [t.amount for t in result] == [50, 30, 10]


def test_lowest_ties_keep_input_order(txns):
    result = apply_filter(txns, FilterCriteria(sort_by="lowest"))
    assert _ids(result) == ["a", "c", "d", "b"]


def test_default_is_newest_first(txns):
    assert _ids(apply_filter(txns)) == ["d", "b", "c", "a"]


def test_newest_reversed_equals_oldest(txns):
    newest = apply_filter(txns, FilterCriteria(sort_by=SortOrder.NEWEST))
    oldest = apply_filter(txns, FilterCriteria(sort_by=SortOrder.OLDEST))
    assert _ids(reversed(newest)) == _ids(oldest)


def test_type_and_category_filters_narrow(txns):
    criteria = FilterCriteria(type_filter="expense", selected_categories=("food",), sort_by=SortOrder.OLDEST)
    assert _ids(apply_filter(txns, criteria)) == ["a", "d"]


def test_input_list_is_not_mutated(txns):
    before = _ids(txns)
    apply_filter(txns, FilterCriteria(sort_by="highest"))
    assert _ids(txns) == before


def test_active_filter_count():
    assert active_filter_count(DEFAULT_CRITERIA) == 0
    assert active_filter_count(FilterCriteria(type_filter="income")) == 1
    assert active_filter_count(
        FilterCriteria(type_filter="income", selected_categories=("food",), sort_by=SortOrder.LOWEST)
    ) == 3


def test_stateful_filter_set_and_reset(txns):
    list_filter = TransactionFilter()
    list_filter.set_criteria(type_filter="expense", sort_by="highest")
    assert list_filter.active_filter_count == 2
    assert _ids(list_filter.apply(txns)) == ["b", "d", "a"]

    list_filter.set_criteria(selected_categories=["food", "food"])
    assert list_filter.criteria.selected_categories == ("food",)
    assert list_filter.active_filter_count == 3

    list_filter.set_criteria(clear_type=True)
    assert list_filter.criteria.type_filter is None

    assert list_filter.reset() == DEFAULT_CRITERIA
    assert list_filter.active_filter_count == 0


def test_normalize_type_filter():
    assert normalize_type_filter("all") is None
    assert normalize_type_filter("") is None
    assert normalize_type_filter(" Income ") == "income"
    with pytest.raises(InvalidInputError):
        normalize_type_filter("refund")


def test_unknown_sort_order_raises():
    with pytest.raises(InvalidInputError):
        parse_sort_order("random")


def test_non_finite_amount_cannot_be_sorted():
    rows = [make_txn(10, BASE), make_txn(float("nan"), BASE), make_txn(50, BASE), make_txn(30, BASE)]
    with pytest.raises(InvalidInputError):
        apply_filter(rows, FilterCriteria(sort_by=SortOrder.HIGHEST))


@pytest.mark.parametrize("sort_by", [SortOrder.NEWEST, SortOrder.OLDEST])
def test_missing_date_cannot_be_sorted(sort_by):
    undated = make_txn(10, BASE)
    undated.occurred_at = None
    with pytest.raises(InvalidInputError):
        apply_filter([make_txn(20, BASE), undated], FilterCriteria(sort_by=sort_by))
