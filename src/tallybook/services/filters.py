"""Narrowing passes over transaction lists.

Each pass keeps input order and can be applied in any sequence; chaining
them is a set intersection.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Optional

from ..errors import InvalidInputError
from ..models.transaction import Transaction


def checked_occurred_at(tx: Transaction) -> datetime:
    """Return ``tx.occurred_at`` or raise if it is not a datetime."""

    moment = getattr(tx, "occurred_at", None)
    if not isinstance(moment, datetime):
        raise InvalidInputError(
            f"Transaction {getattr(tx, 'id', '?')} has no usable date: {moment!r}"
        )
    return moment


def checked_amount(tx: Transaction) -> float:
    """Return ``tx.amount`` as a float or raise if it is not a finite number."""

    try:
        value = float(tx.amount)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Transaction {tx.id} has a non-numeric amount: {tx.amount!r}") from exc
    if not math.isfinite(value):
        raise InvalidInputError(f"Transaction {tx.id} has a non-finite amount: {tx.amount!r}")
    return value


def filter_by_period(
    transactions: Iterable[Transaction], start_date: datetime, end_date: datetime
) -> list[Transaction]:
    """Keep transactions with ``start_date <= occurred_at <= end_date``."""

    return [tx for tx in transactions if start_date <= checked_occurred_at(tx) <= end_date]


def filter_by_type(
    transactions: Iterable[Transaction], txn_type: Optional[str]
) -> list[Transaction]:
    """Keep transactions of ``txn_type``; ``None`` keeps everything."""

    if txn_type is None:
        return list(transactions)
    return [tx for tx in transactions if tx.txn_type == txn_type]


def filter_by_categories(
    transactions: Iterable[Transaction], category_ids: Iterable[str]
) -> list[Transaction]:
    """Keep transactions whose category is in ``category_ids``; empty keeps everything."""

    wanted = set(category_ids)
    if not wanted:
        return list(transactions)
    return [tx for tx in transactions if tx.category_id in wanted]
