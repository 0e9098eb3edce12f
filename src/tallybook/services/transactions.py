"""Transaction create/update/delete with validation."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..domain.repositories import CategoryRepository, TransactionRepository
from ..errors import TransactionNotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.transaction import Transaction
from .validation import validate_create, validate_update

logger = get_logger(__name__)

EDITABLE_FIELDS = ("txn_type", "amount", "occurred_at", "category_id", "note", "payment_method")


def _category_ids(category_repo: CategoryRepository) -> list[str]:
    return [c.id for c in category_repo.load_categories()]


def add_transaction(
    repo: TransactionRepository,
    category_repo: CategoryRepository,
    *,
    txn_type: str,
    amount: float,
    occurred_at: datetime,
    category_id: str,
    note: str = "",
    payment_method: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Transaction:
    """Validate and persist a new transaction."""

    data = {
        "txn_type": txn_type,
        "amount": amount,
        "occurred_at": occurred_at,
        "category_id": category_id,
        "note": note,
    }
    result = validate_create(data, _category_ids(category_repo), now=now)
    if not result.valid:
        logger.info("Rejected new transaction", extra={"errors": result.errors})
        raise ValidationError(result.errors)

    stamp = now or datetime.now()
    txn = Transaction(
        txn_type=txn_type,
        amount=float(amount),
        occurred_at=occurred_at,
        category_id=category_id,
        note=note or "",
        payment_method=payment_method,
        created_at=stamp,
        updated_at=stamp,
    )
    created = repo.create(txn)
    logger.info("Transaction created", extra={"transaction_id": created.id, "txn_type": txn_type})
    return created


def update_transaction(
    repo: TransactionRepository,
    category_repo: CategoryRepository,
    transaction_id: str,
    *,
    now: Optional[datetime] = None,
    **changes: Any,
) -> Transaction:
    """Replace a transaction with a copy carrying ``changes``.

    Only the fields in ``EDITABLE_FIELDS`` may change; ``id`` and
    ``created_at`` are carried over and ``updated_at`` is refreshed.
    """

    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError({name: "Field cannot be edited" for name in sorted(unknown)})

    existing = repo.get_by_id(transaction_id)
    if existing is None:
        raise TransactionNotFoundError(transaction_id)

    result = validate_update(changes, _category_ids(category_repo), now=now)
    if not result.valid:
        raise ValidationError(result.errors)

    fields = {name: getattr(existing, name) for name in EDITABLE_FIELDS}
    fields.update(changes)
    if "amount" in changes:
        fields["amount"] = float(changes["amount"])
    replacement = Transaction(
        id=existing.id,
        created_at=existing.created_at,
        updated_at=now or datetime.now(),
        **fields,
    )
    updated = repo.update(replacement)
    logger.info(
        "Transaction updated",
        extra={"transaction_id": transaction_id, "fields": sorted(changes)},
    )
    return updated


def delete_transaction(repo: TransactionRepository, transaction_id: str) -> None:
    """Delete a transaction or raise ``TransactionNotFoundError``."""

    if not repo.delete(transaction_id):
        raise TransactionNotFoundError(transaction_id)
    logger.info("Transaction deleted", extra={"transaction_id": transaction_id})


def get_transaction(repo: TransactionRepository, transaction_id: str) -> Optional[Transaction]:
    return repo.get_by_id(transaction_id)


def get_transactions_by_period(
    repo: TransactionRepository, start_date: datetime, end_date: datetime
) -> list[Transaction]:
    """Transactions in the inclusive window, newest first."""

    return repo.filter_by_date_range(start_date, end_date)
