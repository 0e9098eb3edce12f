"""Validation rules applied before a transaction is written."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from ..models.transaction import NOTE_MAX_LENGTH, TRANSACTION_TYPES

MAX_AMOUNT = 999_999_999
MIN_DATE = datetime(2000, 1, 1)
FUTURE_YEARS_ALLOWED = 10


@dataclass
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_amount(amount: Any) -> Optional[str]:
    if amount is None:
        return "Amount is required"
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or math.isnan(amount):
        return "Amount must be a valid number"
    if amount <= 0:
        return "Amount must be greater than zero"
    if amount > MAX_AMOUNT:
        return "Amount is too large"
    return None


def validate_date(moment: Any, *, now: Optional[datetime] = None) -> Optional[str]:
    if moment is None:
        return "Date is required"
    if not isinstance(moment, datetime):
        return "Date is not valid"
    now = now or datetime.now()
    max_date = datetime(now.year + FUTURE_YEARS_ALLOWED, 12, 31, 23, 59, 59)
    if moment < MIN_DATE:
        return "Date is too far in the past"
    if moment > max_date:
        return "Date is too far in the future"
    return None


def validate_category_id(category_id: Optional[str], valid_ids: Iterable[str]) -> Optional[str]:
    if not category_id:
        return "Category is required"
    if category_id not in set(valid_ids):
        return "Invalid category selected"
    return None


def validate_note(note: Optional[str]) -> Optional[str]:
    if not note:
        return None
    if len(note) > NOTE_MAX_LENGTH:
        return f"Note cannot exceed {NOTE_MAX_LENGTH} characters"
    return None


def validate_type(txn_type: Optional[str]) -> Optional[str]:
    if txn_type not in TRANSACTION_TYPES:
        return "Transaction type must be income, expense or transfer"
    return None


def validate_create(
    data: Mapping[str, Any], valid_category_ids: Iterable[str], *, now: Optional[datetime] = None
) -> ValidationResult:
    """Check every field required for a new transaction."""

    checks = {
        "amount": validate_amount(data.get("amount")),
        "occurred_at": validate_date(data.get("occurred_at"), now=now),
        "category_id": validate_category_id(data.get("category_id"), valid_category_ids),
        "note": validate_note(data.get("note")),
        "txn_type": validate_type(data.get("txn_type")),
    }
    return ValidationResult(errors={name: msg for name, msg in checks.items() if msg})


def validate_update(
    changes: Mapping[str, Any], valid_category_ids: Iterable[str], *, now: Optional[datetime] = None
) -> ValidationResult:
    """Check only the fields present in ``changes``."""

    result = ValidationResult()
    if "amount" in changes:
        if msg := validate_amount(changes["amount"]):
            result.errors["amount"] = msg
    if "occurred_at" in changes:
        if msg := validate_date(changes["occurred_at"], now=now):
            result.errors["occurred_at"] = msg
    if "category_id" in changes:
        if msg := validate_category_id(changes["category_id"], valid_category_ids):
            result.errors["category_id"] = msg
    if "note" in changes:
        if msg := validate_note(changes["note"]):
            result.errors["note"] = msg
    if "txn_type" in changes:
        if msg := validate_type(changes["txn_type"]):
            result.errors["txn_type"] = msg
    return result
