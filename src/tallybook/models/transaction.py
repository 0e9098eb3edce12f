"""SQLModel definition for income/expense transactions."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, SQLModel

TRANSACTION_TYPES = ("income", "expense", "transfer")
NOTE_MAX_LENGTH = 500


def generate_transaction_id() -> str:
    """Return a new opaque transaction id."""

    return f"txn_{uuid.uuid4().hex[:16]}"


class Transaction(SQLModel, table=True):
    """A single recorded income, expense or transfer.

    ``occurred_at`` is the point in time the money moved and is what every
    statistic is bucketed by; ``created_at``/``updated_at`` are audit fields
    only. Rows are never edited field-by-field by the engine: an edit replaces
    the whole record.
    """

    __tablename__: ClassVar[str] = "transaction"

    id: str = Field(default_factory=generate_transaction_id, primary_key=True, max_length=40)
    txn_type: str = Field(default="expense", nullable=False, index=True, max_length=16)
    amount: float = Field(nullable=False, description="Strictly positive; direction comes from txn_type")
    occurred_at: NaiveDatetime = Field(nullable=False, index=True)
    category_id: str = Field(foreign_key="category.id", nullable=False, index=True, max_length=64)
    note: str = Field(default="", max_length=NOTE_MAX_LENGTH)
    payment_method: Optional[str] = Field(default=None, max_length=32)
    created_at: NaiveDatetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: NaiveDatetime = Field(default_factory=datetime.now, nullable=False)
