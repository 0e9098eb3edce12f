"""Transaction repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Source of truth for recorded transactions."""

    def load_transactions(self) -> list[Transaction]:
        """Return every transaction, oldest first."""
        ...

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def filter_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        """Transactions inside the inclusive window, newest first."""
        ...

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Replace the stored transaction having the same id."""
        ...

    def delete(self, transaction_id: str) -> bool:
        """Delete by ID; returns False when nothing matched."""
        ...
