"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.transaction import Transaction
from ..cache import RepositoryCache

logger = get_logger(__name__)


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository with an optional read cache."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        cache: Optional[RepositoryCache] = None,
    ):
        self.session_factory = session_factory
        self.cache = cache

    def load_transactions(self) -> list[Transaction]:
        """Return every transaction, oldest first."""
        if self.cache is not None:
            cached = self.cache.get_transactions()
            if cached is not None:
                return cached
        with self.session_factory() as session:
            statement = select(Transaction).order_by(Transaction.occurred_at)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
        if self.cache is not None:
            self.cache.set_transactions(rows)
        logger.debug("Loaded %d transactions from storage", len(rows))
        return rows

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.get(Transaction, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def filter_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        """Get transactions within an inclusive date range, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.occurred_at >= start_date)
                .where(Transaction.occurred_at <= end_date)
                .order_by(Transaction.occurred_at.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
        self._invalidate()
        return transaction

    def update(self, transaction: Transaction) -> Transaction:
        """Overwrite the stored row sharing ``transaction.id``."""
        with self.session_factory() as session:
            merged = session.merge(transaction)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
        self._invalidate()
        return merged

    def delete(self, transaction_id: str) -> bool:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction is None:
                return False
            session.delete(transaction)
            session.commit()
        self._invalidate()
        return True

    def _invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate_transactions()
