"""Pytest configuration and shared fixtures for TallyBook tests.

Provides database fixtures, repositories wired to a fresh cache, and factories
for categories and transactions, so services can be exercised without
touching the real app database.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from tallybook.infra.cache import RepositoryCache
from tallybook.infra.repositories import SQLModelCategoryRepository, SQLModelTransactionRepository
from tallybook.models import Category, Transaction

# Fixed reference time: Wednesday 2025-01-15 14:30
NOW = datetime(2025, 1, 15, 14, 30)


def make_txn(
    amount: float,
    occurred_at: datetime,
    category_id: str = "food",
    txn_type: str = "expense",
    txn_id: str | None = None,
    note: str = "",
) -> Transaction:
    """Build an unsaved Transaction for pure-engine tests."""

    kwargs = {}
    if txn_id is not None:
        kwargs["id"] = txn_id
    return Transaction(
        amount=amount,
        occurred_at=occurred_at,
        category_id=category_id,
        txn_type=txn_type,
        note=note,
        **kwargs,
    )


def make_category(category_id: str, name: str, category_type: str = "expense") -> Category:
    return Category(id=category_id, name=name, category_type=category_type)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def categories() -> list[Category]:
    return [
        make_category("food", "Food"),
        make_category("transport", "Transport"),
        make_category("salary", "Salary", "income"),
    ]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the Callable[[], Session] repositories expect."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def cache() -> RepositoryCache:
    return RepositoryCache()


@pytest.fixture
def transaction_repo(session_factory, cache) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(session_factory, cache=cache)


@pytest.fixture
def category_repo(session_factory, cache) -> SQLModelCategoryRepository:
    return SQLModelCategoryRepository(session_factory, cache=cache)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def category_factory(category_repo):
    """Factory for creating persisted categories."""

    def _create_category(
        name: str = "Test Category",
        category_id: str | None = None,
        category_type: str = "expense",
        color: str = "#FF5733",
    ) -> Category:
        if category_id is None:
            category_id = name.lower().replace(" ", "-")
        return category_repo.create(
            Category(id=category_id, name=name, category_type=category_type, color=color)
        )

    return _create_category


@pytest.fixture
def transaction_factory(transaction_repo):
    """Factory for creating persisted transactions (bypasses validation)."""

    def _create_transaction(
        amount: float,
        category_id: str,
        occurred_at: datetime | None = None,
        txn_type: str = "expense",
        note: str = "Test transaction",
    ) -> Transaction:
        return transaction_repo.create(
            Transaction(
                amount=amount,
                category_id=category_id,
                occurred_at=occurred_at or NOW,
                txn_type=txn_type,
                note=note,
            )
        )

    return _create_transaction
