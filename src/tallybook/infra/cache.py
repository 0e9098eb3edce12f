"""In-memory snapshot of loaded rows, owned by one application session."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from sqlmodel import SQLModel

from ..models.category import Category
from ..models.transaction import Transaction

RowT = TypeVar("RowT", bound=SQLModel)


def _snapshot(rows: Sequence[RowT]) -> list[RowT]:
    """Detached copies of ``rows`` so callers never share the cached objects."""

    return [type(row)(**row.model_dump()) for row in rows]


class RepositoryCache:
    """Holds the last full load of transactions and categories.

    Repositories fill it on read and drop the matching slot on every write.
    Rows go in and come out as copies, so mutating a loaded row never leaks
    into later loads. Construct one per session and hand it to the
    repositories; tests build a fresh one per fixture.
    """

    def __init__(self) -> None:
        self.transactions: Optional[list[Transaction]] = None
        self.categories: Optional[list[Category]] = None
        self.hits = 0
        self.misses = 0

    def get_transactions(self) -> Optional[list[Transaction]]:
        return self._read(self.transactions)

    def set_transactions(self, rows: list[Transaction]) -> None:
        self.transactions = _snapshot(rows)

    def get_categories(self) -> Optional[list[Category]]:
        return self._read(self.categories)

    def set_categories(self, rows: list[Category]) -> None:
        self.categories = _snapshot(rows)

    def invalidate_transactions(self) -> None:
        self.transactions = None

    def invalidate_categories(self) -> None:
        self.categories = None

    def clear(self) -> None:
        self.invalidate_transactions()
        self.invalidate_categories()

    def _read(self, rows):
        if rows is None:
            self.misses += 1
            return None
        self.hits += 1
        return _snapshot(rows)
