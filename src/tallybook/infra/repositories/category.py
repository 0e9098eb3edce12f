"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.category import Category
from ..cache import RepositoryCache


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        cache: Optional[RepositoryCache] = None,
    ):
        self.session_factory = session_factory
        self.cache = cache

    def load_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        if self.cache is not None:
            cached = self.cache.get_categories()
            if cached is not None:
                return cached
        with self.session_factory() as session:
            statement = select(Category).order_by(Category.name)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
        if self.cache is not None:
            self.cache.set_categories(rows)
        return rows

    def get_by_id(self, category_id: str) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.get(Category, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by name."""
        with self.session_factory() as session:
            obj = session.exec(select(Category).where(Category.name == name)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_by_type(self, category_type: str) -> list[Category]:
        """List categories filtered by type (income/expense)."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.category_type == category_type)
                .order_by(Category.name)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
        self._invalidate()
        return category

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        with self.session_factory() as session:
            merged = session.merge(category)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
        self._invalidate()
        return merged

    def delete(self, category_id: str) -> bool:
        """Delete a category by ID.

        Transactions pointing at it are kept; statistics label them Unknown.
        """
        with self.session_factory() as session:
            category = session.get(Category, category_id)
            if category is None:
                return False
            session.delete(category)
            session.commit()
        self._invalidate()
        return True

    def _invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate_categories()
