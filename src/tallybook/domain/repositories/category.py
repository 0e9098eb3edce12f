"""Category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def load_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        ...

    def get_by_id(self, category_id: str) -> Optional[Category]:
        """Retrieve a category by ID."""
        ...

    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by its (unique) name."""
        ...

    def list_by_type(self, category_type: str) -> list[Category]:
        """List categories filtered by type (income/expense)."""
        ...

    def create(self, category: Category) -> Category:
        """Create a new category."""
        ...

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        ...

    def delete(self, category_id: str) -> bool:
        """Delete a category by ID; returns False when nothing matched."""
        ...
