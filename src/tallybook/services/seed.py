"""Default category seeding."""

from __future__ import annotations

from ..constants.categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES
from ..domain.repositories import CategoryRepository
from ..logging_config import get_logger
from ..models.category import Category

logger = get_logger(__name__)


def default_categories() -> list[Category]:
    """Fresh Category rows for every built-in category."""

    rows: list[Category] = []
    for category_type, entries in (("income", INCOME_CATEGORIES), ("expense", EXPENSE_CATEGORIES)):
        for slug, name, icon, color in entries:
            rows.append(
                Category(
                    id=slug,
                    name=name,
                    category_type=category_type,
                    icon=icon,
                    color=color,
                    is_default=True,
                )
            )
    return rows


def seed_default_categories(category_repo: CategoryRepository) -> list[Category]:
    """Create the built-in categories when the store is empty.

    Returns the categories that were created; an already-populated store is
    left untouched and yields an empty list.
    """

    if category_repo.load_categories():
        return []
    created = [category_repo.create(category) for category in default_categories()]
    logger.info("Seeded default categories", extra={"count": len(created)})
    return created
