"""SQLModel repository implementations."""

from .category import SQLModelCategoryRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelTransactionRepository",
]
