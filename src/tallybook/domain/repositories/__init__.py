"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .transaction import TransactionRepository

__all__ = [
    "CategoryRepository",
    "TransactionRepository",
]
