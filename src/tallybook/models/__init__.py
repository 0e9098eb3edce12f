"""SQLModel table exports."""

from .category import Category
from .transaction import TRANSACTION_TYPES, Transaction

__all__ = [
    "Category",
    "Transaction",
    "TRANSACTION_TYPES",
]
