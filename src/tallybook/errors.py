"""Exception types raised across TallyBook."""

from __future__ import annotations


class TallyBookError(Exception):
    """Base class for application errors."""


class InvalidInputError(TallyBookError, ValueError):
    """A caller handed the engine data it cannot interpret.

    Raised for non-finite amounts, dates that are not datetimes, and unknown
    range or sort keys. Well-formed data never triggers it.
    """


class ValidationError(InvalidInputError):
    """Transaction input rejected by the create/update validation rules."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        first = next(iter(self.errors.values()), "Validation failed")
        super().__init__(first)


class TransactionNotFoundError(TallyBookError, LookupError):
    """No transaction exists with the requested id."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found: {transaction_id}")
