"""
Custom exceptions module.

Exports the application error hierarchy rooted at AppError.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,

    # Mapping
    MappingValidationError,
    MappingEntryNotFoundError,

    # Transactions
    TransactionParseError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",

    # Mapping
    "MappingValidationError",
    "MappingEntryNotFoundError",

    # Transactions
    "TransactionParseError",
]
