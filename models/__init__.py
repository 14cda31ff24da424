"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, CamelSchema
from models.mapping import (
    EMPTY_SOURCE,
    SanitizeOperation,
    DeclaredType,
    VirtualAddress,
    MappingEntry,
    LineItemMappingEntry,
    MappingGroup,
    MappingConfiguration,
    MappingProgress,
    MappingRequest,
    ValidationResponse,
    SourceOptions,
)
from models.transaction import (
    TransactionStatus,
    TransactionRow,
    TransactionStats,
    TransactionRecordsRequest,
    TransactionRecordsResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "CamelSchema",

    # Mapping
    "EMPTY_SOURCE",
    "SanitizeOperation",
    "DeclaredType",
    "VirtualAddress",
    "MappingEntry",
    "LineItemMappingEntry",
    "MappingGroup",
    "MappingConfiguration",
    "MappingProgress",
    "MappingRequest",
    "ValidationResponse",
    "SourceOptions",

    # Transactions
    "TransactionStatus",
    "TransactionRow",
    "TransactionStats",
    "TransactionRecordsRequest",
    "TransactionRecordsResponse",
]
