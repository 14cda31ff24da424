"""
Business logic services.

Each service handles one domain area.
"""

from services.mapping_service import MappingService, get_mapping_service
from services.transaction_service import TransactionService, get_transaction_service

__all__ = [
    "MappingService",
    "get_mapping_service",
    "TransactionService",
    "get_transaction_service",
]
