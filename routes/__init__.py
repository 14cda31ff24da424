"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.mapping import router as mapping_router
from routes.transactions import router as transactions_router

__all__ = [
    "mapping_router",
    "transactions_router",
]
