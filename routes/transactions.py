"""
Transaction API routes.

Converts stored rows handed over by the persistence layer into
transaction records with a status summary.
"""

from fastapi import APIRouter
import structlog

from models.transaction import TransactionRecordsRequest, TransactionRecordsResponse
from services.transaction_service import get_transaction_service

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


@router.post("/records", response_model=TransactionRecordsResponse)
async def build_records(data: TransactionRecordsRequest):
    """
    Build transaction records from stored rows.

    Rows with invalid JSON come back as pending "Unknown" records.
    """
    service = get_transaction_service()
    records = service.records_from_rows(data.rows)
    logger.info("transaction_records_requested", count=len(records))
    return TransactionRecordsResponse(
        records=records,
        stats=service.summarize_statuses(records),
    )
