"""
Transaction record service.

Converts stored rows (metadata columns plus a JSON blob) into the
transaction records the dashboard and the mapping engine work with,
and summarizes records by status.
"""

import json
from typing import Any, Iterable, Optional

import structlog

from exceptions import TransactionParseError
from models.transaction import TransactionRow, TransactionStats, TransactionStatus

logger = structlog.get_logger(__name__)

# cardDetails.responseText -> status
RESPONSE_STATUSES = {
    "Approved": TransactionStatus.COMPLETED,
    "Processing": TransactionStatus.PROCESSING,
    "Failed": TransactionStatus.FAILED,
}

UNKNOWN_CUSTOMER = "Unknown"


def response_text(data: dict) -> Optional[str]:
    """cardDetails.responseText, or None when absent or not a string."""
    card = data.get("cardDetails")
    response = card.get("responseText") if isinstance(card, dict) else None
    return response if isinstance(response, str) else None


def derive_status(data: dict) -> TransactionStatus:
    """Status from the card gateway response text; pending when unknown."""
    response = response_text(data)
    if response is None:
        return TransactionStatus.PENDING
    return RESPONSE_STATUSES.get(response, TransactionStatus.PENDING)


def derive_customer_name(data: dict) -> Optional[str]:
    """
    "First Last" from the shipping address, falling back to the email.
    """
    shipping = data.get("shippingAddress")
    if isinstance(shipping, dict):
        first = shipping.get("firstName")
        last = shipping.get("lastName")
        if first and last:
            return f"{first} {last}"
    return data.get("emailAddress")


def parse_row_json(row: TransactionRow) -> dict[str, Any]:
    """
    Parse the JSON blob of a stored row.

    Raises:
        TransactionParseError: Blob is not valid JSON or not a JSON object
    """
    transaction_id = str(row.transaction_id)
    try:
        data = json.loads(row.json_text)
    except json.JSONDecodeError as e:
        raise TransactionParseError(transaction_id, str(e))

    if not isinstance(data, dict):
        raise TransactionParseError(transaction_id, "JSON root is not an object")
    return data


class TransactionService:
    """Row to record conversion and status summaries."""

    def _placeholder_record(self, row: TransactionRow) -> dict[str, Any]:
        """Record for a row whose JSON cannot be read; row metadata is kept."""
        return {
            "id": str(row.transaction_id),
            "integrationService": row.integration,
            "referenceKey": row.reference_key,
            "referenceValue": row.reference_value,
            "purchaseOrderReference": "",
            "status": TransactionStatus.PENDING.value,
            "createdOn": row.created_on.isoformat(),
            "customerName": UNKNOWN_CUSTOMER,
            "orderTotal": 0,
            "orderLines": [],
            "blobPath": row.blob_path or "",
        }

    def record_from_row(self, row: TransactionRow) -> dict[str, Any]:
        """
        Build a transaction record from a stored row.

        Every key of the JSON blob is preserved. Display fields
        (status, customerName, orderTotal, ...) are added on top.
        A row with unreadable JSON becomes a pending placeholder record
        with customerName "Unknown".

        Args:
            row: Stored transaction row

        Returns:
            Transaction record
        """
        try:
            data = parse_row_json(row)
        except TransactionParseError as e:
            logger.warning(
                "transaction_json_invalid",
                transaction_id=str(row.transaction_id),
                error=e.details.get("reason"),
            )
            return self._placeholder_record(row)

        total = data.get("totalPriceWithGst")
        record = {
            **data,
            "id": str(row.transaction_id),
            "integrationService": row.integration,
            "referenceKey": row.reference_key,
            "referenceValue": row.reference_value,
            "purchaseOrderReference": data.get("purchaseOrderReference"),
            "status": derive_status(data).value,
            "createdOn": row.created_on.isoformat(),
            "customerName": derive_customer_name(data),
            "orderTotal": total if total else 0,
            "orderLines": data.get("orderLines") or [],
            "blobPath": row.blob_path,
        }
        return record

    def records_from_rows(self, rows: Iterable[TransactionRow]) -> list[dict[str, Any]]:
        records = [self.record_from_row(row) for row in rows]
        logger.debug("transaction_records_built", count=len(records))
        return records

    def summarize_statuses(self, records: Iterable[dict]) -> TransactionStats:
        """
        Count records per status from the gateway response text.

        Approved, Processing and Failed map to their statuses. Pending
        counts only records with no response text or an empty one, so an
        unrecognized response ("Declined") adds to the total alone.
        """
        counts = {status: 0 for status in TransactionStatus}
        total = 0
        for record in records:
            total += 1
            response = response_text(record)
            if not response:
                counts[TransactionStatus.PENDING] += 1
            elif response in RESPONSE_STATUSES:
                counts[RESPONSE_STATUSES[response]] += 1
        return TransactionStats(total=total, **{s.value: counts[s] for s in TransactionStatus})


# Singleton instance
_transaction_service: Optional[TransactionService] = None


def get_transaction_service() -> TransactionService:
    """Get or create TransactionService instance."""
    global _transaction_service
    if _transaction_service is None:
        _transaction_service = TransactionService()
    return _transaction_service
