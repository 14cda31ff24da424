"""
Transaction models.

A stored transaction is a thin row wrapping a JSON blob. The blob is
exposed to the mapping engine as a plain dict so unknown keys survive.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field

from models.base import BaseSchema, CamelSchema


class TransactionStatus(str, Enum):
    """Status derived from the card gateway response."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class TransactionRow(BaseSchema):
    """One row of the transactions table, as read by the persistence layer."""

    model_config = ConfigDict(populate_by_name=True)

    transaction_id: int = Field(..., alias="TransactionId")
    integration: str = Field(..., alias="Integration")
    reference_key: str = Field("", description="Reference key column")
    reference_value: str = Field("", description="Reference value column")
    blob_path: Optional[str] = Field(None, description="Path of the source PDF")
    created_on: datetime
    json_text: str = Field(..., alias="JSON", description="Raw transaction JSON")


class TransactionStats(CamelSchema):
    """Counts per status."""

    total: int = 0
    completed: int = 0
    processing: int = 0
    pending: int = 0
    failed: int = 0


class TransactionRecordsRequest(BaseSchema):
    rows: list[TransactionRow]


class TransactionRecordsResponse(CamelSchema):
    records: list[dict[str, Any]]
    stats: TransactionStats
