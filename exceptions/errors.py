"""
Custom exception classes for the application.

The mapping core never raises for malformed documents; these errors
belong to the caller-level gate and the persistence boundary.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "MAPPING_VALIDATION_FAILED")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# MAPPING ERRORS
# ===================

class MappingValidationError(ValidationError):
    """Mapping has validation findings; submission refused."""

    def __init__(self, errors: list[str]):
        super().__init__(
            code="MAPPING_VALIDATION_FAILED",
            message=f"Mapping validation failed with {len(errors)} errors",
            details={"errors": list(errors)}
        )
        self.errors = list(errors)


class MappingEntryNotFoundError(NotFoundError):
    """No mapping entry at the given group/index."""

    def __init__(self, group: str, index: Optional[int] = None):
        super().__init__(
            resource="Mapping entry",
            identifier=group if index is None else f"{group}[{index}]",
            code="MAPPING_ENTRY_NOT_FOUND"
        )


# ===================
# TRANSACTION ERRORS
# ===================

class TransactionParseError(ValidationError):
    """Stored transaction JSON could not be parsed."""

    def __init__(self, transaction_id: str, reason: str):
        super().__init__(
            code="TRANSACTION_PARSE_ERROR",
            message=f"Transaction {transaction_id} has invalid JSON",
            details={"id": transaction_id, "reason": reason}
        )
