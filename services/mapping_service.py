"""
Mapping service for the ERP mapping wizard.

Ties the resolver, validator and transform engine together for one
transaction and one mapping configuration. Validation gates submission:
prepare_submission() refuses to transform a mapping with findings.
"""

from typing import Any, Optional

import structlog

from config import settings
from exceptions import MappingValidationError
from models.mapping import (
    EMPTY_SOURCE,
    MappingConfiguration,
    MappingProgress,
    SourceOptions,
    VirtualAddress,
)
from services.mapping_validator import mapping_progress, validate
from services.path_resolver import enumerate_paths
from services.transform_service import transform

logger = structlog.get_logger(__name__)


def available_sources(document: Any, array_field: Optional[str] = None) -> list[str]:
    """
    Selector options for order-level entries.

    Order: the unset token, the virtual addresses, then the document's
    own paths as enumerate_paths() lists them.
    """
    array_field = array_field or settings.line_items_field
    return (
        [EMPTY_SOURCE]
        + [token.value for token in VirtualAddress]
        + enumerate_paths(document, array_field)
    )


def available_line_item_sources(document: Any, array_field: Optional[str] = None) -> list[str]:
    """Selector options for line-item entries: keys of the first line item."""
    array_field = array_field or settings.line_items_field
    items = document.get(array_field) if isinstance(document, dict) else None
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return [EMPTY_SOURCE]
    return [EMPTY_SOURCE] + list(items[0].keys())


class MappingService:
    """
    Mapping operations for the transaction detail view.

    Stateless apart from settings; the configuration belongs to the
    caller's editing session.
    """

    def __init__(self, enforce_required: Optional[bool] = None):
        if enforce_required is None:
            enforce_required = settings.mapping_enforce_required
        self.enforce_required = enforce_required

    def sources(self, document: dict) -> SourceOptions:
        return SourceOptions(
            sources=available_sources(document),
            line_item_sources=available_line_item_sources(document),
        )

    def validate(self, document: dict, configuration: MappingConfiguration) -> list[str]:
        """
        Validate a configuration against a transaction.

        Returns:
            Ordered error messages (empty when valid)
        """
        return validate(
            configuration.all_entries(),
            document,
            enforce_required=self.enforce_required,
        )

    def progress(self, configuration: MappingConfiguration) -> MappingProgress:
        """Required-field coverage across groups and line items."""
        return mapping_progress(
            configuration.all_entries() + list(configuration.line_items)
        )

    def transform(self, document: dict, configuration: MappingConfiguration) -> dict[str, Any]:
        """Transform without validating first."""
        return transform(document, configuration.groups, configuration.line_items)

    def prepare_submission(
        self,
        document: dict,
        configuration: MappingConfiguration,
    ) -> dict[str, Any]:
        """
        Validate, then transform.

        Args:
            document: Transaction record
            configuration: Session mapping

        Returns:
            ERP output document

        Raises:
            MappingValidationError: Validation produced findings
        """
        errors = self.validate(document, configuration)
        if errors:
            logger.info(
                "mapping_submission_blocked",
                transaction_id=document.get("id") if isinstance(document, dict) else None,
                error_count=len(errors),
            )
            raise MappingValidationError(errors)

        output = self.transform(document, configuration)
        logger.info(
            "mapping_submission_prepared",
            transaction_id=document.get("id") if isinstance(document, dict) else None,
            field_count=len(output),
        )
        return output


# Singleton instance
_mapping_service: Optional[MappingService] = None


def get_mapping_service() -> MappingService:
    """Get or create MappingService instance."""
    global _mapping_service
    if _mapping_service is None:
        _mapping_service = MappingService()
    return _mapping_service
