"""
Mapping API routes.

Backs the ERP mapping wizard in the transaction detail view. The
configuration travels with every request; nothing is stored.
"""

from typing import Any

from fastapi import APIRouter, Body

from config import default_mapping_configuration
from models.mapping import (
    MappingConfiguration,
    MappingRequest,
    SourceOptions,
    ValidationResponse,
)
from services.mapping_service import get_mapping_service

router = APIRouter(prefix="/api/mapping", tags=["Mapping"])


@router.get("/defaults", response_model=MappingConfiguration)
async def get_defaults():
    """
    Get the default mapping configuration.

    Returns a fresh configuration; each session starts from it.
    """
    return default_mapping_configuration()


@router.post("/sources", response_model=SourceOptions)
async def list_sources(document: dict[str, Any] = Body(...)):
    """
    Get selectable source fields for a transaction.

    Args:
        document: Transaction record

    Returns:
        Order-level and line-item source options
    """
    return get_mapping_service().sources(document)


@router.post("/validate", response_model=ValidationResponse)
async def validate_mapping(data: MappingRequest):
    """
    Validate a mapping against a transaction.

    Returns:
        Error messages and the "N/M mapped" progress
    """
    service = get_mapping_service()
    errors = service.validate(data.document, data.configuration)
    return ValidationResponse(
        errors=errors,
        progress=service.progress(data.configuration),
    )


@router.post("/transform")
async def transform_transaction(data: MappingRequest):
    """
    Transform a transaction into the ERP document.

    Raises:
        422: Mapping has validation errors (listed in details.errors)
    """
    output = get_mapping_service().prepare_submission(data.document, data.configuration)
    return output
