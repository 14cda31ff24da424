"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest

from config import default_mapping_configuration
from models.mapping import MappingConfiguration, MappingGroup
from tests.factories import MappingEntryFactory, TransactionFactory


# ===================
# DOCUMENTS
# ===================

@pytest.fixture
def sample_transaction() -> dict:
    """Full transaction document with addresses, card details and one line."""
    return TransactionFactory.create()


@pytest.fixture
def scenario_document() -> dict:
    """Small order from the reference mapping scenario."""
    return {
        "id": "42",
        "purchaseOrderReference": "PO-9",
        "orderTotal": 19.5,
        "emailAddress": "a@b.com",
        "orderLines": [
            {"style": "S1", "sku": "K1", "quantity": 2, "unitPrice": 5},
        ],
    }


# ===================
# MAPPINGS
# ===================

@pytest.fixture
def scenario_configuration() -> MappingConfiguration:
    """Reference ID + Email, with sku as the only line-item field."""
    return MappingConfiguration(
        groups=(
            MappingGroup(
                name="order",
                entries=(
                    MappingEntryFactory.create("Reference ID", "id"),
                    MappingEntryFactory.email("Email", "emailAddress"),
                ),
            ),
        ),
        line_items=(MappingEntryFactory.line_item("sku", "sku"),),
    )


@pytest.fixture
def default_configuration() -> MappingConfiguration:
    return default_mapping_configuration()


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/mapping/defaults")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
