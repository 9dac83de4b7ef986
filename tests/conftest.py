"""
Pytest configuration and shared fixtures for the product filter tests.
"""
import os
import sys
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def sample_product_dict() -> dict:
    """Product record as stored in vector metadata."""
    return {
        "id": "blue-M-1",
        "name": "Blue shirt (M)",
        "imageId": "/blue_M.png",
        "color": "blue",
        "size": "M",
        "price": 19.99,
    }


@pytest.fixture
def sample_results(sample_product_dict: dict) -> list[dict]:
    """Index matches in ranked order, as returned by VectorIndexClient.query."""
    results = []
    for i, price in enumerate([19.99, 29.99, 9.99]):
        metadata = dict(sample_product_dict, id=f"blue-M-{i}", price=price)
        results.append({
            "id": metadata["id"],
            "score": 0.9 - i * 0.1,
            "vector": [2, 1, price],
            "metadata": metadata,
        })
    return results


@pytest.fixture
def valid_payload() -> dict:
    return {
        "color": ["blue", "green"],
        "size": ["S", "M", "L"],
        "price": [10, 50],
        "sort": "price-desc",
    }


# ============================================================================
# Fixtures: Settings and Services
# ============================================================================

@pytest.fixture
def test_settings():
    """Settings with vector credentials and default catalog prices."""
    from config.settings import get_settings_for_testing
    return get_settings_for_testing()


@pytest.fixture
def mock_vector_client(sample_results):
    """VectorIndexClient double whose query returns sample_results."""
    from search.vector_client import VectorIndexClient
    client = MagicMock(spec=VectorIndexClient)
    client.query.return_value = sample_results
    return client


@pytest.fixture
def product_search_service(mock_vector_client, test_settings):
    from search.product_search import ProductSearchService
    return ProductSearchService(vector_client=mock_vector_client, settings=test_settings)


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from api.app import create_app
    return create_app()


@pytest.fixture
def client(app, product_search_service) -> Generator:
    """TestClient with the product search service replaced by one using a mock index."""
    from fastapi.testclient import TestClient

    with patch("api.routes.products.get_product_search_service", return_value=product_search_service):
        with TestClient(app) as test_client:
            yield test_client


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "slow: marks tests as slow")


# ============================================================================
# Skip conditions
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests if no vector index is configured."""
    skip_integration = pytest.mark.skip(reason="Integration tests require UPSTASH_VECTOR_REST_URL")

    if os.getenv("UPSTASH_VECTOR_REST_URL"):
        return

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
