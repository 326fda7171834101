"""Fixtures for AWS client tests."""

from typing import Any, Dict, List, Optional

import pytest

from infrastructure.clients.aws import SessionProvider
from tests.fixtures.aws_clients import FakeClient


@pytest.fixture
def fake_client_factory():
    """Factory for FakeClient instances.

    Example:
        client = fake_client_factory(api_responses={"get_item": {"Item": {...}}})
        client = fake_client_factory(paginated_pages=[{"Items": [...]}])
    """

    def _factory(
        paginated_pages: Optional[List[Dict[str, Any]]] = None,
        api_responses: Optional[Dict[str, Any]] = None,
    ) -> FakeClient:
        return FakeClient(paginated_pages=paginated_pages, api_responses=api_responses)

    return _factory


@pytest.fixture
def session_provider():
    return SessionProvider(region="ca-central-1", endpoint_url="http://localhost:4566")
