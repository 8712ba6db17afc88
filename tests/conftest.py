"""
Shared pytest fixtures for the arubaos-api test suite.

Provides a test configuration pointing at a fake controller and clients in
the unauthenticated and authenticated states. HTTP traffic is mocked with
respx in the individual tests.
"""

from collections.abc import AsyncGenerator

import pytest

from arubaos_api import ArubaOsApiClient, ClientConfig
from tests.constants import TEST_HOST, TEST_TOKEN


@pytest.fixture
def config() -> ClientConfig:
    """Create a test configuration with default port and config path."""
    return ClientConfig(host=TEST_HOST, username="admin", password="abc")


@pytest.fixture
async def client(config: ClientConfig) -> AsyncGenerator[ArubaOsApiClient, None]:
    """Create an API client with no session."""
    async with ArubaOsApiClient(config) as client:
        yield client


@pytest.fixture
async def authed_client(config: ClientConfig) -> AsyncGenerator[ArubaOsApiClient, None]:
    """Create an API client that already holds a session token."""
    async with ArubaOsApiClient(config) as client:
        client.session.token = TEST_TOKEN
        yield client
