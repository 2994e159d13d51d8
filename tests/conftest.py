"""Pytest fixtures and shared test configuration.

Fixtures:
    - async_client: HTTPX client bound to the FastAPI app
    - relay_config: RelayConfig that needs no environment
    - fake_relay: Relay service stub patched into the chat route
    - ready_store: Session store already marked ready
"""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from relaychat.api import app
from relaychat.relay.config import RelayConfig
from relaychat.ui.session import Connectivity, SessionStore


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(
        api_key="test-key",
        model_name="gemini-test",
        max_output_tokens=256,
        system_instruction="Be brief.",
        request_timeout=5.0,
    )


@pytest.fixture
def fake_relay() -> Generator[MagicMock]:
    """Patch the chat route's relay service with a stub replying "4"."""
    service = MagicMock()
    service.generate_reply = AsyncMock(return_value="4")
    with patch("relaychat.api.chat.get_relay_service", return_value=service):
        yield service


@pytest.fixture
def ready_store() -> SessionStore:
    store = SessionStore()
    store.set_connectivity(Connectivity.READY)
    return store
