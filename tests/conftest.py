"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - chat_config: Configuration with the greeting disabled
    - store: Empty ConversationStore
    - blank_pdf_bytes: Real three-page PDF without text
    - remote: Fake completion endpoint backed by httpx.MockTransport
    - make_session: Factory for SessionControllers wired to the fake endpoint

The remote service is replaced by httpx.MockTransport; no network access.
"""

import io
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from pypdf import PdfWriter

from src.chat.config import ChatConfig
from src.chat.session import SessionController
from src.chat.store import ConversationStore
from src.chat.transport import GeminiTransport
from tests.streams import FakeRemote


@pytest.fixture
def chat_config() -> ChatConfig:
    """Return configuration for tests.

    Returns:
        ChatConfig with a fake key and no greeting turn.
    """
    return ChatConfig(
        api_key="test-key",
        base_url="https://llm.test/v1beta",
        model_name="gemini-test",
        timeout=5.0,
        greeting="",
    )


@pytest.fixture
def store() -> ConversationStore:
    return ConversationStore()


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """Build a real three-page PDF with no text content.

    Returns:
        Raw PDF bytes.
    """
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=612, height=792)
    writer.add_metadata({"/Title": "Quarterly Report"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
async def make_session(
    chat_config: ChatConfig, remote: FakeRemote
) -> AsyncGenerator[Callable[..., SessionController]]:
    """Create SessionControllers talking to the fake remote.

    Yields:
        Factory accepting SessionController keyword overrides.
    """
    clients: list[httpx.AsyncClient] = []

    def factory(**kwargs: object) -> SessionController:
        client = httpx.AsyncClient(transport=httpx.MockTransport(remote.handler))
        clients.append(client)
        config = kwargs.pop("config", chat_config)
        transport = GeminiTransport(config=config, client=client)
        return SessionController(config=config, transport=transport, **kwargs)

    yield factory

    for client in clients:
        await client.aclose()
