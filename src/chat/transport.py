"""HTTP transport for the streaming completion endpoint."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from src.chat.config import ChatConfig, get_chat_config
from src.errors import TransportError
from src.models.schemas import RemoteRequestPayload

logger = logging.getLogger(__name__)


class GeminiTransport:
    """Sends request payloads and exposes the streamed response.

    Status handling is left to the decoder; this class only turns
    connection-level failures into TransportError.
    """

    def __init__(
        self,
        config: ChatConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Optional chat configuration.
                    Loads from environment if not provided.
            client: Optional HTTP client. An owned client is created otherwise.
        """
        self._config = config or get_chat_config()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._config.timeout)

    def _params(self) -> dict[str, str]:
        params = {"alt": "sse"}
        if self._config.api_key:
            params["key"] = self._config.api_key
        return params

    @asynccontextmanager
    async def open_stream(self, payload: RemoteRequestPayload) -> AsyncIterator[httpx.Response]:
        """POST the payload and yield the streaming response.

        Args:
            payload: Composed request history.

        Yields:
            The response with its body not yet consumed.

        Raises:
            TransportError: If the service cannot be reached.
        """
        logger.debug(f"Dispatching request with {len(payload.history)} history entries")
        request = self._client.build_request(
            "POST",
            self._config.stream_url,
            params=self._params(),
            json=payload.to_request_body(),
            headers={"Accept": "text/event-stream"},
        )
        try:
            response = await self._client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"Connection failed: {e}") from e

        try:
            yield response
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
