"""Byte-stream helpers standing in for the remote completion service."""

import asyncio
import json
from collections.abc import AsyncGenerator, AsyncIterator, Iterable

import httpx


def sse_record(text: str, line_end: str = "\n") -> bytes:
    """Encode one streamed event carrying a text fragment."""
    event = {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
    return f"data: {json.dumps(event, ensure_ascii=False)}{line_end}{line_end}".encode()


async def chunks_of(*chunks: bytes) -> AsyncGenerator[bytes]:
    """Async byte source yielding the given chunks in order."""
    for chunk in chunks:
        yield chunk


class ChunkStream(httpx.AsyncByteStream):
    """Response body that yields fixed chunks, then optionally waits or fails.

    Args:
        chunks: Body chunks delivered in order.
        gate: If set, the stream blocks on it after the last chunk.
        error: If set, raised after the last chunk (and after the gate).
    """

    def __init__(
        self,
        chunks: Iterable[bytes],
        gate: asyncio.Event | None = None,
        error: Exception | None = None,
    ) -> None:
        self._chunks = list(chunks)
        self._gate = gate
        self._error = error

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._gate is not None:
            await self._gate.wait()
        if self._error is not None:
            raise self._error


class FakeRemote:
    """Scripted completion endpoint recording every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception] = []

    def reply(
        self,
        *chunks: bytes,
        gate: asyncio.Event | None = None,
        error: Exception | None = None,
    ) -> None:
        """Queue a 200 streaming reply."""
        stream = ChunkStream(chunks, gate=gate, error=error)
        self.responses.append(httpx.Response(200, stream=stream))

    def fail(self, status_code: int, body: dict | None = None) -> None:
        """Queue an error status reply."""
        self.responses.append(httpx.Response(status_code, json=body or {}))

    def raise_(self, error: Exception) -> None:
        """Queue a connection-level failure."""
        self.responses.append(error)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
