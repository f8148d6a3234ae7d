"""Incremental decoder for streamed completion responses.

The response body is a sequence of newline-delimited records. Lines that
start with ``data:`` carry a JSON event; everything else is ignored. A
record may be split across any number of network chunks, so the decoder
keeps the trailing partial line of each chunk and prepends it to the next.

Each event is decoded against the StreamEvent schema. Text fragments are
appended to a single assistant turn whose id is generated on the first
fragment of the stream and reused until the stream ends.
"""

import codecs
import json
import logging
import uuid
from collections.abc import AsyncIterable, Callable
from dataclasses import dataclass, field

import httpx
from pydantic import ValidationError

from src.chat.store import ConversationStore
from src.errors import MalformedRecordError, StreamReadError, TransportError
from src.models.schemas import StreamEvent

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"


def _new_utf8_decoder() -> codecs.IncrementalDecoder:
    return codecs.getincrementaldecoder("utf-8")(errors="replace")


@dataclass
class StreamState:
    """Per-stream decoding state, discarded when the stream ends.

    Attributes:
        accumulated_text: All fragments received so far, in order.
        assistant_turn_id: Id of the turn being filled, set on first fragment.
        remainder: Trailing partial line carried over from the previous chunk.
    """

    accumulated_text: str = ""
    assistant_turn_id: str | None = None
    remainder: str = ""
    byte_decoder: codecs.IncrementalDecoder = field(default_factory=_new_utf8_decoder)


def parse_record(line: str) -> StreamEvent | None:
    """Decode one line of the stream.

    Returns:
        The decoded event, or None for non-data lines, keepalives and
        records whose shape is not recognised.

    Raises:
        MalformedRecordError: If the record body is not valid JSON.
    """
    line = line.rstrip("\r")
    if not line.startswith(DATA_PREFIX):
        return None

    body = line[len(DATA_PREFIX):].strip()
    if not body:
        return None

    try:
        raw = json.loads(body)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(f"Invalid JSON in data record: {e}") from e

    try:
        return StreamEvent.model_validate(raw)
    except ValidationError as e:
        logger.debug(f"Ignoring record with unrecognised shape: {e.error_count()} error(s)")
        return None


def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return f"API error: {response.status_code} - {message or 'Unknown error'}"


class StreamingResponseDecoder:
    """Turns a streamed response into updates of one assistant turn."""

    def __init__(
        self,
        store: ConversationStore,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the decoder.

        Args:
            store: Conversation receiving the assistant turn.
            id_factory: Generates the assistant turn id. Defaults to uuid4.
        """
        self._store = store
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    async def consume(self, response: httpx.Response) -> str:
        """Check the response status, then decode its body.

        Args:
            response: Streaming response from the transport.

        Returns:
            The full assistant text received.

        Raises:
            TransportError: If the response status is not a success.
            StreamReadError: If reading the body fails.
        """
        if not response.is_success:
            try:
                await response.aread()
            except httpx.HTTPError as e:
                raise TransportError(
                    f"API error: {response.status_code}", response.status_code
                ) from e
            raise TransportError(_error_message(response), response.status_code)

        return await self.decode(response.aiter_bytes())

    async def decode(self, chunks: AsyncIterable[bytes]) -> str:
        """Decode a byte stream until it ends.

        Args:
            chunks: Async iterable of raw body chunks.

        Returns:
            The full assistant text received.

        Raises:
            StreamReadError: If the source fails mid-stream.
        """
        state = StreamState()
        try:
            async for chunk in chunks:
                self.feed(state, chunk)
        except (httpx.HTTPError, OSError) as e:
            logger.warning(f"Stream read failed after {len(state.accumulated_text)} chars: {e}")
            raise StreamReadError(f"Failed to read response stream: {e}") from e

        self.finish(state)
        return state.accumulated_text

    def feed(self, state: StreamState, chunk: bytes) -> None:
        """Process one chunk, keeping any incomplete trailing line in state."""
        text = state.remainder + state.byte_decoder.decode(chunk)
        *lines, state.remainder = text.split("\n")
        for line in lines:
            self._handle_line(state, line)

    def finish(self, state: StreamState) -> None:
        """Flush bytes and the last line when the stream ends without a newline."""
        text = state.remainder + state.byte_decoder.decode(b"", final=True)
        state.remainder = ""
        for line in text.split("\n"):
            self._handle_line(state, line)

    def _handle_line(self, state: StreamState, line: str) -> None:
        try:
            event = parse_record(line)
        except MalformedRecordError as e:
            logger.warning(f"Skipping malformed record: {e}")
            return

        if event is None:
            return

        fragment = event.first_text()
        if not fragment:
            logger.debug("Record carried no text fragment")
            return

        if state.assistant_turn_id is None:
            state.assistant_turn_id = self._id_factory()
        state.accumulated_text += fragment
        self._store.start_or_append_assistant_fragment(state.assistant_turn_id, fragment)
