"""Ordered in-memory store of conversation turns.

The store is append-only with one exception: the content of an assistant
turn grows in place while its response is streaming. Insertion order is
chronological order and is also the order replayed to the remote service.
"""

import logging
from collections.abc import Callable

from src.models.schemas import Role, Turn

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ConversationStore:
    """Single source of truth for what is rendered and what is sent."""

    def __init__(self) -> None:
        self._turns: list[Turn] = []
        self._index: dict[str, int] = {}
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._turns)

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked after every mutation."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def append(self, turn: Turn) -> None:
        """Append a fully-formed turn.

        Raises:
            ValueError: If a turn with the same id is already stored.
        """
        if turn.id in self._index:
            raise ValueError(f"Duplicate turn id: {turn.id}")
        self._index[turn.id] = len(self._turns)
        self._turns.append(turn)
        self._notify()

    def start_or_append_assistant_fragment(self, turn_id: str, fragment: str) -> None:
        """Create the assistant turn on first fragment, then grow it in place.

        Args:
            turn_id: Id of the assistant turn for the current stream.
            fragment: Text to append.

        Raises:
            ValueError: If turn_id belongs to a user turn.
        """
        position = self._index.get(turn_id)
        if position is None:
            self.append(Turn(id=turn_id, role=Role.ASSISTANT, content=fragment))
            return

        current = self._turns[position]
        if current.role is not Role.ASSISTANT:
            raise ValueError(f"Turn {turn_id} is not an assistant turn")
        self._turns[position] = current.model_copy(
            update={"content": current.content + fragment}
        )
        self._notify()

    def get(self, turn_id: str) -> Turn | None:
        position = self._index.get(turn_id)
        return None if position is None else self._turns[position]

    def snapshot(self) -> tuple[Turn, ...]:
        """Return a read-only copy of the turns in chronological order."""
        return tuple(self._turns)
