"""Projection of the conversation into the remote request format.

All functions here are pure: no I/O, deterministic for given inputs.
"""

from collections.abc import Sequence

from src.models.schemas import HistoryEntry, RemoteRequestPayload, Role, TextPart, Turn, WireRole

ROLE_TO_WIRE: dict[Role, WireRole] = {
    Role.USER: WireRole.USER,
    Role.ASSISTANT: WireRole.MODEL,
}


def build_user_text(
    typed_text: str,
    document_name: str | None = None,
    document_text: str | None = None,
) -> str:
    """Combine typed text with extracted document text for the request.

    Document text goes under a header naming its source file.
    """
    text = typed_text.strip()
    if document_text:
        text += f"\n\n--- Content from {document_name or 'document'} ---\n{document_text}"
    return text


def display_text(typed_text: str, document_name: str | None = None) -> str:
    """Content of the visible user turn: typed text, or the attached file name."""
    text = typed_text.strip()
    if text or not document_name:
        return text
    return f"File uploaded: {document_name}"


def _entry(role: WireRole, text: str) -> HistoryEntry:
    return HistoryEntry(role=role, parts=(TextPart(text=text),))


def compose_request(prior_turns: Sequence[Turn], new_user_text: str) -> RemoteRequestPayload:
    """Build the request payload from prior history plus the new user text.

    Args:
        prior_turns: Snapshot taken before the new user turn was appended.
        new_user_text: Full text of the new user entry, document text included.

    Returns:
        Payload whose last entry is the new user text.
    """
    history = [_entry(ROLE_TO_WIRE[turn.role], turn.content) for turn in prior_turns]
    history.append(_entry(WireRole.USER, new_user_text))
    return RemoteRequestPayload(history=tuple(history))
