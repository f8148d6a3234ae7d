"""Pydantic models for conversation state and the wire format.

Provides type safety and validation for everything that crosses a
component boundary.

Models:
    - Turn: Individual message in the conversation
    - PendingSubmission: User input awaiting dispatch
    - RemoteRequestPayload: History projected into the request format
    - StreamEvent: Decoded data record from the response stream
    - SubmissionResult: Outcome of a submission
"""

from src.models.schemas import (
    AttachedDocument,
    Candidate,
    CandidateContent,
    EventPart,
    HistoryEntry,
    PendingSubmission,
    RemoteRequestPayload,
    Role,
    SessionState,
    StreamEvent,
    SubmissionResult,
    SubmissionStatus,
    TextPart,
    Turn,
    WireRole,
)

__all__ = [
    "AttachedDocument",
    "Candidate",
    "CandidateContent",
    "EventPart",
    "HistoryEntry",
    "PendingSubmission",
    "RemoteRequestPayload",
    "Role",
    "SessionState",
    "StreamEvent",
    "SubmissionResult",
    "SubmissionStatus",
    "TextPart",
    "Turn",
    "WireRole",
]
