from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class WireRole(str, Enum):
    """Role names understood by the remote completion endpoint."""

    USER = "user"
    MODEL = "model"


class SessionState(str, Enum):
    """Lifecycle states of a SessionController."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    CLOSED = "closed"


class SubmissionStatus(str, Enum):
    """Outcome of a single submit() call."""

    COMPLETED = "completed"
    REJECTED = "rejected"
    INVALID = "invalid"
    FAILED = "failed"


class Turn(BaseModel):
    """A single message in the conversation.

    Attributes:
        id: Identifier unique within one ConversationStore.
        role: Who authored the turn.
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    role: Role
    content: str


class AttachedDocument(BaseModel):
    """A binary document attached to a submission.

    Attributes:
        name: Original file name, used in the request section header.
        mime_type: Declared content type of the payload.
        payload: Raw document bytes.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    payload: bytes


class PendingSubmission(BaseModel):
    """User input between pressing send and dispatching the request."""

    model_config = ConfigDict(frozen=True)

    typed_text: str = ""
    document: AttachedDocument | None = None

    @field_validator("typed_text", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip whitespace from typed text before validation."""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def is_empty(self) -> bool:
        return not self.typed_text and self.document is None


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class HistoryEntry(BaseModel):
    """One turn as it is sent to the remote service."""

    model_config = ConfigDict(frozen=True)

    role: WireRole
    parts: tuple[TextPart, ...]

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts)


class RemoteRequestPayload(BaseModel):
    """Request projection of the conversation, rebuilt for every submission.

    Attributes:
        history: Prior turns followed by the new user entry, oldest first.
    """

    model_config = ConfigDict(frozen=True)

    history: tuple[HistoryEntry, ...]

    def to_request_body(self) -> dict[str, list[dict]]:
        """Serialize to the JSON body of a streamGenerateContent call."""
        return {"contents": [entry.model_dump(mode="json") for entry in self.history]}


# Stream event schema. Every level is optional so that records carrying only
# metadata (usage, safety ratings, finish reasons) decode to "no fragment".


class EventPart(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None


class CandidateContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parts: list[EventPart] = Field(default_factory=list)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: CandidateContent | None = None


class StreamEvent(BaseModel):
    """A decoded data record from the response stream."""

    model_config = ConfigDict(extra="ignore")

    candidates: list[Candidate] = Field(default_factory=list)

    def first_text(self) -> str | None:
        """Return the first candidate's first part text, if present."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


class SubmissionResult(BaseModel):
    """Result channel returned to the caller of SessionController.submit.

    Attributes:
        status: How the submission ended.
        error: Human-readable error message, if any.
    """

    status: SubmissionStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.COMPLETED
