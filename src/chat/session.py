"""Turn lifecycle orchestration.

SessionController validates input, extracts attached document text,
records the user turn, composes the request, dispatches it and decodes
the streamed reply into the conversation. At most one submission is in
flight at a time: a submit() while another is running is rejected, never
queued.
"""

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable

from src.chat.composer import build_user_text, compose_request, display_text
from src.chat.config import ChatConfig, get_chat_config
from src.chat.decoder import StreamingResponseDecoder
from src.chat.store import ConversationStore
from src.chat.transport import GeminiTransport
from src.errors import ChatClientError, DocumentExtractionError, SubmissionValidationError
from src.models.schemas import (
    AttachedDocument,
    PendingSubmission,
    Role,
    SessionState,
    SubmissionResult,
    SubmissionStatus,
    Turn,
)
from src.parsing.pdf_parser import extract_text

logger = logging.getLogger(__name__)

Extractor = Callable[[bytes, str], Awaitable[str]]

FAILURE_PREFIX = "Sorry, something went wrong: "


class SessionController:
    """Owns one conversation and runs submissions against it.

    Observable effects land in ``store`` and in the ``error`` slot; each
    submit() call also returns a SubmissionResult.
    """

    def __init__(
        self,
        config: ChatConfig | None = None,
        transport: GeminiTransport | None = None,
        store: ConversationStore | None = None,
        extractor: Extractor | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            config: Optional chat configuration.
                    Loads from environment if not provided.
            transport: Transport for the completion endpoint.
            store: Conversation to append to. A new one is created otherwise.
            extractor: Coroutine turning (payload, mime_type) into text.
            id_factory: Generates turn ids. Defaults to uuid4.
        """
        self._config = config or get_chat_config()
        self._transport = transport or GeminiTransport(self._config)
        self._extract = extractor or extract_text
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._state = SessionState.IDLE
        self._task: asyncio.Task | None = None
        self.store = store if store is not None else ConversationStore()
        self.error: str | None = None

        if self._config.greeting and not len(self.store):
            self.store.append(
                Turn(id=self._id_factory(), role=Role.ASSISTANT, content=self._config.greeting)
            )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is SessionState.SUBMITTING

    def dispatch(
        self, typed_text: str, document: AttachedDocument | None = None
    ) -> asyncio.Task[SubmissionResult]:
        """Schedule submit() as a background task (fire-and-forget)."""
        return asyncio.create_task(self.submit(typed_text, document))

    async def submit(
        self, typed_text: str, document: AttachedDocument | None = None
    ) -> SubmissionResult:
        """Run one submission from validation through stream completion.

        Args:
            typed_text: Text the user typed.
            document: Optional attached document.

        Returns:
            SubmissionResult describing how the submission ended.
        """
        if self._state is not SessionState.IDLE:
            logger.info(f"Submission rejected: session is {self._state.value}")
            return SubmissionResult(
                status=SubmissionStatus.REJECTED,
                error=f"Session is {self._state.value}",
            )

        submission = PendingSubmission(typed_text=typed_text, document=document)
        if submission.is_empty:
            error = SubmissionValidationError("Type a message or attach a document")
            self.error = str(error)
            return SubmissionResult(status=SubmissionStatus.INVALID, error=self.error)

        self._state = SessionState.SUBMITTING
        self._task = asyncio.current_task()
        self.error = None
        try:
            return await self._run(submission)
        finally:
            self._task = None
            if self._state is SessionState.SUBMITTING:
                self._state = SessionState.IDLE

    async def _run(self, submission: PendingSubmission) -> SubmissionResult:
        document = submission.document
        document_text: str | None = None

        if document is not None:
            try:
                document_text = await self._extract(document.payload, document.mime_type)
            except DocumentExtractionError as e:
                logger.warning(f"Document extraction failed for {document.name}: {e}")
                self.error = str(e)
                return SubmissionResult(status=SubmissionStatus.FAILED, error=self.error)
            except Exception as e:
                logger.exception(f"Unexpected error extracting {document.name}")
                self.error = f"Failed to read {document.name}: {str(e) or type(e).__name__}"
                return SubmissionResult(status=SubmissionStatus.FAILED, error=self.error)

        document_name = document.name if document is not None else None
        prior_turns = self.store.snapshot()
        self.store.append(
            Turn(
                id=self._id_factory(),
                role=Role.USER,
                content=display_text(submission.typed_text, document_name),
            )
        )
        payload = compose_request(
            prior_turns,
            build_user_text(submission.typed_text, document_name, document_text),
        )

        decoder = StreamingResponseDecoder(self.store, self._id_factory)
        try:
            async with self._transport.open_stream(payload) as response:
                text = await decoder.consume(response)
        except ChatClientError as e:
            logger.warning(f"Submission failed: {e}")
            return self._record_failure(str(e))
        except Exception as e:
            logger.exception("Unexpected error during submission")
            return self._record_failure(str(e) or type(e).__name__)

        logger.info(f"Submission completed with {len(text)} characters of response")
        return SubmissionResult(status=SubmissionStatus.COMPLETED)

    def _record_failure(self, message: str) -> SubmissionResult:
        self.error = message
        self.store.append(
            Turn(id=self._id_factory(), role=Role.ASSISTANT, content=FAILURE_PREFIX + message)
        )
        return SubmissionResult(status=SubmissionStatus.FAILED, error=message)

    async def aclose(self) -> None:
        """Tear down the session.

        Cancels an in-flight submission so that nothing updates the store
        after disposal, then closes the transport.
        """
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED
        task = self._task
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        await self._transport.aclose()
