"""Exception hierarchy for the chat client.

Fatal errors abort the current submission and surface one human-readable
message. MalformedRecordError is the only non-fatal kind: the decoder logs
and skips the offending record.
"""


class ChatClientError(Exception):
    """Base class for all chat client errors."""

    pass


class SubmissionValidationError(ChatClientError):
    """Raised when a submission has neither text nor an attached document."""

    pass


class DocumentExtractionError(ChatClientError):
    """Raised when text cannot be extracted from an attached document."""

    pass


class UnsupportedFormatError(DocumentExtractionError):
    """Raised when the declared mime type is not a supported document type."""

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Unsupported document type: {mime_type or 'unknown'}")
        self.mime_type = mime_type


class CorruptDocumentError(DocumentExtractionError):
    """Raised when the payload cannot be loaded as a structured document."""

    pass


class PageExtractionError(DocumentExtractionError):
    """Raised when text extraction fails on a single page.

    Extraction is all-or-nothing, so one failing page aborts the document.
    """

    def __init__(self, page_number: int, reason: str = "") -> None:
        message = f"Failed to extract text from page {page_number}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.page_number = page_number


class TransportError(ChatClientError):
    """Raised when the remote service rejects the request or is unreachable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedRecordError(ChatClientError):
    """Raised for a data record whose JSON body cannot be parsed."""

    pass


class StreamReadError(ChatClientError):
    """Raised when reading the response stream fails mid-way."""

    pass
