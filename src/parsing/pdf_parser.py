"""PDF text extraction using pypdf.

Extracts plain text page by page, in page order, with validation.
Extraction is all-or-nothing: a failure on any page aborts the document.
"""

import asyncio
import io
import logging

from pydantic import BaseModel, Field
from pypdf import PageObject, PdfReader
from pypdf.errors import PdfReadError

from src.errors import CorruptDocumentError, PageExtractionError, UnsupportedFormatError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_MIME_TYPE = "application/pdf"
SUPPORTED_MIME_TYPES = frozenset({PDF_MIME_TYPE})


class DocumentContent(BaseModel):
    """Extracted content from a document.

    Attributes:
        text: Text of all pages, one newline-terminated block per page.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=1)
    metadata: dict[str, str]


def _validate_mime_type(mime_type: str) -> None:
    normalized = (mime_type or "").split(";", 1)[0].strip().lower()
    if normalized not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFormatError(mime_type)


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        CorruptDocumentError: If validation fails.
    """
    if not file_content:
        raise CorruptDocumentError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise CorruptDocumentError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise CorruptDocumentError("Invalid PDF: file does not start with PDF header")


def _open_reader(file_content: bytes) -> PdfReader:
    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise CorruptDocumentError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise CorruptDocumentError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise CorruptDocumentError("PDF contains no pages")

    return reader


def _extract_page_text(page: PageObject) -> str:
    """Collect a page's text fragments and join them with single spaces."""
    fragments: list[str] = []

    def visitor(text: str, *_args: object) -> None:
        if text and text.strip():
            fragments.append(text.strip())

    page.extract_text(visitor_text=visitor)
    return " ".join(fragments)


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    """Extract metadata from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of metadata fields that are present.
    """
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
            metadata["creator"] = reader.metadata.get("/Creator")
            metadata["producer"] = reader.metadata.get("/Producer")
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v is not None}


def extract_document(file_content: bytes, mime_type: str = PDF_MIME_TYPE) -> DocumentContent:
    """Extract text, page count and metadata from a document.

    Args:
        file_content: Raw bytes of the document.
        mime_type: Declared content type of the payload.

    Returns:
        DocumentContent with the text of every page in page order.

    Raises:
        UnsupportedFormatError: If the mime type is not a supported document type.
        CorruptDocumentError: If the file is empty, too large or cannot be parsed.
        PageExtractionError: If text extraction fails on any page.
    """
    _validate_mime_type(mime_type)
    _validate_pdf_bytes(file_content)

    reader = _open_reader(file_content)

    text_parts: list[str] = []
    for page_number, page in enumerate(reader.pages, start=1):
        try:
            page_text = _extract_page_text(page)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {page_number}: {e}")
            raise PageExtractionError(page_number, str(e)) from e
        text_parts.append(page_text + "\n")

    text = "".join(text_parts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return DocumentContent(
        text=text,
        pages=len(text_parts),
        metadata=_extract_metadata(reader),
    )


def extract_text_sync(file_content: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
    """Blocking variant of extract_text for callers without an event loop."""
    return extract_document(file_content, mime_type).text


async def extract_text(file_content: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
    """Extract plain text from a document without blocking the event loop.

    pypdf parsing is CPU-bound, so it runs in a worker thread.

    Args:
        file_content: Raw bytes of the document.
        mime_type: Declared content type of the payload.

    Returns:
        Concatenated page texts, each followed by a newline.
    """
    content = await asyncio.to_thread(extract_document, file_content, mime_type)
    title = content.metadata.get("title", "untitled")
    logger.info(
        f"Extracted {len(content.text)} characters from {content.pages} page(s) of '{title}'"
    )
    return content.text
