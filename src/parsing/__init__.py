"""Document parsing utilities.

Turns an attached binary document into plain text that can be appended
to a user turn.

Responsibilities:
    - Mime type and payload validation
    - PDF text extraction with pypdf, page by page
    - Metadata extraction (title, author, pages)

Extraction runs off the event loop and fails fast on the first bad page.
"""

from src.parsing.pdf_parser import (
    DocumentContent,
    extract_document,
    extract_text,
    extract_text_sync,
)

__all__ = ["DocumentContent", "extract_document", "extract_text", "extract_text_sync"]
