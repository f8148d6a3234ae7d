"""PDF Chat - streaming conversational client with document attachments.

Combines httpx for the streamed completion call, pypdf for document text,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - chat: Conversation store, request composer, stream decoder, session
    - parsing: PDF text extraction
    - ui: Web interface for chat interactions
    - models: Turn, request and stream event schemas
"""

__version__ = "0.1.0"
