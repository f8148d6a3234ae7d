"""Conversation client core.

Keeps the conversation state, projects it into requests for the remote
text-generation service and decodes the streamed replies.

Responsibilities:
    - Ordered turn storage with in-place growth of the streaming reply
    - Request composition with optional document text
    - Incremental decoding of framed data records
    - Submission lifecycle with a single in-flight request

Depends on the parsing package for document text, never on the UI.
"""

from src.chat.composer import build_user_text, compose_request, display_text
from src.chat.config import ChatConfig, get_chat_config
from src.chat.decoder import StreamingResponseDecoder, StreamState, parse_record
from src.chat.session import SessionController
from src.chat.store import ConversationStore
from src.chat.transport import GeminiTransport

__all__ = [
    "ChatConfig",
    "ConversationStore",
    "GeminiTransport",
    "SessionController",
    "StreamState",
    "StreamingResponseDecoder",
    "build_user_text",
    "compose_request",
    "display_text",
    "get_chat_config",
    "parse_record",
]
