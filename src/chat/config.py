"""Chat client configuration with environment variable loading.

Pydantic-based configuration for the streaming completion endpoint.
The API key and endpoint are passed through as opaque values.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GREETING = (
    "Hello! I'm a friendly AI assistant. How can I help you today? "
    "You can also upload a PDF."
)


class ChatConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_key: API key for the completion endpoint (may be empty).
        base_url: API base URL.
        model_name: Model identifier to use.
        timeout: Request timeout in seconds.
        greeting: Assistant greeting seeded into a new conversation.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("LLM_API_KEY", "")),
        description="API key for the completion endpoint",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gemini-1.5-flash"),
        min_length=1,
        description="Model to use",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", "120.0")),
        gt=0.0,
        description="Request timeout in seconds",
    )
    greeting: str = Field(
        default_factory=lambda: os.getenv("CHAT_GREETING", DEFAULT_GREETING),
        description="Greeting shown as the first assistant turn (empty disables it)",
    )

    @field_validator("api_key", "base_url", mode="before")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Strip surrounding whitespace from string settings."""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def stream_url(self) -> str:
        """Full URL of the streaming generation endpoint."""
        return f"{self.base_url.rstrip('/')}/models/{self.model_name}:streamGenerateContent"


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.
    """
    return ChatConfig()
