"""Chat client configuration with environment variable loading.

Pydantic-based configuration for the chat controller and its persistence store.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat session controller.

    Attributes:
        chat_url: Chat proxy endpoint the controller posts to.
        api_key: Bearer token sent with chat requests (may be empty for local use).
        database_url: SQLAlchemy URL of the conversation store.
        request_timeout: Seconds before connecting or reading times out.
    """

    model_config = ConfigDict(validate_default=True)

    chat_url: str = Field(
        default_factory=lambda: os.getenv("YUNO_CHAT_URL", "http://localhost:8000/chat"),
        description="Chat proxy endpoint URL",
    )
    api_key: str = Field(
        default_factory=lambda: os.getenv("YUNO_PUBLISHABLE_KEY", ""),
        description="Bearer token for the chat endpoint",
    )
    database_url: str = Field(
        default_factory=lambda: os.getenv("YUNO_DATABASE_URL", "sqlite:///data/yuno.db"),
        description="Conversation store database URL",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0.0,
        le=600.0,
        description="HTTP timeout in seconds for chat requests",
    )

    @field_validator("chat_url")
    @classmethod
    def validate_chat_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("YUNO_CHAT_URL must be an http:// or https:// URL")
        return v

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the chat URL is not an http(s) URL.
    """
    return ClientConfig()
