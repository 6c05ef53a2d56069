"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the hosted LLM gateway the chat proxy
forwards to. Any OpenAI-compatible chat completions endpoint works.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"


class GatewayConfig(BaseModel):
    """Configuration for the upstream LLM gateway.

    Attributes:
        api_key: Bearer token for the gateway.
        base_url: Full chat completions URL.
        model_name: Model used for text-only conversations.
        vision_model: Model used when the conversation carries an image.
    """

    # Environment-sourced defaults go through the validators too
    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", ""),
        description="API key for the LLM gateway",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_GATEWAY_URL", DEFAULT_GATEWAY_URL),
        description="Chat completions endpoint URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    vision_model: str | None = Field(
        default_factory=lambda: os.getenv("LLM_VISION_MODEL") or None,
        description="Model for image conversations (defaults to model_name)",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("LLM_API_KEY is not configured")
        return v.strip()

    @model_validator(mode="after")
    def default_vision_model(self) -> "GatewayConfig":
        if not self.vision_model:
            self.vision_model = self.model_name
        return self


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return GatewayConfig()
