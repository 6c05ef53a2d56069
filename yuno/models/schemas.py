from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from yuno.models.modes import Mode


class ChatMessage(BaseModel):
    """A single transcript entry.

    Attributes:
        role: Either "user" or "assistant".
        content: The message text.
        image: Optional inline image as a data URL (data:<mime>;base64,...).
    """

    role: Literal["user", "assistant"]
    content: str
    image: str | None = None

    @field_validator("image")
    @classmethod
    def validate_image(cls, v: str | None) -> str | None:
        """Require inline images to be data URLs."""
        if v is not None and not v.startswith("data:"):
            raise ValueError("image must be an inline data URL")
        return v


class ChatRequest(BaseModel):
    """Request payload for the chat proxy endpoint.

    Attributes:
        messages: Full transcript including the newest user turn.
        mode: Active conversation mode.
        has_image: Whether any message carries an image (sent as ``hasImage``).
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    mode: Mode
    has_image: bool = Field(default=False, alias="hasImage")


class ErrorResponse(BaseModel):
    """JSON error body returned by the proxy."""

    error: str


class Notice(BaseModel):
    """A user-facing notification raised by the chat controller.

    Attributes:
        title: Short headline.
        description: Longer explanation shown under the title.
    """

    title: str
    description: str


class ConversationInfo(BaseModel):
    """Conversation summary used by the history sidebar."""

    id: str
    user_id: str
    mode: Mode
    title: str
    created_at: datetime
    updated_at: datetime


class MessageInfo(BaseModel):
    """A persisted message as returned by the history endpoints."""

    conversation_id: str
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime
