"""Pydantic models for API requests, responses and the chat transcript.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual transcript entry (text plus optional image)
    - ChatRequest: Payload for the chat proxy endpoint
    - ErrorResponse: JSON error body returned by the proxy
    - Notice: User-facing notification raised by the chat controller
    - ConversationInfo / MessageInfo: History sidebar records
    - Mode / ModeProfile: The five conversation personas
"""

from yuno.models.modes import (
    MODE_PROFILES,
    YUNO_SYSTEM_PROMPT,
    Mode,
    ModeProfile,
    build_system_prompt,
    get_mode_profile,
)
from yuno.models.schemas import (
    ChatMessage,
    ChatRequest,
    ConversationInfo,
    ErrorResponse,
    MessageInfo,
    Notice,
)

__all__ = [
    "MODE_PROFILES",
    "YUNO_SYSTEM_PROMPT",
    "ChatMessage",
    "ChatRequest",
    "ConversationInfo",
    "ErrorResponse",
    "MessageInfo",
    "Mode",
    "ModeProfile",
    "Notice",
    "build_system_prompt",
    "get_mode_profile",
]
