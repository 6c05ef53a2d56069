"""Per-user chat session state."""

from yuno.models.modes import Mode, get_mode_profile
from yuno.models.schemas import ChatMessage


class ChatSession:
    """Manages chat state for one browser session.

    The last transcript entry is the only one mutated in place, and only while
    an assistant reply is streaming into it.
    """

    def __init__(self, user_id: str, mode: Mode = Mode.CASUAL) -> None:
        self.user_id = user_id
        self.mode = mode
        self.messages: list[ChatMessage] = []
        self.conversation_id: str | None = None
        self.is_streaming: bool = False
        self.reset(mode)

    def reset(self, mode: Mode) -> None:
        """Start a fresh conversation in the given mode, beginning with its greeting."""
        self.mode = mode
        self.conversation_id = None
        self.messages = [
            ChatMessage(role="assistant", content=get_mode_profile(mode).greeting)
        ]

    def add_message(
        self, role: str, content: str, image: str | None = None
    ) -> ChatMessage:
        message = ChatMessage(role=role, content=content, image=image)
        self.messages.append(message)
        return message

    @property
    def has_image(self) -> bool:
        return any(m.image for m in self.messages)
