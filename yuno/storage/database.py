"""SQLModel table definitions for conversation history.

Tables:
    - conversations: One row per chat, owned by a user
    - messages: Ordered user/assistant turns belonging to a conversation
"""

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Conversation(SQLModel, table=True):
    """A chat conversation.

    Created lazily on the first persisted turn of a session. All listing
    queries filter by user_id.
    """

    __tablename__ = "conversations"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    user_id: str = Field(index=True, nullable=False)
    mode: str = Field(max_length=32)
    title: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow, index=True)


class Message(SQLModel, table=True):
    """A single persisted turn ("user" or "assistant")."""

    __tablename__ = "messages"

    id: int | None = Field(default=None, primary_key=True)
    conversation_id: str = Field(foreign_key="conversations.id", index=True, nullable=False)
    role: str = Field(max_length=20)
    content: str
    created_at: datetime = Field(default_factory=_utcnow)
