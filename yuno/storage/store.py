"""Conversation store backed by SQLModel.

Persists conversations and their messages for the chat controller and serves
the history sidebar. Writes are single-row inserts plus an ``updated_at`` bump
on the owning conversation.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from yuno.chat.config import get_client_config
from yuno.models.modes import Mode
from yuno.models.schemas import ConversationInfo, MessageInfo
from yuno.storage.database import Conversation, Message

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 50


class StoreError(Exception):
    """Raised when a conversation lookup or write fails."""

    pass


def make_title(text: str) -> str:
    """Derive a conversation title from the first user message."""
    text = " ".join(text.split())
    if len(text) <= TITLE_MAX_LENGTH:
        return text or "New conversation"
    return text[:TITLE_MAX_LENGTH].rstrip() + "..."


class ConversationStore:
    """SQL-backed persistence for conversations and messages.

    Args:
        database_url: SQLAlchemy URL. ``sqlite://`` gives a shared in-memory
            database, handy for tests.
    """

    def __init__(self, database_url: str) -> None:
        self._engine = self._create_engine(database_url)
        SQLModel.metadata.create_all(self._engine)

    @staticmethod
    def _create_engine(database_url: str):
        url = make_url(database_url)
        if url.get_backend_name() != "sqlite":
            return create_engine(database_url)

        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            return create_engine(
                database_url, connect_args={"check_same_thread": False}
            )

        # In-memory databases must share one connection across threads
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    def create_conversation(self, user_id: str, mode: Mode, title: str) -> ConversationInfo:
        """Insert a new conversation row.

        Args:
            user_id: Owning user.
            mode: Mode the conversation was started in.
            title: Display title for the history sidebar.

        Returns:
            The created conversation.
        """
        conversation = Conversation(user_id=user_id, mode=Mode(mode).value, title=title)
        with Session(self._engine) as session:
            session.add(conversation)
            session.commit()
            session.refresh(conversation)
            logger.info(f"Created conversation {conversation.id} for user {user_id}")
            return self._to_info(conversation)

    def add_message(self, conversation_id: str, role: str, content: str) -> MessageInfo:
        """Append a message to a conversation.

        Raises:
            StoreError: If the conversation does not exist.
        """
        with Session(self._engine) as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                raise StoreError(f"Conversation not found: {conversation_id}")

            message = Message(conversation_id=conversation_id, role=role, content=content)
            conversation.updated_at = datetime.now(UTC)
            session.add(message)
            session.add(conversation)
            session.commit()
            session.refresh(message)
            return MessageInfo(
                conversation_id=message.conversation_id,
                role=message.role,
                content=message.content,
                created_at=message.created_at,
            )

    def get_conversation(self, conversation_id: str) -> ConversationInfo | None:
        with Session(self._engine) as session:
            conversation = session.get(Conversation, conversation_id)
            return self._to_info(conversation) if conversation else None

    def list_conversations(self, user_id: str) -> list[ConversationInfo]:
        """Return a user's conversations, most recently active first."""
        with Session(self._engine) as session:
            statement = (
                select(Conversation)
                .where(Conversation.user_id == user_id)
                .order_by(Conversation.updated_at.desc())
            )
            return [self._to_info(c) for c in session.exec(statement).all()]

    def get_messages(self, conversation_id: str) -> list[MessageInfo]:
        """Return a conversation's messages in the order they were written.

        Raises:
            StoreError: If the conversation does not exist.
        """
        with Session(self._engine) as session:
            if session.get(Conversation, conversation_id) is None:
                raise StoreError(f"Conversation not found: {conversation_id}")

            statement = (
                select(Message)
                .where(Message.conversation_id == conversation_id)
                .order_by(Message.created_at, Message.id)
            )
            return [
                MessageInfo(
                    conversation_id=m.conversation_id,
                    role=m.role,
                    content=m.content,
                    created_at=m.created_at,
                )
                for m in session.exec(statement).all()
            ]

    def delete_conversation(self, conversation_id: str) -> None:
        """Delete a conversation and all of its messages.

        Raises:
            StoreError: If the conversation does not exist.
        """
        with Session(self._engine) as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                raise StoreError(f"Conversation not found: {conversation_id}")

            session.exec(delete(Message).where(Message.conversation_id == conversation_id))
            session.delete(conversation)
            session.commit()
        logger.info(f"Deleted conversation {conversation_id}")

    @staticmethod
    def _to_info(conversation: Conversation) -> ConversationInfo:
        return ConversationInfo(
            id=conversation.id,
            user_id=conversation.user_id,
            mode=Mode(conversation.mode),
            title=conversation.title,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
        )


# Module-level singleton instance
_conversation_store: ConversationStore | None = None


def get_conversation_store() -> ConversationStore:
    """Get or create the global conversation store.

    Returns:
        The ConversationStore instance.
    """
    global _conversation_store
    if _conversation_store is None:
        _conversation_store = ConversationStore(get_client_config().database_url)
    return _conversation_store
