"""Conversation persistence.

SQLModel tables plus a small store used by the chat controller (inserts) and
the history sidebar (ordered reads and deletes). SQLite by default, any
SQLAlchemy URL via YUNO_DATABASE_URL.
"""

from yuno.storage.store import (
    ConversationStore,
    StoreError,
    get_conversation_store,
    make_title,
)

__all__ = ["ConversationStore", "StoreError", "get_conversation_store", "make_title"]
