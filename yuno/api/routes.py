"""Conversation history endpoints for the sidebar.

Lists a user's conversations, returns a conversation's messages and deletes
conversations. Conversations are created by the chat controller, not here.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from yuno.models.schemas import ConversationInfo, MessageInfo
from yuno.storage.store import ConversationStore, StoreError, get_conversation_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


def _not_found(e: StoreError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[ConversationInfo])
def list_conversations(
    user_id: str = Query(..., min_length=1, description="Owner of the conversations"),
    store: ConversationStore = Depends(get_conversation_store),
) -> list[ConversationInfo]:
    """List a user's conversations, most recently updated first."""
    return store.list_conversations(user_id)


@router.get("/{conversation_id}/messages", response_model=list[MessageInfo])
def get_messages(
    conversation_id: str,
    store: ConversationStore = Depends(get_conversation_store),
) -> list[MessageInfo]:
    """Return a conversation's messages in order.

    Raises:
        404: Unknown conversation.
    """
    try:
        return store.get_messages(conversation_id)
    except StoreError as e:
        raise _not_found(e) from e


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversation(
    conversation_id: str,
    store: ConversationStore = Depends(get_conversation_store),
) -> None:
    """Delete a conversation and its messages.

    Raises:
        404: Unknown conversation.
    """
    try:
        store.delete_conversation(conversation_id)
    except StoreError as e:
        logger.warning(f"Delete failed: {e}")
        raise _not_found(e) from e
