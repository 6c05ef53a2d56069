"""Chat session controller.

Turns one user action into one displayed and persisted exchange:

1. Append the user turn to the transcript and persist it (best-effort).
2. POST the full transcript, active mode and image flag to the chat endpoint.
3. Append an empty assistant placeholder and stream fragments into it.
4. Persist the finished assistant reply (best-effort).

Rate limiting (429) and exhausted credits (402) surface as notices without a
placeholder. Any other failure surfaces a connection error and rolls the
placeholder back. Exactly one attempt is made per submission.
"""

import asyncio
import logging
from collections.abc import Callable

import httpx

from yuno.chat.config import ClientConfig, get_client_config
from yuno.chat.decoder import iter_fragments
from yuno.chat.session import ChatSession
from yuno.models.modes import Mode
from yuno.models.schemas import ChatMessage, Notice
from yuno.storage.store import ConversationStore, StoreError, make_title

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_PROMPT = "What do you see in this image?"

RATE_LIMITED_NOTICE = Notice(
    title="Rate limit reached",
    description="Please wait a moment before sending another message.",
)
CREDITS_NEEDED_NOTICE = Notice(
    title="Credits needed",
    description="Please add credits to continue using YUNO.",
)
CONNECTION_ERROR_NOTICE = Notice(
    title="Connection error",
    description="Failed to connect to YUNO. Please try again.",
)


class ChatStreamError(Exception):
    """Raised when the chat endpoint answers with an unexpected status."""

    pass


class ChatController:
    """Drives a ChatSession against the chat endpoint and the conversation store.

    Args:
        session: Session state to operate on.
        store: Persistence collaborator. Writes are best-effort.
        client: Async HTTP client used for chat requests.
        config: Endpoint URL and bearer key. Loads from environment if omitted.
        on_update: Called after every transcript change.
        on_notice: Called with user-facing notices.
    """

    def __init__(
        self,
        session: ChatSession,
        store: ConversationStore,
        client: httpx.AsyncClient,
        config: ClientConfig | None = None,
        on_update: Callable[[], None] | None = None,
        on_notice: Callable[[Notice], None] | None = None,
    ) -> None:
        self.session = session
        self._store = store
        self._client = client
        self._config = config or get_client_config()
        self._on_update = on_update or (lambda: None)
        self._on_notice = on_notice or (lambda notice: None)

    def reset(self, mode: Mode) -> None:
        """Start a new conversation in the given mode."""
        self.session.reset(mode)
        self._on_update()

    async def load_conversation(self, conversation_id: str) -> None:
        """Resume a persisted conversation.

        Raises:
            StoreError: If the conversation does not exist.
        """
        conversation = await asyncio.to_thread(self._store.get_conversation, conversation_id)
        if conversation is None:
            raise StoreError(f"Conversation not found: {conversation_id}")
        stored = await asyncio.to_thread(self._store.get_messages, conversation_id)

        self.session.mode = conversation.mode
        self.session.conversation_id = conversation.id
        self.session.messages = [ChatMessage(role=m.role, content=m.content) for m in stored]
        self._on_update()

    async def submit(self, text: str, image: str | None = None) -> bool:
        """Send one user turn and stream the assistant reply into the transcript.

        Args:
            text: The user's message. May be empty when an image is attached.
            image: Optional inline image (data URL).

        Returns:
            False if the submission was ignored (nothing to send or a request
            already in flight), True otherwise.
        """
        text = text.strip()
        if (not text and not image) or self.session.is_streaming:
            return False

        session = self.session
        session.add_message("user", text or DEFAULT_IMAGE_PROMPT, image)
        session.is_streaming = True
        self._on_update()

        try:
            await self._persist("user", text or DEFAULT_IMAGE_PROMPT)
            await self._stream_reply()
        finally:
            session.is_streaming = False
            self._on_update()

        return True

    async def _stream_reply(self) -> None:
        session = self.session
        payload = {
            "messages": [m.model_dump(exclude_none=True) for m in session.messages],
            "mode": Mode(session.mode).value,
            "hasImage": session.has_image,
        }
        headers = {"Accept": "text/event-stream"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"

        placeholder: ChatMessage | None = None

        try:
            async with self._client.stream(
                "POST",
                self._config.chat_url,
                json=payload,
                headers=headers,
                timeout=self._config.request_timeout,
            ) as response:
                if response.status_code == 429:
                    logger.warning("Chat request rate limited")
                    self._on_notice(RATE_LIMITED_NOTICE)
                    return
                if response.status_code == 402:
                    logger.warning("Chat request rejected: payment required")
                    self._on_notice(CREDITS_NEEDED_NOTICE)
                    return
                if not response.is_success:
                    raise ChatStreamError(
                        f"Chat endpoint returned HTTP {response.status_code}"
                    )

                placeholder = session.add_message("assistant", "")
                self._on_update()

                async for fragment in iter_fragments(response.aiter_bytes()):
                    placeholder.content += fragment
                    self._on_update()

        except (httpx.HTTPError, ChatStreamError) as e:
            logger.error(f"Chat error: {e}")
            self._on_notice(CONNECTION_ERROR_NOTICE)
            if placeholder is not None and session.messages[-1] is placeholder:
                session.messages.pop()
            return

        await self._persist("assistant", placeholder.content)

    async def _persist(self, role: str, content: str) -> None:
        """Write a turn to the store, creating the conversation on first use.

        Store calls run in a worker thread. Failures are logged and never
        interrupt the chat.
        """
        session = self.session
        try:
            if session.conversation_id is None:
                conversation = await asyncio.to_thread(
                    self._store.create_conversation,
                    user_id=session.user_id,
                    mode=session.mode,
                    title=make_title(content),
                )
                session.conversation_id = conversation.id
            await asyncio.to_thread(
                self._store.add_message, session.conversation_id, role, content
            )
        except Exception as e:
            logger.error(f"Failed to persist {role} message: {e}")
