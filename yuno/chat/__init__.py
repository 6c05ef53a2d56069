"""Client-side chat logic.

Responsibilities:
    - Incremental decoding of the chat endpoint's SSE stream
    - Session state (transcript, busy flag, active conversation)
    - The controller that sends turns, streams replies and persists history

The controller lives in ``yuno.chat.controller`` and is imported from there,
since it depends on the storage layer, which in turn reads ``ClientConfig``.
"""

from yuno.chat.config import ClientConfig, get_client_config
from yuno.chat.decoder import StreamDecoder, iter_fragments
from yuno.chat.session import ChatSession

__all__ = [
    "ChatSession",
    "ClientConfig",
    "StreamDecoder",
    "get_client_config",
    "iter_fragments",
]
