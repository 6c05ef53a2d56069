"""YUNO - a warm, multi-mode AI companion.

Combines FastAPI for the chat proxy and history API, httpx for streaming,
NiceGUI for the web interface, SQLModel for conversation history, and
Pydantic for data validation.

Components:
    - api: Chat proxy and conversation history endpoints
    - gateway: Upstream LLM gateway configuration and request building
    - chat: Stream decoder, session state and chat controller
    - storage: Conversation and message persistence
    - ui: Web interface with mode picker, sidebar and transcript
    - models: Request/response schemas and conversation modes
"""

__version__ = "0.1.0"
