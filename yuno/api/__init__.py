"""FastAPI endpoints for YUNO.

Endpoints:
    - GET /health: Service health status
    - POST /chat: Chat proxy streaming the gateway's SSE response
    - GET /conversations: A user's conversation history
    - GET /conversations/{id}/messages: Messages of one conversation
    - DELETE /conversations/{id}: Remove a conversation
"""

from yuno.api.app import app, create_app

__all__ = ["app", "create_app"]
