"""Upstream gateway request building and shared HTTP client.

Translates a validated ChatRequest into the gateway's chat completions body:
the YUNO system prompt for the active mode goes first, followed by the
transcript. Messages with an inline image are sent as multimodal content parts.
"""

import logging
from typing import Any

import httpx

from yuno.gateway.config import GatewayConfig
from yuno.models.modes import build_system_prompt
from yuno.models.schemas import ChatMessage, ChatRequest

logger = logging.getLogger(__name__)

# Connect quickly, but allow long gaps between streamed tokens
GATEWAY_TIMEOUT = httpx.Timeout(connect=10.0, read=300.0, write=30.0, pool=10.0)


def to_gateway_message(message: ChatMessage) -> dict[str, Any]:
    """Convert a transcript entry to the gateway message format."""
    if not message.image:
        return {"role": message.role, "content": message.content}

    return {
        "role": message.role,
        "content": [
            {"type": "text", "text": message.content},
            {"type": "image_url", "image_url": {"url": message.image}},
        ],
    }


def build_gateway_payload(request: ChatRequest, config: GatewayConfig) -> dict[str, Any]:
    """Build the streamed chat completions request body.

    Args:
        request: Validated proxy request.
        config: Gateway settings (model selection).

    Returns:
        JSON-serializable request body.
    """
    model = config.vision_model if request.has_image else config.model_name
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": build_system_prompt(request.mode)},
            *(to_gateway_message(m) for m in request.messages),
        ],
        "stream": True,
    }


def build_gateway_request(
    client: httpx.AsyncClient, request: ChatRequest, config: GatewayConfig
) -> httpx.Request:
    return client.build_request(
        "POST",
        config.base_url,
        json=build_gateway_payload(request, config),
        headers={
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        },
    )


# Module-level singleton instance
_gateway_client: httpx.AsyncClient | None = None


def get_gateway_client() -> httpx.AsyncClient:
    """Get or create the shared gateway HTTP client.

    Reusing one client keeps upstream connections pooled across requests.

    Returns:
        The shared AsyncClient.
    """
    global _gateway_client
    if _gateway_client is None or _gateway_client.is_closed:
        _gateway_client = httpx.AsyncClient(timeout=GATEWAY_TIMEOUT)
    return _gateway_client


async def close_gateway_client() -> None:
    """Close the shared client, if one was created."""
    global _gateway_client
    if _gateway_client is not None:
        await _gateway_client.aclose()
        _gateway_client = None
        logger.info("Closed gateway HTTP client")
