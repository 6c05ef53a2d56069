"""Hosted LLM gateway integration.

Responsibilities:
    - Gateway configuration (URL, API key, model selection)
    - System prompt selection by conversation mode
    - Multimodal message formatting for image turns
    - Shared, pooled HTTP client for upstream requests

Kept separate from the HTTP layer so the proxy endpoint stays a thin relay.
"""

from yuno.gateway.client import (
    build_gateway_payload,
    build_gateway_request,
    close_gateway_client,
    get_gateway_client,
)
from yuno.gateway.config import GatewayConfig, get_gateway_config

__all__ = [
    "GatewayConfig",
    "build_gateway_payload",
    "build_gateway_request",
    "close_gateway_client",
    "get_gateway_client",
    "get_gateway_config",
]
