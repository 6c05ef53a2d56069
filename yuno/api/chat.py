"""Chat proxy endpoint.

Forwards the transcript to the hosted LLM gateway with the mode's system
prompt and relays the upstream SSE body unchanged (after transfer decoding).
The stream is never buffered or reinterpreted here.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response, StreamingResponse
from pydantic import ValidationError
from starlette.background import BackgroundTask

from yuno.gateway.client import build_gateway_request, get_gateway_client
from yuno.gateway.config import get_gateway_config
from yuno.models.schemas import ChatRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

RATE_LIMITED_ERROR = "Rate limits exceeded, please try again later."
PAYMENT_REQUIRED_ERROR = "Payment required, please add funds to your workspace."
GATEWAY_ERROR = "AI gateway error"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "",
    responses={
        200: {"content": {"text/event-stream": {}}},
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    client: httpx.AsyncClient = Depends(get_gateway_client),
) -> Response:
    """Stream a chat completion for the given transcript.

    Args:
        request: Transcript, active mode and image flag.
        client: Shared gateway HTTP client.

    Returns:
        The upstream event stream, or a JSON error body.

    Raises:
        422: Invalid request body.
    """
    try:
        config = get_gateway_config()
    except ValidationError as e:
        logger.error(f"Gateway is not configured: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "LLM_API_KEY is not configured"
        )

    logger.info(
        f"Processing request in {request.mode.value} mode "
        f"with {len(request.messages)} messages"
    )

    try:
        upstream = await client.send(
            build_gateway_request(client, request, config), stream=True
        )
    except Exception as e:
        logger.error(f"Failed to reach AI gateway: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Unknown error"
        )

    if not upstream.is_success:
        try:
            error_text = (await upstream.aread()).decode("utf-8", errors="replace")
        except httpx.HTTPError as e:
            error_text = f"<unreadable body: {e}>"
        finally:
            await upstream.aclose()
        logger.error(f"AI gateway error: {upstream.status_code} {error_text}")

        if upstream.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
            return _error_response(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMITED_ERROR)
        if upstream.status_code == status.HTTP_402_PAYMENT_REQUIRED:
            return _error_response(status.HTTP_402_PAYMENT_REQUIRED, PAYMENT_REQUIRED_ERROR)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GATEWAY_ERROR)

    logger.info("Streaming response...")
    # Decoded bytes: Content-Encoding is not forwarded to the caller
    return StreamingResponse(
        upstream.aiter_bytes(),
        media_type="text/event-stream",
        background=BackgroundTask(upstream.aclose),
    )
