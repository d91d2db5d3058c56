"""Chat proxy endpoint.

Validates the inbound request, forwards it to the model provider and maps
every outcome to ``{"response", "success": true}`` or
``{"error", "success": false}`` with a stable status code.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from src.models.schemas import ChatRequest, ChatResponse, ErrorResponse
from src.provider.client import ChatProvider, get_chat_provider
from src.provider.errors import ProviderError, ProviderErrorKind, failure_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

MISSING_KEY_MESSAGE = (
    "API key not configured. Please set GEMINI_API_KEY in your environment variables."
)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def parse_chat_request(body: Any) -> ChatRequest:
    """Validate a decoded JSON body and build a ChatRequest.

    Checks run in a fixed order so the first problem found is the one reported.

    Args:
        body: Decoded JSON request body.

    Returns:
        The validated request.

    Raises:
        HTTPException: 400 describing the first validation failure.
    """
    if not isinstance(body, dict):
        raise _bad_request("Invalid JSON in request body")

    message = body.get("message")
    if not message or not isinstance(message, str):
        raise _bad_request("Message is required and must be a string")
    if not message.strip():
        raise _bad_request("Message cannot be empty")

    history = body.get("history")
    if history is not None and not isinstance(history, list):
        raise _bad_request("History must be an array")

    document_context = body.get("documentContext")
    if not isinstance(document_context, str):
        document_context = None

    try:
        return ChatRequest(
            message=message,
            history=history or [],
            document_context=document_context,
        )
    except ValidationError as e:
        raise _bad_request("Invalid history format") from e


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def chat(
    request: Request,
    provider: ChatProvider = Depends(get_chat_provider),
) -> ChatResponse:
    """Send a message with its history to the model and return the reply.

    Args:
        request: Raw request; the body is decoded here so that malformed JSON
                 maps to 400 instead of FastAPI's default 422.
        provider: Chat provider dependency.

    Returns:
        ChatResponse with the model's reply.

    Raises:
        503: Provider credentials are not configured.
        400: Malformed request or content blocked by the provider.
        401/429/504/500: Classified provider failures.
    """
    if not provider.is_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=MISSING_KEY_MESSAGE,
        )

    try:
        body = await request.json()
    except ValueError as e:
        raise _bad_request("Invalid JSON in request body") from e

    chat_request = parse_chat_request(body)

    try:
        text = await provider.send(
            chat_request.message,
            history=chat_request.history,
            document_context=chat_request.document_context,
        )
    except ProviderError as e:
        status_code, detail = failure_response(e.kind)
        logger.warning(f"Chat provider failure ({e.kind.value}, {status_code}): {e.detail}")
        raise HTTPException(status_code=status_code, detail=detail) from e
    except Exception as e:
        logger.exception("Unexpected chat endpoint error")
        status_code, detail = failure_response(ProviderErrorKind.UNKNOWN)
        raise HTTPException(status_code=status_code, detail=detail) from e

    return ChatResponse(response=text)
