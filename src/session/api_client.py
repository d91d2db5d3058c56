"""HTTP client the session store uses to reach the chat API.

Turns every failure into a ``ChatRequestError`` tagged with a
``RequestErrorKind`` so the store can decide whether to retry.
"""

import asyncio
import logging
from enum import Enum
from typing import Any

import httpx

from src.models.schemas import UploadedDocument

logger = logging.getLogger(__name__)


class RequestErrorKind(str, Enum):
    """Why a request to the chat API failed."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    INVALID_RESPONSE = "invalid_response"

    @property
    def retryable(self) -> bool:
        return self in (RequestErrorKind.TIMEOUT, RequestErrorKind.NETWORK)


class ChatRequestError(Exception):
    """Raised for any failed call to the chat API."""

    def __init__(
        self,
        kind: RequestErrorKind,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        return self.kind.retryable


def _error_text(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = {}
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"Request failed with status {response.status_code}"


class ChatApiClient:
    """Async client for the chat and upload endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the chat API.
            timeout_seconds: Upper bound for one chat request, end to end.
            client: Optional pre-built httpx client (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        # httpx timeouts are per phase; wait_for bounds the whole request
        try:
            return await asyncio.wait_for(
                self._client.post(f"{self.base_url}{path}", **kwargs),
                timeout=self.timeout_seconds,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise ChatRequestError(RequestErrorKind.TIMEOUT, "Request timed out") from e
        except httpx.TransportError as e:
            raise ChatRequestError(
                RequestErrorKind.NETWORK, f"Network error: {str(e) or type(e).__name__}"
            ) from e

    async def send_chat(
        self,
        message: str,
        history: list[dict[str, Any]],
        document_context: str = "",
    ) -> str:
        """Send a chat request and return the reply text.

        Args:
            message: The user's message.
            history: Prior turns in ``{role, parts}`` shape.
            document_context: Attached document block, possibly empty.

        Returns:
            The assistant's reply.

        Raises:
            ChatRequestError: On timeout, transport failure, non-2xx status,
                or a body without a ``response`` field.
        """
        response = await self._post(
            "/api/chat",
            json={
                "message": message,
                "history": history,
                "documentContext": document_context,
            },
        )

        if not response.is_success:
            raise ChatRequestError(
                RequestErrorKind.HTTP_STATUS,
                _error_text(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ChatRequestError(
                RequestErrorKind.INVALID_RESPONSE, "Invalid response from server"
            ) from e

        reply = data.get("response") if isinstance(data, dict) else None
        if not reply:
            raise ChatRequestError(
                RequestErrorKind.INVALID_RESPONSE, "Invalid response from server"
            )
        return reply

    async def upload_document(
        self,
        filename: str,
        data: bytes,
        content_type: str = "application/pdf",
    ) -> UploadedDocument:
        """Upload a file and return the extracted document.

        Raises:
            ChatRequestError: If the upload fails for any reason.
        """
        response = await self._post(
            "/api/upload",
            files={"file": (filename, data, content_type)},
        )
        if not response.is_success:
            raise ChatRequestError(
                RequestErrorKind.HTTP_STATUS,
                _error_text(response),
                status_code=response.status_code,
            )
        try:
            return UploadedDocument.model_validate(response.json()["document"])
        except (ValueError, KeyError, TypeError) as e:
            raise ChatRequestError(
                RequestErrorKind.INVALID_RESPONSE, "Invalid response from server"
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()
