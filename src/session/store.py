"""Chat session store with retry and backoff.

Owns the transcript, the attached documents and the ``is_loading``/``error``
flags for one client. The presentation layer only calls the intent methods
and subscribes to snapshots; it never edits state directly.

Retry policy for one logical send:

- Each attempt is bounded by ``ClientConfig.attempt_timeout_seconds``.
- Only timeouts and transport failures are retried. A completed HTTP
  response with an error status is final.
- Retry ``n`` (zero-based) waits ``base_retry_delay_seconds * 2**n``,
  up to ``max_retries`` times.
- ``is_loading`` stays true from the first attempt until the chain ends.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.session.api_client import ChatApiClient, ChatRequestError
from src.session.config import ClientConfig, get_client_config
from src.session.state import (
    Document,
    Message,
    SessionState,
    build_document_context,
    seed_message,
    to_history,
)

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]
Sleep = Callable[[float], Awaitable[Any]]


class ChatSessionStore:
    """Single owner of a chat session's state."""

    def __init__(
        self,
        api: ChatApiClient | None = None,
        config: ClientConfig | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the store.

        Args:
            api: Chat API client. Built from ``config`` if not provided.
            config: Client configuration. Loads from environment if not provided.
            sleep: Awaitable delay used for backoff (replaced in tests).
        """
        self._config = config or get_client_config()
        self._api = api or ChatApiClient(
            self._config.api_base_url,
            timeout_seconds=self._config.attempt_timeout_seconds,
        )
        self._sleep = sleep
        self._state = SessionState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def api(self) -> ChatApiClient:
        return self._api

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def aclose(self) -> None:
        """Drop all listeners and close the underlying HTTP client."""
        self._listeners.clear()
        await self._api.aclose()

    def _set(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Session listener failed")

    def _append(self, message: Message) -> None:
        self._set(messages=(*self._state.messages, message))

    async def send_message(self, content: str) -> None:
        """Append the user's message and send it, retrying transient failures.

        Args:
            content: Message text. Validation is left to the chat API.
        """
        history = to_history(self._state.messages)
        self._append(Message(role="user", content=content))
        await self._send_with_retry(content, history)

    async def retry_last_message(self) -> None:
        """Drop everything after the last user message and send it again.

        The user message itself stays in place and is not appended twice.
        Does nothing when the transcript has no user message.
        """
        messages = self._state.messages
        index = next(
            (i for i in range(len(messages) - 1, -1, -1) if messages[i].role == "user"),
            None,
        )
        if index is None:
            return

        self._set(messages=messages[: index + 1], error=None)
        await self._send_with_retry(messages[index].content, to_history(messages[:index]))

    async def _send_with_retry(self, content: str, history: list[dict[str, Any]]) -> None:
        max_retries = self._config.max_retries
        retry_count = 0
        try:
            while True:
                self._set(is_loading=True, error=None)
                try:
                    reply = await self._api.send_chat(
                        content,
                        history,
                        build_document_context(self._state.documents),
                    )
                except ChatRequestError as e:
                    if e.retryable and retry_count < max_retries:
                        delay = self._config.backoff_delay(retry_count)
                        logger.info(
                            f"Chat request failed ({e.kind.value}), "
                            f"retry {retry_count + 1}/{max_retries} in {delay:g}s"
                        )
                        self._set(
                            error=(
                                f"Connection issue. Retrying in {delay:g}s... "
                                f"({retry_count + 1}/{max_retries})"
                            )
                        )
                        await self._sleep(delay)
                        retry_count += 1
                        continue
                    self._fail(e.message, exhausted=0 < max_retries <= retry_count)
                    return
                except Exception as e:
                    logger.exception("Unexpected error sending chat message")
                    self._fail(str(e) or "An unexpected error occurred", exhausted=False)
                    return

                self._append(Message(role="assistant", content=reply))
                return
        finally:
            self._set(is_loading=False)

    def _fail(self, text: str, exhausted: bool) -> None:
        logger.warning(f"Chat request failed: {text}")
        suffix = f" (Failed after {self._config.max_retries} retries)" if exhausted else ""
        self._set(error=text)
        self._append(Message(role="assistant", content=f"Error: {text}{suffix}", error=True))

    def clear_chat(self) -> None:
        """Reset the transcript to the greeting. Documents are kept."""
        self._set(messages=(seed_message(),), is_loading=False, error=None)

    def add_document(
        self,
        name: str,
        size: int,
        content: str,
        type: str = "PDF",
    ) -> Document:
        """Attach a document to future chat requests."""
        document = Document(name=name, size=size, type=type, content=content)
        self._set(documents=(*self._state.documents, document))
        return document

    def remove_document(self, document_id: str) -> None:
        """Detach a document. Unknown ids are ignored."""
        self._set(documents=tuple(d for d in self._state.documents if d.id != document_id))

    async def upload_document(
        self,
        filename: str,
        data: bytes,
        content_type: str = "application/pdf",
    ) -> Document:
        """Upload a file for extraction and attach the result.

        Raises:
            ChatRequestError: If the upload or extraction fails.
        """
        uploaded = await self._api.upload_document(filename, data, content_type)
        return self.add_document(
            name=uploaded.name,
            size=uploaded.size,
            content=uploaded.content,
            type=uploaded.type,
        )
