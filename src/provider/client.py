"""Gemini chat provider adapter.

The only module that calls the Google GenAI SDK. It owns three concerns
so that the rest of the application only sees plain text or a tagged
``ProviderError``:

1. **Request assembly** - the persona preamble goes first in the chat history,
   followed by the caller's history with roles translated to Gemini's
   ``user``/``model`` vocabulary.

2. **Timeout** - each ``send_message`` call is bounded by
   ``ProviderConfig.timeout_seconds``.

3. **Reply normalization** - SDK versions expose reply text differently
   (a ``text`` attribute, a ``text()`` method, or a nested ``response``).
   ``extract_reply_text`` tries each shape in order.
"""

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from src.models.schemas import HistoryTurn
from src.provider.config import ProviderConfig, get_provider_config
from src.provider.errors import ProviderError, ProviderErrorKind, classify_failure
from src.provider.persona import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

_ROLE_MAP = {"assistant": "model", "model": "model", "user": "user"}


async def _resolve(value: Any) -> Any:
    """Call ``value`` if callable and await the result if needed."""
    if callable(value):
        value = value()
    if inspect.isawaitable(value):
        value = await value
    return value


async def extract_reply_text(reply: Any) -> str | None:
    """Pull plain text out of a provider reply.

    Tries, in order: ``reply.text`` as a string, ``reply.text()``,
    ``reply.response.text()`` and ``reply.response.text`` as a string.

    Args:
        reply: Object returned by the provider's send call.

    Returns:
        The reply text, or None if no shape yields a non-empty string.
    """
    candidates = [getattr(reply, "text", None)]
    nested = getattr(reply, "response", None)
    if nested is not None:
        candidates.append(getattr(nested, "text", None))

    for candidate in candidates:
        if candidate is None:
            continue
        try:
            text = await _resolve(candidate)
        except Exception as e:
            logger.debug(f"Reply accessor failed: {e}")
            continue
        if isinstance(text, str) and text:
            return text
    return None


def _block_reason(reply: Any) -> str | None:
    """Return the prompt block reason reported by the provider, if any."""
    feedback = getattr(reply, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None)
    return str(reason) if reason else None


def build_message_text(message: str, document_context: str | None) -> str:
    """Append document context to the outgoing message as a trailing section."""
    if document_context:
        return f"{message}\n\n{document_context}"
    return message


class ChatProvider:
    """Service wrapping Gemini chat sessions.

    Creates one short-lived chat session per request: the server keeps no
    conversation state, the caller sends the full history every time.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Optional provider configuration.
                    Loads from environment if not provided.
            client: Optional pre-built GenAI client (used by tests).
        """
        self._config = config or get_provider_config()
        self._client = client
        if self._client is None and not self._config.is_configured:
            logger.error("GEMINI_API_KEY is not set in environment variables")

    @property
    def is_configured(self) -> bool:
        """Whether the provider can be called at all."""
        return self._client is not None or self._config.is_configured

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._config.api_key)
            logger.info("Gemini client initialized")
        return self._client

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_output_tokens,
            top_p=self._config.top_p,
            top_k=self._config.top_k,
        )

    def build_history(self, history: Sequence[HistoryTurn]) -> list[types.Content]:
        """Prepend the persona preamble and convert turns to provider content.

        Args:
            history: Prior conversation turns in conversation order.

        Returns:
            Provider content list, persona first.
        """
        contents = [types.Content(role="model", parts=[types.Part(text=SYSTEM_PROMPT)])]
        for turn in history:
            contents.append(
                types.Content(
                    role=_ROLE_MAP.get(turn.role, "user"),
                    parts=[types.Part(text=part.text) for part in turn.parts],
                )
            )
        return contents

    async def send(
        self,
        message: str,
        history: Sequence[HistoryTurn] = (),
        document_context: str | None = None,
    ) -> str:
        """Send one message with its history and return the reply text.

        Args:
            message: The user's message.
            history: Prior turns, oldest first.
            document_context: Optional extracted document text.

        Returns:
            Reply text from the model.

        Raises:
            ProviderError: For every failure, tagged with its kind.
        """
        try:
            chat = self._get_client().aio.chats.create(
                model=self._config.model_name,
                config=self._generation_config(),
                history=self.build_history(history),
            )
            reply = await asyncio.wait_for(
                chat.send_message(build_message_text(message, document_context)),
                timeout=self._config.timeout_seconds,
            )
        except Exception as e:
            raise ProviderError(classify_failure(e), str(e) or "Request timeout") from e

        text = await extract_reply_text(reply)
        if text is None:
            reason = _block_reason(reply)
            if reason:
                raise ProviderError(ProviderErrorKind.CONTENT_FILTER, f"Prompt blocked: {reason}")
            raise ProviderError(
                ProviderErrorKind.INVALID_RESPONSE, "Invalid response from AI model"
            )
        return text


# Module-level singleton instance
_chat_provider: ChatProvider | None = None


def get_chat_provider() -> ChatProvider:
    """Get or create the global chat provider.

    Returns:
        The ChatProvider instance.
    """
    global _chat_provider
    if _chat_provider is None:
        _chat_provider = ChatProvider()
    return _chat_provider
