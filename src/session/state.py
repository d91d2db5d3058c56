"""Immutable session state for one chat client.

All models are frozen; the store replaces the whole ``SessionState`` on
every change instead of mutating it.
"""

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.provider.persona import GREETING

SEED_MESSAGE_ID = "1"
# Fixed so the first render and every reset show the same time
SEED_TIMESTAMP = datetime(2025, 1, 1, tzinfo=UTC)


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


class Message(BaseModel):
    """A transcript entry.

    Attributes:
        id: Stable identifier.
        role: Who wrote the message.
        content: Message text.
        timestamp: When the message was created.
        error: Whether this is a failure notice rather than a model reply.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=_now)
    error: bool = False


class Document(BaseModel):
    """An uploaded document whose text is attached to chat requests."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    name: str
    size: int = Field(ge=0)
    type: str = "PDF"
    content: str
    uploaded_at: datetime = Field(default_factory=_now)


def seed_message() -> Message:
    """Return the greeting every session starts with."""
    return Message(
        id=SEED_MESSAGE_ID,
        role="assistant",
        content=GREETING,
        timestamp=SEED_TIMESTAMP,
    )


class SessionState(BaseModel):
    """Snapshot of a chat session.

    Attributes:
        messages: Transcript in conversation order.
        documents: Attached documents in upload order.
        is_loading: True while a send (including all its retries) is running.
        error: Banner text for the current failure or retry countdown.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = Field(default_factory=lambda: (seed_message(),))
    documents: tuple[Document, ...] = ()
    is_loading: bool = False
    error: str | None = None


def is_seed(message: Message) -> bool:
    return message.role == "assistant" and message.id == SEED_MESSAGE_ID


def to_history(messages: Iterable[Message]) -> list[dict[str, Any]]:
    """Translate transcript messages to the chat endpoint's history shape.

    Failure notices and the seed greeting are left out; order is kept.
    """
    return [
        {"role": m.role, "parts": [{"text": m.content}]}
        for m in messages
        if not m.error and not is_seed(m)
    ]


def build_document_context(documents: Iterable[Document]) -> str:
    """Render attached documents as a trailing context block.

    Returns:
        The context block, or an empty string when nothing is attached.
    """
    blocks = [f"[{doc.name}]\n{doc.content}" for doc in documents]
    if not blocks:
        return ""
    return "\n\nAttached Documents:\n" + "\n\n".join(blocks)
