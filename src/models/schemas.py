"""Pydantic models for the HTTP API.

Field names on the wire follow the browser client's camelCase
(``documentContext``); Python attributes use snake_case.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HistoryPart(BaseModel):
    """One text part of a history turn."""

    text: str


class HistoryTurn(BaseModel):
    """A prior conversation turn in provider shape.

    Attributes:
        role: Speaker of the turn ("user" or "assistant"/"model").
        parts: Text parts of the turn.
    """

    role: str
    parts: list[HistoryPart] = Field(default_factory=list)

    @field_validator("parts", mode="before")
    @classmethod
    def coerce_plain_text_parts(cls, v: Any) -> Any:
        """Accept bare strings as parts alongside ``{"text": ...}`` objects."""
        if isinstance(v, list):
            return [{"text": p} if isinstance(p, str) else p for p in v]
        return v


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: User's message, forwarded exactly as received.
        history: Prior turns, oldest first.
        document_context: Extracted text from attached documents.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1)
    history: list[HistoryTurn] = Field(default_factory=list)
    document_context: str | None = Field(None, alias="documentContext")


class ChatResponse(BaseModel):
    """Successful chat reply."""

    response: str
    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every failed API call."""

    error: str
    success: bool = False


class UploadedDocument(BaseModel):
    """Document extracted from an uploaded file.

    Attributes:
        name: Original filename.
        size: Size of the upload in bytes.
        type: Display label for the file type.
        content: Extracted plain text.
        pages: Number of pages in the document.
    """

    name: str
    size: int = Field(ge=0)
    type: str = "PDF"
    content: str
    pages: int = Field(ge=0)


class UploadResponse(BaseModel):
    """Response after a successful upload."""

    success: bool = True
    document: UploadedDocument
