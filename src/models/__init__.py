"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - HistoryTurn: Prior conversation turn sent with a chat request
    - ChatRequest: Incoming chat request payload
    - ChatResponse / ErrorResponse: Chat endpoint bodies
    - UploadedDocument / UploadResponse: Upload endpoint bodies
"""

from src.models.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HistoryPart,
    HistoryTurn,
    UploadedDocument,
    UploadResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HistoryPart",
    "HistoryTurn",
    "UploadResponse",
    "UploadedDocument",
]
