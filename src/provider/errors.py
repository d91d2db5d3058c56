"""Failure taxonomy for the model provider boundary.

Every failure coming out of the provider adapter is a ``ProviderError``
tagged with a ``ProviderErrorKind``. The chat endpoint maps kinds to a
stable status and message through ``FAILURE_RESPONSES``.
"""

import asyncio
from enum import Enum

from fastapi import status
from google.genai import errors as genai_errors


class ProviderErrorKind(str, Enum):
    """Kinds of provider failure, in classification priority order."""

    QUOTA = "quota"
    AUTH = "auth"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    CONTENT_FILTER = "content_filter"
    INVALID_RESPONSE = "invalid_response"
    UNKNOWN = "unknown"


class ProviderError(Exception):
    """Raised by the provider adapter for any failed chat call."""

    def __init__(self, kind: ProviderErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


# First match wins. Matching is case-insensitive against the failure description.
# Provider wording can change without notice, so these patterns are best effort.
_PATTERNS: tuple[tuple[ProviderErrorKind, tuple[str, ...]], ...] = (
    (ProviderErrorKind.QUOTA, ("quota", "quota_exceeded")),
    (
        ProviderErrorKind.AUTH,
        ("api key", "api_key_invalid", "authentication", "permission_denied", "unauthenticated"),
    ),
    (ProviderErrorKind.TIMEOUT, ("timeout", "timed out", "deadline_exceeded")),
    (ProviderErrorKind.RATE_LIMIT, ("rate limit", "resource_exhausted", "too many requests")),
    (ProviderErrorKind.CONTENT_FILTER, ("safety", "blocked")),
)

FAILURE_RESPONSES: dict[ProviderErrorKind, tuple[int, str]] = {
    ProviderErrorKind.QUOTA: (
        status.HTTP_429_TOO_MANY_REQUESTS,
        "API quota exceeded. Please try again later.",
    ),
    ProviderErrorKind.AUTH: (
        status.HTTP_401_UNAUTHORIZED,
        "Invalid API key or authentication failed",
    ),
    ProviderErrorKind.TIMEOUT: (
        status.HTTP_504_GATEWAY_TIMEOUT,
        "Request timed out. Please try again.",
    ),
    ProviderErrorKind.RATE_LIMIT: (
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Rate limit exceeded. Please wait before trying again.",
    ),
    ProviderErrorKind.CONTENT_FILTER: (
        status.HTTP_400_BAD_REQUEST,
        "Message was blocked by content filter. Please rephrase.",
    ),
    ProviderErrorKind.INVALID_RESPONSE: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to process chat request. Please try again.",
    ),
    ProviderErrorKind.UNKNOWN: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to process chat request. Please try again.",
    ),
}


def _describe(error: BaseException) -> str:
    """Build the text that classification patterns are matched against."""
    parts = [str(error)]
    if isinstance(error, genai_errors.APIError):
        parts.extend(str(p) for p in (error.status, error.message) if p)
        # HTTP codes carry the same meaning as the status names below
        if error.code in (401, 403):
            parts.append("permission_denied")
        elif error.code == 429:
            parts.append("resource_exhausted")
        elif error.code == 504:
            parts.append("deadline_exceeded")
    return " ".join(parts).lower()


def classify_failure(error: BaseException) -> ProviderErrorKind:
    """Classify an arbitrary exception into a provider failure kind.

    Args:
        error: The exception raised while talking to the provider.

    Returns:
        The first matching kind, or ``UNKNOWN``.
    """
    if isinstance(error, ProviderError):
        return error.kind
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return ProviderErrorKind.TIMEOUT

    description = _describe(error)
    for kind, patterns in _PATTERNS:
        if any(pattern in description for pattern in patterns):
            return kind
    return ProviderErrorKind.UNKNOWN


def failure_response(kind: ProviderErrorKind) -> tuple[int, str]:
    """Return the HTTP status and user-facing message for a failure kind."""
    return FAILURE_RESPONSES[kind]
