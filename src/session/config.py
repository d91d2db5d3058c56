"""Client-side configuration for the chat session store."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class ClientConfig(BaseModel):
    """Settings for talking to the chat API.

    Attributes:
        api_base_url: Base URL of the chat API. Defaults to localhost on ``PORT``.
        attempt_timeout_seconds: Hard bound for a single chat request.
        max_retries: Retries allowed after the first attempt.
        base_retry_delay_seconds: Delay before the first retry; doubles each time.
    """

    api_base_url: str = Field(
        default_factory=lambda: (
            os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"
        ),
    )
    attempt_timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    base_retry_delay_seconds: float = Field(default=1.0, ge=0.0)

    def backoff_delay(self, retry_count: int) -> float:
        """Delay before retry number ``retry_count + 1`` (1s, 2s, 4s by default)."""
        return self.base_retry_delay_seconds * 2**retry_count


def get_client_config() -> ClientConfig:
    """Create client configuration from environment."""
    return ClientConfig()
