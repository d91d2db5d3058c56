"""Provider configuration with environment variable loading.

Pydantic-based configuration for the Gemini chat provider.
A missing API key is allowed here: the chat endpoint reports it as 503
instead of failing at import time.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ProviderConfig(BaseModel):
    """Configuration for the Gemini chat provider.

    Attributes:
        api_key: Gemini API key (empty when not configured).
        model_name: Model identifier to use.
        temperature: Sampling temperature.
        max_output_tokens: Maximum tokens in a generated reply.
        top_p: Nucleus sampling probability mass.
        top_k: Number of candidate tokens considered per step.
        timeout_seconds: Upper bound for a single provider call.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", "")),
        description="API key for the Gemini provider",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash-exp"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.8,
        ge=0.0,
        le=2.0,
        description="Slightly higher than usual to keep the persona lively",
    )
    max_output_tokens: int = Field(default=2048, ge=1, le=65536)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1)
    timeout_seconds: float = Field(
        default=25.0,
        gt=0.0,
        description="Server-side bound for one provider call",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace so a blank key counts as missing."""
        return (v or "").strip()

    @property
    def is_configured(self) -> bool:
        """Whether a provider credential is available."""
        return bool(self.api_key)


def get_provider_config() -> ProviderConfig:
    """Create provider configuration from environment.

    Returns:
        Configured ProviderConfig instance.
    """
    return ProviderConfig()
