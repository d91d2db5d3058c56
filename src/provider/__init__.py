"""Model provider boundary.

Wraps the Google GenAI SDK behind a small service that accepts plain
text and history turns, and fails only with a kind-tagged ProviderError.

Responsibilities:
    - Provider configuration from environment
    - Persona preamble and chat history assembly
    - Timeout enforcement per provider call
    - Reply normalization and failure classification
"""

from src.provider.client import ChatProvider, get_chat_provider
from src.provider.config import ProviderConfig, get_provider_config
from src.provider.errors import ProviderError, ProviderErrorKind, classify_failure

__all__ = [
    "ChatProvider",
    "ProviderConfig",
    "ProviderError",
    "ProviderErrorKind",
    "classify_failure",
    "get_chat_provider",
    "get_provider_config",
]
