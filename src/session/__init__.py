"""Client-side chat session state.

Holds the transcript and attached documents for one chat client and runs
the send/retry state machine against the chat API.
"""

from src.session.api_client import ChatApiClient, ChatRequestError, RequestErrorKind
from src.session.config import ClientConfig, get_client_config
from src.session.state import Document, Message, SessionState
from src.session.store import ChatSessionStore

__all__ = [
    "ChatApiClient",
    "ChatRequestError",
    "ChatSessionStore",
    "ClientConfig",
    "Document",
    "Message",
    "RequestErrorKind",
    "SessionState",
    "get_client_config",
]
