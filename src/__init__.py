"""Achaar - a conversational assistant with PDF document context.

Combines FastAPI for the HTTP API, Google GenAI for model access,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - api: Chat proxy and upload endpoints
    - provider: Gemini chat sessions, persona and failure classification
    - session: Client-side transcript store with retry and backoff
    - parsing: PDF text extraction
    - ui: Web interface bound to the session store
    - models: Request/response schemas
"""

__version__ = "0.1.0"
