"""FastAPI endpoints for the chat proxy.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Forward a message and history to the model
    - POST /api/upload: Extract text from an uploaded PDF
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
