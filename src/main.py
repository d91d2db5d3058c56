"""Application entry point.

Serves the chat API and the NiceGUI page from one uvicorn process.
Environment variables are loaded from a .env file first.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Must run before modules that read configuration at import time
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_api_only(host: str, port: int) -> None:
    """Serve only the HTTP API (no chat page)."""
    import uvicorn

    logger.info(f"Starting chat API on http://{host}:{port}")
    uvicorn.run(
        "src.api.app:app",
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_integrated(host: str, port: int) -> None:
    """Mount the NiceGUI page onto the FastAPI app and serve both."""
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="Achaar",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "achaar-chat-secret"),
    )

    logger.info(f"Chat page on http://{host}:{port}/, API docs on http://{host}:{port}/docs")
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def main() -> None:
    """Start the server.

    RUN_MODE=api serves the API alone; the default serves API and page together.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    mode = os.getenv("RUN_MODE", "integrated").lower()

    if mode == "api":
        run_api_only(host, port)
    else:
        run_integrated(host, port)


if __name__ == "__main__":
    main()
