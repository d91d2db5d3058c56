"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_provider: In-memory stand-in for the Gemini chat provider
    - async_client: HTTPX client for the FastAPI app with the fake provider
    - make_pdf: Builds small real PDF files with pypdf
"""

import io
from collections.abc import AsyncGenerator, Callable, Sequence
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from src.api import app
from src.models.schemas import HistoryTurn
from src.provider.client import get_chat_provider


class FakeProvider:
    """Records chat calls and replays scripted outcomes.

    Each outcome is either reply text or an exception to raise.
    """

    def __init__(self, *outcomes: Any, configured: bool = True) -> None:
        self.outcomes = list(outcomes) or ["Haan ji, happy to help!"]
        self.is_configured = configured
        self.calls: list[dict[str, Any]] = []

    async def send(
        self,
        message: str,
        history: Sequence[HistoryTurn] = (),
        document_context: str | None = None,
    ) -> str:
        self.calls.append(
            {"message": message, "history": list(history), "document_context": document_context}
        )
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Return a configured fake provider that always answers."""
    return FakeProvider()


@pytest.fixture
async def async_client(fake_provider: FakeProvider) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing with the fake provider.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_chat_provider] = lambda: fake_provider
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_pdf() -> Callable[[int], bytes]:
    """Return a builder for blank PDFs with the given page count."""

    def build(pages: int = 1) -> bytes:
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=200, height=200)
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    return build
