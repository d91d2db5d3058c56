"""Integration tests for POST /api/chat.

Runs the real FastAPI app through ASGITransport with the provider
replaced by FakeProvider via dependency overrides.
"""

import pytest
import pytest_check as check
from httpx import AsyncClient

from src.provider.errors import ProviderError, ProviderErrorKind
from tests.conftest import FakeProvider


class TestChatSuccess:
    async def test_returns_reply(self, async_client: AsyncClient, fake_provider: FakeProvider) -> None:
        response = await async_client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 200
        assert response.json() == {"response": "Haan ji, happy to help!", "success": True}

    async def test_forwards_history_and_document_context(
        self, async_client: AsyncClient, fake_provider: FakeProvider
    ) -> None:
        response = await async_client.post(
            "/api/chat",
            json={
                "message": "  And now?  ",
                "history": [
                    {"role": "user", "parts": [{"text": "First"}]},
                    {"role": "assistant", "parts": ["Reply"]},
                ],
                "documentContext": "\n\nAttached Documents:\n[a.pdf]\nalpha",
            },
        )

        assert response.status_code == 200
        call = fake_provider.calls[0]
        check.equal(call["message"], "  And now?  ")
        check.equal([turn.role for turn in call["history"]], ["user", "assistant"])
        check.equal([turn.parts[0].text for turn in call["history"]], ["First", "Reply"])
        check.equal(call["document_context"], "\n\nAttached Documents:\n[a.pdf]\nalpha")

    async def test_message_whitespace_is_preserved(
        self, async_client: AsyncClient, fake_provider: FakeProvider
    ) -> None:
        response = await async_client.post("/api/chat", json={"message": "line one\n  indented\n"})

        assert response.status_code == 200
        assert fake_provider.calls[0]["message"] == "line one\n  indented\n"

    async def test_non_string_document_context_is_ignored(
        self, async_client: AsyncClient, fake_provider: FakeProvider
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={"message": "Hi", "documentContext": 12}
        )

        assert response.status_code == 200
        assert fake_provider.calls[0]["document_context"] is None


class TestChatValidation:
    @pytest.mark.parametrize(
        ("body", "error"),
        [
            ({"message": ""}, "Message is required and must be a string"),
            ({}, "Message is required and must be a string"),
            ({"message": 42}, "Message is required and must be a string"),
            ({"message": "   "}, "Message cannot be empty"),
            ({"message": "hi", "history": "not-an-array"}, "History must be an array"),
            ({"message": "hi", "history": [{"parts": []}]}, "Invalid history format"),
            (["message"], "Invalid JSON in request body"),
        ],
    )
    async def test_rejects_bad_body(
        self,
        async_client: AsyncClient,
        fake_provider: FakeProvider,
        body: object,
        error: str,
    ) -> None:
        response = await async_client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": error, "success": False}
        assert fake_provider.calls == []

    async def test_rejects_malformed_json(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/chat",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON in request body", "success": False}

    async def test_missing_credentials_is_503(
        self, async_client: AsyncClient, fake_provider: FakeProvider
    ) -> None:
        fake_provider.is_configured = False

        response = await async_client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 503
        body = response.json()
        check.is_false(body["success"])
        check.is_in("GEMINI_API_KEY", body["error"])


class TestChatProviderFailures:
    @pytest.mark.parametrize(
        ("kind", "status_code", "error"),
        [
            (ProviderErrorKind.QUOTA, 429, "API quota exceeded. Please try again later."),
            (ProviderErrorKind.AUTH, 401, "Invalid API key or authentication failed"),
            (ProviderErrorKind.TIMEOUT, 504, "Request timed out. Please try again."),
            (
                ProviderErrorKind.RATE_LIMIT,
                429,
                "Rate limit exceeded. Please wait before trying again.",
            ),
            (
                ProviderErrorKind.CONTENT_FILTER,
                400,
                "Message was blocked by content filter. Please rephrase.",
            ),
            (
                ProviderErrorKind.INVALID_RESPONSE,
                500,
                "Failed to process chat request. Please try again.",
            ),
            (ProviderErrorKind.UNKNOWN, 500, "Failed to process chat request. Please try again."),
        ],
    )
    async def test_maps_kind_to_status(
        self,
        async_client: AsyncClient,
        fake_provider: FakeProvider,
        kind: ProviderErrorKind,
        status_code: int,
        error: str,
    ) -> None:
        fake_provider.outcomes = [ProviderError(kind, "provider detail")]

        response = await async_client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == status_code
        assert response.json() == {"error": error, "success": False}

    async def test_unexpected_exception_is_500(
        self, async_client: AsyncClient, fake_provider: FakeProvider
    ) -> None:
        fake_provider.outcomes = [RuntimeError("boom")]

        response = await async_client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 500
        assert response.json()["success"] is False


async def test_health(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
