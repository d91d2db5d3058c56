"""Integration tests for POST /api/upload.

Uses real PDFs built with pypdf; nothing is mocked.
"""

from collections.abc import Callable

import pytest_check as check
from httpx import AsyncClient

from src.parsing.pdf_parser import MAX_FILE_SIZE


class TestUploadSuccess:
    async def test_returns_extracted_document(
        self, async_client: AsyncClient, make_pdf: Callable[[int], bytes]
    ) -> None:
        pdf = make_pdf(2)

        response = await async_client.post(
            "/api/upload",
            files={"file": ("notes.pdf", pdf, "application/pdf")},
        )

        assert response.status_code == 200
        body = response.json()
        check.is_true(body["success"])
        check.equal(body["document"]["name"], "notes.pdf")
        check.equal(body["document"]["size"], len(pdf))
        check.equal(body["document"]["type"], "PDF")
        check.equal(body["document"]["pages"], 2)
        check.is_instance(body["document"]["content"], str)

    async def test_file_at_exact_limit_is_not_rejected_for_size(
        self, async_client: AsyncClient
    ) -> None:
        data = b"%PDF-1.4" + b"\x00" * (MAX_FILE_SIZE - 8)

        response = await async_client.post(
            "/api/upload",
            files={"file": ("big.pdf", data, "application/pdf")},
        )

        assert response.json()["error"] != "File size exceeds 10MB limit"


class TestUploadRejection:
    async def test_missing_file(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/upload",
            files={"attachment": ("notes.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "No file provided", "success": False}

    async def test_non_pdf_content_type(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/upload",
            files={"file": ("notes.txt", b"plain text", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Only PDF files are supported", "success": False}

    async def test_oversized_file(self, async_client: AsyncClient) -> None:
        data = b"%PDF-1.4" + b"\x00" * (15 * 1024 * 1024)

        response = await async_client.post(
            "/api/upload",
            files={"file": ("huge.pdf", data, "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File size exceeds 10MB limit", "success": False}

    async def test_extraction_failure_passes_message_through(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.post(
            "/api/upload",
            files={"file": ("fake.pdf", b"not really a pdf", "application/pdf")},
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Invalid PDF: file does not start with PDF header",
            "success": False,
        }

    async def test_text_field_instead_of_file(self, async_client: AsyncClient) -> None:
        """Form validation errors use the same error body as other failures."""
        response = await async_client.post("/api/upload", data={"file": "not a file"})

        assert response.status_code == 400
        assert response.json()["success"] is False
