"""PDF text extraction using pypdf.

Turns uploaded PDF bytes into plain text plus a page count. Pages are
merged with blank lines between them; the text is attached to chat
requests as-is.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"


class ExtractedPDF(BaseModel):
    """Text extracted from a PDF file.

    Attributes:
        text: Merged text of all pages.
        pages: Total number of pages in the document.
    """

    text: str
    pages: int = Field(ge=0)


class DocumentExtractionError(Exception):
    """Raised when a PDF cannot be read or has no pages."""


def _check_header(data: bytes) -> None:
    if not data:
        raise DocumentExtractionError("Empty file provided")
    if not data.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise DocumentExtractionError("Invalid PDF: file does not start with PDF header")


def extract_pdf(data: bytes) -> ExtractedPDF:
    """Extract text and page count from PDF bytes.

    Pages whose text cannot be extracted are skipped with a warning, so a
    scanned document yields empty text rather than an error.

    Args:
        data: Raw bytes of the PDF file.

    Returns:
        ExtractedPDF with merged text and page count.

    Raises:
        DocumentExtractionError: If the bytes are empty, not a PDF, corrupt,
            or the document has no pages.
    """
    _check_header(data)

    try:
        reader = PdfReader(io.BytesIO(data))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise DocumentExtractionError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise DocumentExtractionError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise DocumentExtractionError("PDF contains no pages")

    text_parts: list[str] = []
    for number, page in enumerate(reader.pages, start=1):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {number}: {e}")
            continue
        if page_text and page_text.strip():
            text_parts.append(page_text.strip())

    if not text_parts:
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return ExtractedPDF(text="\n\n".join(text_parts), pages=pages)
