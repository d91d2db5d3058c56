"""PDF upload endpoint for document extraction.

Handles file upload, validation and text extraction. Nothing is stored on
the server: the extracted text goes back to the client, which attaches it
to later chat requests.
"""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from src.models.schemas import ErrorResponse, UploadedDocument, UploadResponse
from src.parsing.pdf_parser import MAX_FILE_SIZE, DocumentExtractionError, extract_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])

PDF_CONTENT_TYPE = "application/pdf"


def _validate_content_type(file: UploadFile) -> None:
    """Reject anything not declared as a PDF.

    Raises:
        HTTPException: 400 if the content type is not application/pdf.
    """
    if file.content_type != PDF_CONTENT_TYPE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are supported",
        )


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Args:
        file: The uploaded file.

    Returns:
        File content as bytes.

    Raises:
        HTTPException: 400 if file exceeds the 10MB limit.
    """
    content = await file.read()

    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File size exceeds 10MB limit",
        )

    return content


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload(file: UploadFile | None = File(None)) -> UploadResponse:
    """Upload a PDF and return its extracted text.

    Args:
        file: The uploaded PDF file (multipart/form-data field ``file``).

    Returns:
        UploadResponse with name, size, page count and extracted text.

    Raises:
        400: No file, wrong content type, or file over 10MB.
        500: Text extraction failed (extractor message passed through).
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided",
        )

    _validate_content_type(file)
    content = await _read_and_validate_size(file)
    filename = file.filename or "document.pdf"

    try:
        extracted = extract_pdf(content)
    except DocumentExtractionError as e:
        logger.warning(f"PDF extraction failed for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    logger.info(f"Extracted {filename} ({extracted.pages} pages, {len(content)} bytes)")

    return UploadResponse(
        document=UploadedDocument(
            name=filename,
            size=len(content),
            content=extracted.text,
            pages=extracted.pages,
        )
    )
