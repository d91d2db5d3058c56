"""PDF text extraction for uploaded documents.

Treated by the rest of the application as a black box:
bytes in, text and page count out, or DocumentExtractionError.
"""

from src.parsing.pdf_parser import DocumentExtractionError, ExtractedPDF, extract_pdf

__all__ = ["DocumentExtractionError", "ExtractedPDF", "extract_pdf"]
