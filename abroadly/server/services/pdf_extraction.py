"""
Text extraction from uploaded PDF files.
"""

import io

from pypdf import PdfReader

from abroadly.core.logging_config import get_logger

logger = get_logger(__name__)

PDF_CONTENT_TYPES = ("application/pdf", "application/x-pdf")


def extract_pdf_text(data: bytes) -> str:
    """
    Extract the text of every page of a PDF.

    Args:
        data: Raw PDF bytes

    Returns:
        Page texts joined by newlines, stripped; empty when the PDF has no text layer

    Raises:
        pypdf.errors.PdfReadError: When the bytes are not a readable PDF
    """
    reader = PdfReader(io.BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    logger.debug(f"Extracted text from {len(pages)} PDF pages")
    return "\n".join(pages).strip()
