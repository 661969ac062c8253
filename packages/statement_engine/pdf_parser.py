"""PDF front end: statement bytes to plain text."""

import io

import pdfplumber
import structlog

from .core.errors import StatementDecodeError

logger = structlog.get_logger(__name__)


def extract_pdf_text(file_content: bytes) -> str:
    """
    Extract the text of every page, joined with newlines.

    Raises:
        StatementDecodeError: the bytes are not a readable PDF.
    """
    try:
        with pdfplumber.open(io.BytesIO(file_content)) as pdf:
            texts = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise StatementDecodeError(f"Failed to parse bank statement PDF: {e}") from e

    text = "\n".join(texts)
    logger.debug("pdf_text_preview", pages=len(texts), preview=text[:500])
    return text
