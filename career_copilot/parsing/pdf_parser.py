"""PDF parsing module using pypdf.

Extracts CV text from PDF files with validation.
Accepts raw bytes or the base64 text a browser file reader produces.
"""

import base64
import binascii
import io
import logging
import re

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
_METADATA_FIELDS = {
    "/Title": "title",
    "/Author": "author",
    "/Subject": "subject",
    "/Creator": "creator",
}


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Combined text content from all pages.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str]


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


class PDFTooLargeError(PDFParseError):
    """Raised when the PDF exceeds MAX_FILE_SIZE."""

    pass


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFTooLargeError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    metadata: dict[str, str] = {}
    try:
        info = reader.metadata or {}
        for key, name in _METADATA_FIELDS.items():
            value = info.get(key)
            if value:
                metadata[name] = str(value)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")
    return metadata


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Pages whose text cannot be extracted are skipped with a warning, so a
    partially damaged CV still yields the readable part.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        PDFTooLargeError: If the file exceeds MAX_FILE_SIZE.
        PDFParseError: If the file is invalid, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue
        if page_text:
            text_parts.append(page_text)

    text = "\n\n".join(text_parts)
    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(text=text, pages=pages, metadata=_extract_metadata(reader))


def decode_base64_pdf(data: str) -> bytes:
    """Decode base64 PDF data, tolerating a ``data:`` URL prefix.

    Raises:
        PDFParseError: If the data is not valid base64.
    """
    payload = _DATA_URL_PREFIX.sub("", data.strip())
    # Browsers and mail clients wrap long base64 lines
    payload = "".join(payload.split())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PDFParseError(f"Invalid base64 data: {e}") from e


def parse_pdf_base64(data: str) -> PDFContent:
    """Decode base64-encoded PDF data and extract its text.

    Args:
        data: Base64 text, optionally prefixed with a data URL header.

    Returns:
        PDFContent for the decoded document.

    Raises:
        PDFParseError: If decoding or parsing fails.
    """
    return parse_pdf(decode_base64_pdf(data))
