"""PDF parsing utilities for CV text extraction.

Responsibilities:
    - PDF text extraction with pypdf
    - Base64 decoding of uploaded documents
    - Size, header and integrity validation
"""

from career_copilot.parsing.pdf_parser import (
    PDFContent,
    PDFParseError,
    PDFTooLargeError,
    parse_pdf,
    parse_pdf_base64,
)

__all__ = ["PDFContent", "PDFParseError", "PDFTooLargeError", "parse_pdf", "parse_pdf_base64"]
