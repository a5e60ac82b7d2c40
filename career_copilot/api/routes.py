"""PDF parsing endpoint for CV text extraction.

Accepts base64-encoded PDF data and returns the extracted plain text.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from career_copilot.api.streaming import error_response
from career_copilot.models.schemas import ErrorResponse, PDFParseRequest, PDFParseResponse
from career_copilot.parsing.pdf_parser import PDFParseError, PDFTooLargeError, parse_pdf_base64

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pdf", tags=["pdf"])


@router.post(
    "/parse",
    response_model=PDFParseResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def parse_pdf_upload(payload: PDFParseRequest) -> PDFParseResponse | JSONResponse:
    """Extract text from a base64-encoded PDF.

    Args:
        payload: Body with the ``base64`` document data.

    Returns:
        PDFParseResponse with the extracted text and page count.

    Raises:
        400: Missing data, invalid base64, or not a readable PDF.
        413: Document exceeds 10MB.
        500: Internal processing error.
    """
    if not payload.base64.strip():
        return error_response(status.HTTP_400_BAD_REQUEST, "Base64 data is required")

    try:
        pdf_content = parse_pdf_base64(payload.base64)
    except PDFTooLargeError as e:
        logger.warning(f"Rejected oversized PDF: {e}")
        return error_response(status.HTTP_413_CONTENT_TOO_LARGE, str(e))
    except PDFParseError as e:
        logger.warning(f"PDF parse error: {e}")
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.error(f"Failed to parse PDF: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to parse PDF")

    logger.info(f"Extracted {len(pdf_content.text)} characters from {pdf_content.pages} page(s)")
    return PDFParseResponse(
        text=pdf_content.text, pages=pdf_content.pages, metadata=pdf_content.metadata
    )
