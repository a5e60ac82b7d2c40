from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentFrame(BaseModel):
    """Incremental text emitted while the model is generating.

    Attributes:
        content: The text fragment to append to the accumulated result.
    """

    content: str


class DoneFrame(BaseModel):
    """Terminal marker for a successfully completed stream."""

    done: Literal[True] = True


class ErrorFrame(BaseModel):
    """Terminal marker for a stream that failed after it started.

    Attributes:
        error: Human-readable failure description.
    """

    error: str


StreamFrame = ContentFrame | DoneFrame | ErrorFrame


def parse_frame(data: object) -> StreamFrame | None:
    """Interpret a decoded SSE payload as a stream frame.

    Precedence follows the wire contract: a truthy ``done`` wins over
    ``error``, which wins over ``content``. Payloads that are not objects,
    or carry none of those keys, are not frames.

    Args:
        data: JSON-decoded payload of a ``data:`` line.

    Returns:
        The matching frame, or None if the payload is not a frame.
    """
    if not isinstance(data, dict):
        return None
    if data.get("done"):
        return DoneFrame()
    if data.get("error"):
        return ErrorFrame(error=str(data["error"]))
    content = data.get("content")
    if isinstance(content, str) and content:
        return ContentFrame(content=content)
    return None


class ToolRequest(BaseModel):
    """Request payload shared by all tool endpoints.

    Attributes:
        cv_text: Plain text of the candidate's CV (wire name ``cvText``).
        job_description: Target job posting (wire name ``jobDescription``).
    """

    model_config = ConfigDict(populate_by_name=True)

    cv_text: str = Field(default="", alias="cvText")
    job_description: str = Field(default="", alias="jobDescription")

    @field_validator("cv_text", "job_description", mode="before")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        """Strip whitespace so blank or null input counts as missing."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v


class ErrorResponse(BaseModel):
    """JSON body returned for requests rejected before streaming."""

    error: str


class PDFParseRequest(BaseModel):
    """Payload for the PDF text extraction endpoint."""

    base64: str = ""


class PDFParseResponse(BaseModel):
    """Extracted PDF text.

    Attributes:
        text: Combined text of all pages.
        pages: Number of pages in the document.
        metadata: Document info such as title and author, when present.
    """

    text: str
    pages: int = 0
    metadata: dict[str, str] = Field(default_factory=dict)
