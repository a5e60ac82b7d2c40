"""Pydantic models for API requests, stream frames and tool results.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ContentFrame / DoneFrame / ErrorFrame: SSE stream frames
    - ToolRequest: Incoming tool request payload
    - ErrorResponse: Error body for rejected requests
    - PDFParseRequest / PDFParseResponse: PDF text extraction payloads
    - AuditResult / InterviewResult / SkillsGapResult: Structured tool output
    - ToolConfig: Per-tool prompts and limits, registered in TOOLS
"""

from career_copilot.models.results import AuditResult, InterviewResult, SkillsGapResult
from career_copilot.models.schemas import (
    ContentFrame,
    DoneFrame,
    ErrorFrame,
    ErrorResponse,
    PDFParseRequest,
    PDFParseResponse,
    StreamFrame,
    ToolRequest,
    parse_frame,
)
from career_copilot.models.tools import TOOLS, OutputFormat, ToolConfig, ToolId, get_tool

__all__ = [
    "TOOLS",
    "AuditResult",
    "ContentFrame",
    "DoneFrame",
    "ErrorFrame",
    "ErrorResponse",
    "InterviewResult",
    "OutputFormat",
    "PDFParseRequest",
    "PDFParseResponse",
    "SkillsGapResult",
    "StreamFrame",
    "ToolConfig",
    "ToolId",
    "ToolRequest",
    "get_tool",
    "parse_frame",
]
