"""SSE relay between a tool request and the model provider stream.

The same mechanics serve every tool:

- Required fields are validated before the provider is touched (400).
- The provider stream is primed for its first token before the response
  is committed, so a provider that fails immediately still gets a
  conventional JSON 500 instead of a half-open event stream.
- Once streaming, each token is written as a ``content`` frame and the
  stream ends with ``done``. Later failures can only be reported in-band as
  an ``error`` frame because the status line has already been sent.
- A client disconnect stops relaying and closes the upstream stream, which
  cancels generation at the provider.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from career_copilot.agent.completion import CompletionService
from career_copilot.models.schemas import (
    ContentFrame,
    DoneFrame,
    ErrorFrame,
    ErrorResponse,
    StreamFrame,
    ToolRequest,
)
from career_copilot.models.tools import ToolConfig

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

# In-band message once streaming has begun; provider details stay in the logs
STREAM_FAILURE_MESSAGE = "Processing failed"


def format_sse(frame: StreamFrame) -> str:
    """Serialize a frame as one SSE event."""
    return f"data: {frame.model_dump_json()}\n\n"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a JSON error response for requests rejected before streaming."""
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def _close(tokens: AsyncIterator[str]) -> None:
    aclose = getattr(tokens, "aclose", None)
    if aclose is not None:
        await aclose()


async def _relay_frames(
    tool: ToolConfig,
    first: str | None,
    tokens: AsyncIterator[str],
    request: Request,
) -> AsyncGenerator[str]:
    """Re-emit provider tokens as SSE frames.

    Args:
        tool: Tool being served, for logging.
        first: Token already pulled while priming, None if the stream was empty.
        tokens: Remaining provider tokens.
        request: Inbound request, polled for client disconnect.

    Yields:
        Serialized SSE events.
    """
    try:
        if first:
            yield format_sse(ContentFrame(content=first))

        async for token in tokens:
            if await request.is_disconnected():
                logger.info(f"Client disconnected from {tool.id.value} stream, closing upstream")
                return
            yield format_sse(ContentFrame(content=token))

        yield format_sse(DoneFrame())
    except Exception as e:
        logger.error(f"{tool.title} stream failed mid-response: {e}")
        yield format_sse(ErrorFrame(error=STREAM_FAILURE_MESSAGE))
    finally:
        await _close(tokens)


async def relay_completion(
    tool: ToolConfig,
    payload: ToolRequest,
    request: Request,
    service: CompletionService,
) -> Response:
    """Serve one tool request as an SSE stream of provider tokens.

    Args:
        tool: Configuration of the requested tool.
        payload: Validated request body.
        request: Inbound HTTP request.
        service: Provider client producing completion tokens.

    Returns:
        400/500 JSON error responses, or a ``text/event-stream`` response.
    """
    values = payload.model_dump()
    missing = tool.missing_fields(values)
    if missing:
        logger.info(f"Rejected {tool.id.value} request, missing: {', '.join(missing)}")
        return error_response(status.HTTP_400_BAD_REQUEST, tool.validation_message)

    tokens = service.stream_completion(tool, values)
    try:
        first = await anext(tokens, None)
    except Exception as e:
        logger.error(f"{tool.title} failed before streaming: {e}")
        await _close(tokens)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, tool.failure_message)

    return StreamingResponse(
        _relay_frames(tool, first, tokens, request),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
