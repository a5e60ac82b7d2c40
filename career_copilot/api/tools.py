"""Tool endpoints: one SSE route per registered tool.

All routes share ``relay_completion``; the registry decides path, prompts
and required inputs.
"""

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from career_copilot.agent.completion import CompletionService, get_completion_service
from career_copilot.api.streaming import relay_completion
from career_copilot.models.schemas import ErrorResponse, ToolRequest
from career_copilot.models.tools import TOOLS, ToolConfig

router = APIRouter(tags=["tools"])


def _make_endpoint(tool: ToolConfig) -> Callable[..., Awaitable[Response]]:
    async def endpoint(
        payload: ToolRequest,
        request: Request,
        service: CompletionService = Depends(get_completion_service),
    ) -> Response:
        return await relay_completion(tool, payload, request, service)

    endpoint.__name__ = f"{tool.id.name.lower()}_stream"
    endpoint.__doc__ = f"{tool.description}. Streams Server-Sent Events."
    return endpoint


for _tool in TOOLS.values():
    router.add_api_route(
        _tool.path,
        _make_endpoint(_tool),
        methods=["POST"],
        response_model=None,
        summary=_tool.title,
        responses={
            200: {"content": {"text/event-stream": {}}},
            400: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
