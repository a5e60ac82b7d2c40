"""Agno completion service with streaming support.

Wraps one stateless Agno agent per tool behind a clean token generator for
the SSE relay.

Architecture Decisions:

1. **One Agent per tool** - Each tool has a fixed system prompt and output
   bound. Building the agents once at startup keeps the per-request path to
   prompt rendering plus a streaming run.

2. **No storage** - Every tool call is a single independent turn. Agents are
   created without a db, so no history or session state is kept.

3. **Service Wrapper** - Decouples the relay from Agno's event types. Agno
   streams typed run events; we keep only content events and turn provider
   error events into exceptions, so the relay only ever sees strings.

4. **Singleton + dependency** - ``get_completion_service`` is used as a
   FastAPI dependency, which lets tests swap in a scripted provider via
   ``app.dependency_overrides``.
"""

import logging
from collections.abc import AsyncGenerator, Mapping

from agno.agent import Agent
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent

from career_copilot.agent.config import AgentConfig, get_agent_config
from career_copilot.models.tools import TOOLS, ToolConfig, ToolId

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the provider reports a failure during a run."""

    pass


class CompletionService:
    """Service streaming tool completions from the model provider.

    Wraps Agno's Agent with:
    - One preconfigured agent per tool
    - Clean streaming interface for SSE endpoints
    - Provider error events surfaced as exceptions
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the completion service.

        Args:
            config: Optional provider configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agents: dict[ToolId, Agent] = {
            tool_id: self._create_agent(tool) for tool_id, tool in TOOLS.items()
        }

    def _create_agent(self, tool: ToolConfig) -> Agent:
        """Create the Agno agent for a tool.

        Returns:
            Agent with the tool's system prompt and output bound.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_completion_tokens=tool.max_tokens,
        )

        return Agent(
            name=tool.title,
            model=model,
            system_message=tool.system_prompt,
            # Raw model output is relayed as-is; JSON tools must not get markdown wrapping
            markdown=False,
            telemetry=False,
        )

    async def stream_completion(
        self,
        tool: ToolConfig,
        values: Mapping[str, str],
    ) -> AsyncGenerator[str]:
        """Stream completion tokens for one tool request.

        Args:
            tool: Tool whose prompts and limits to use.
            values: Request fields interpolated into the user prompt.

        Yields:
            Response text tokens as they arrive.

        Raises:
            CompletionError: If the provider reports a run error.
        """
        agent = self._agents[tool.id]
        prompt = tool.render_prompt(values)

        async for event in agent.arun(prompt, stream=True):
            kind = getattr(event, "event", None)
            if kind == RunEvent.run_error:
                raise CompletionError(getattr(event, "content", None) or "Model provider error")
            if kind == RunEvent.run_content and event.content:
                yield event.content

        logger.debug(f"Completed {tool.id.value} run")


# Module-level singleton instance
_completion_service: CompletionService | None = None


def get_completion_service() -> CompletionService:
    """Get or create the global completion service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The CompletionService instance.
    """
    global _completion_service
    if _completion_service is None:
        _completion_service = CompletionService()
    return _completion_service
