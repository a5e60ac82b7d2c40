"""Agno agent logic for model provider calls.

Streams tool completions from an OpenAI-compatible chat model.

Responsibilities:
    - Provider configuration from the environment
    - One agent per tool with its fixed system prompt and output bound
    - Streaming token generation for the SSE relay

Maintains clean separation from the HTTP layer.
"""

from career_copilot.agent.completion import (
    CompletionError,
    CompletionService,
    get_completion_service,
)
from career_copilot.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "CompletionError",
    "CompletionService",
    "get_agent_config",
    "get_completion_service",
]
