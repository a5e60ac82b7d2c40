"""Provider configuration with environment variable loading.

Pydantic-based configuration for the completion agents.
Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gpt-5-mini"


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


class AgentConfig(BaseModel):
    """Configuration for the model provider.

    Supports OpenAI and any OpenAI-compatible API via LLM_BASE_URL.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL (None for OpenAI default).
        model_name: Model identifier to use.
        temperature: Sampling temperature, None to use the provider default.
    """

    api_key: str = Field(
        default_factory=lambda: _first_env(
            "LLM_API_KEY", "OPENAI_API_KEY", "AI_INTEGRATIONS_OPENAI_API_KEY"
        )
        or "",
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: _first_env("LLM_BASE_URL", "AI_INTEGRATIONS_OPENAI_BASE_URL"),
        description="API base URL (None for OpenAI default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    # Reasoning models such as gpt-5-mini reject an explicit temperature
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env")
        return v.strip()


def get_agent_config() -> AgentConfig:
    """Create provider configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
