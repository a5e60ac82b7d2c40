"""Career Copilot - LLM-backed career-assistant tools.

Combines FastAPI for SSE streaming, Agno for model calls,
NiceGUI for the web interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and the SSE relay
    - agent: Model provider configuration and streaming completions
    - client: SSE decoding and the streaming request dispatcher
    - parsing: PDF text extraction
    - ui: Web interface for the tools
    - models: Request, frame and result schemas plus the tool registry
"""

__version__ = "0.1.0"
