"""Test package for Career Copilot.

Unit tests cover isolated logic; integration tests drive the FastAPI app
in-process.

Structure:
    - unit/: Individual function and class tests
    - integration/: Endpoint and client-against-relay workflows

PDFs are generated in memory and the model provider is replaced by a
scripted fake, so no network access or API key is needed.
Leverages pytest with pytest-check for soft assertions.
"""
