"""Unit tests for individual components in isolation.

Coverage:
    - models/: Tool registry and result schemas
    - parsing/: PDF validation and text extraction
    - agent/: Provider configuration and run event handling
    - client/: SSE decoding, request dispatch and result extraction

Uses mocks for external services when needed. Leverages pytest-check for
multiple assertions per test.
"""
