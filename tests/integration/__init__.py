"""Integration tests for components working together as a system.

Coverage:
    - Tool endpoints streamed over SSE through an in-process ASGI transport
    - Request validation and provider failure handling
    - PDF extraction endpoint with generated documents
    - The streaming client decoding a live relay response

Only the model provider is faked; routing, validation and the relay are real.
"""
