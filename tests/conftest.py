"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - make_pdf: Builds small valid PDF documents in memory
    - fake_service: Scripted stand-in for the model provider
    - async_client: HTTPX client for API testing with the provider stubbed
    - sse_frames: Parses a raw SSE body into frame payloads
"""

import asyncio
import json
from collections.abc import AsyncGenerator, Callable, Mapping

import pytest
from httpx import ASGITransport, AsyncClient

from career_copilot.agent.completion import get_completion_service
from career_copilot.api import app
from career_copilot.models.tools import ToolConfig


def build_pdf(pages: list[str]) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page."""
    count = len(pages)
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(count))
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * i} 0 R >>"
            ).encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


class FakeCompletionService:
    """Scripted provider yielding fixed tokens.

    Attributes:
        tokens: Tokens to emit, in order.
        fail_after: Raise after emitting this many tokens (None never fails).
        calls: (tool, values) pairs of every stream that was opened.
        closed: Number of streams that were closed, including on early exit.
    """

    def __init__(self, tokens: list[str] | None = None, fail_after: int | None = None) -> None:
        self.tokens = tokens if tokens is not None else ["Hello", ", ", "world"]
        self.fail_after = fail_after
        self.delay = 0.0
        self.calls: list[tuple[ToolConfig, dict[str, str]]] = []
        self.closed = 0

    async def stream_completion(
        self, tool: ToolConfig, values: Mapping[str, str]
    ) -> AsyncGenerator[str]:
        self.calls.append((tool, dict(values)))
        try:
            for index, token in enumerate(self.tokens):
                if self.fail_after is not None and index >= self.fail_after:
                    raise RuntimeError("provider exploded")
                if self.delay:
                    await asyncio.sleep(self.delay)
                yield token
            if self.fail_after is not None and self.fail_after >= len(self.tokens):
                raise RuntimeError("provider exploded")
        finally:
            self.closed += 1


@pytest.fixture
def make_pdf() -> Callable[[list[str]], bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf


@pytest.fixture
def fake_service() -> FakeCompletionService:
    """Provide a scripted provider and install it as the app dependency.

    Yields:
        The fake service; tests adjust ``tokens`` / ``fail_after`` as needed.
    """
    service = FakeCompletionService()
    app.dependency_overrides[get_completion_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_completion_service, None)


@pytest.fixture
async def async_client(fake_service: FakeCompletionService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sse_frames() -> Callable[[str], list[dict]]:
    """Return a parser turning an SSE body into decoded ``data:`` payloads."""

    def parse(body: str) -> list[dict]:
        return [
            json.loads(line.removeprefix("data: "))
            for line in body.splitlines()
            if line.startswith("data: ")
        ]

    return parse
