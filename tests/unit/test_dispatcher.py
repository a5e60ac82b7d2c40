"""Unit tests for the streaming request dispatcher.

The server side is replaced by ``httpx.MockTransport`` handlers that emit
scripted SSE bodies, optionally pausing between chunks.
"""

import asyncio
import json
from collections.abc import AsyncIterator

import httpx
import pytest_check as check

from career_copilot.client.dispatcher import StreamingRequest


def sse(*payloads: dict | str) -> bytes:
    """Encode payloads as SSE frames; strings are written verbatim after ``data: ``."""
    parts = []
    for payload in payloads:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        parts.append(f"data: {text}\n\n")
    return "".join(parts).encode()


class ScriptedStream(httpx.AsyncByteStream):
    """Response body yielding chunks with optional pauses between them."""

    def __init__(self, chunks: list[bytes | float]) -> None:
        self.chunks = chunks

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            if isinstance(chunk, float):
                await asyncio.sleep(chunk)
            else:
                yield chunk


def streaming_transport(chunks: list[bytes | float], status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            headers={"content-type": "text/event-stream"},
            stream=ScriptedStream(chunks),
        )

    return httpx.MockTransport(handler)


class StateRecorder:
    """Collects (is_loading, result, error) snapshots from on_change."""

    def __init__(self) -> None:
        self.snapshots: list[tuple[bool, str, str | None]] = []

    def __call__(self, request: StreamingRequest) -> None:
        self.snapshots.append((request.is_loading, request.result, request.error))

    @property
    def loading_transitions(self) -> list[bool]:
        transitions: list[bool] = []
        for loading, _, _ in self.snapshots:
            if not transitions or transitions[-1] != loading:
                transitions.append(loading)
        return transitions


def make_request(transport: httpx.AsyncBaseTransport, recorder: StateRecorder | None = None):
    return StreamingRequest(
        "/api/cv/optimize",
        base_url="http://test",
        transport=transport,
        on_change=recorder,
    )


class TestExecute:
    """Frame handling during a single request."""

    async def test_accumulates_content_until_done(self) -> None:
        recorder = StateRecorder()
        request = make_request(
            streaming_transport([sse({"content": "A"}, {"content": "B"}, {"done": True})]),
            recorder,
        )

        await request.execute({"cvText": "cv", "jobDescription": "job"})

        check.equal(request.result, "AB")
        check.is_false(request.is_loading)
        check.is_none(request.error)
        check.equal(recorder.loading_transitions, [True, False])
        # loading goes false exactly once, after the last content frame
        check.equal(recorder.snapshots[-1], (False, "AB", None))
        check.equal([s[1] for s in recorder.snapshots if s[0]], ["", "A", "AB"])

    async def test_each_content_frame_is_published(self) -> None:
        recorder = StateRecorder()
        chunks = [sse({"content": c}) for c in "abc"] + [sse({"done": True})]
        request = make_request(streaming_transport(chunks), recorder)

        await request.execute({"cvText": "cv"})

        assert [s[1] for s in recorder.snapshots] == ["", "a", "ab", "abc", "abc"]

    async def test_malformed_line_between_frames_is_skipped(self) -> None:
        request = make_request(
            streaming_transport(
                [sse({"content": "A"}, '{"content": broken', {"content": "B"}, {"done": True})]
            )
        )

        await request.execute({"cvText": "cv"})

        check.equal(request.result, "AB")
        check.is_none(request.error)

    async def test_frames_after_done_are_not_applied(self) -> None:
        request = make_request(
            streaming_transport(
                [sse({"content": "A"}, {"done": True}), sse({"content": "ignored"})]
            )
        )

        await request.execute({"cvText": "cv"})

        assert request.result == "A"

    async def test_chunks_split_mid_frame(self) -> None:
        body = sse({"content": "Zażółć"}, {"content": " ✓"}, {"done": True})
        chunks = [body[i : i + 3] for i in range(0, len(body), 3)]
        request = make_request(streaming_transport(chunks))

        await request.execute({"cvText": "cv"})

        assert request.result == "Zażółć ✓"

    async def test_stream_ending_without_done_finishes(self) -> None:
        request = make_request(streaming_transport([sse({"content": "A"})]))

        await request.execute({"cvText": "cv"})

        check.equal(request.result, "A")
        check.is_false(request.is_loading)
        check.is_none(request.error)

    async def test_sends_json_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=sse({"done": True}))

        request = make_request(httpx.MockTransport(handler))
        await request.execute({"cvText": "cv", "jobDescription": "job"})

        check.equal(seen[0].method, "POST")
        check.equal(seen[0].url.path, "/api/cv/optimize")
        check.equal(json.loads(seen[0].content), {"cvText": "cv", "jobDescription": "job"})
        check.equal(seen[0].headers["accept"], "text/event-stream")


class TestErrors:
    """Failures surface as a readable error string."""

    async def test_error_frame_sets_error_and_keeps_partial_result(self) -> None:
        recorder = StateRecorder()
        request = make_request(
            streaming_transport(
                [sse({"content": "partial"}, {"error": "Processing failed"}, {"content": "x"})]
            ),
            recorder,
        )

        await request.execute({"cvText": "cv"})

        check.equal(request.error, "Processing failed")
        check.equal(request.result, "partial")
        check.is_false(request.is_loading)
        check.equal(recorder.loading_transitions, [True, False])

    async def test_non_2xx_uses_json_error_field(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "Failed to optimize CV"})

        request = make_request(httpx.MockTransport(handler))
        await request.execute({"cvText": "cv"})

        check.equal(request.error, "Failed to optimize CV")
        check.is_false(request.is_loading)

    async def test_non_2xx_plain_text_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad gateway")

        request = make_request(httpx.MockTransport(handler))
        await request.execute({"cvText": "cv"})

        assert request.error == "Bad gateway"

    async def test_non_2xx_empty_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        request = make_request(httpx.MockTransport(handler))
        await request.execute({"cvText": "cv"})

        assert request.error == "Request failed: 503"

    async def test_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        request = make_request(httpx.MockTransport(handler))
        await request.execute({"cvText": "cv"})

        check.is_not_none(request.error)
        check.is_in("Connection failed", request.error or "")
        check.is_false(request.is_loading)

    async def test_unexpected_decode_failure_is_reported(self) -> None:
        """A parse failure other than bad JSON ends the request with an error."""
        recorder = StateRecorder()
        nested = b"data: " + b"[" * 200_000 + b"\n\n"
        request = make_request(
            streaming_transport([sse({"content": "A"}), nested, sse({"done": True})]),
            recorder,
        )

        await request.execute({"cvText": "cv"})

        check.is_not_none(request.error)
        check.is_in("recursion", (request.error or "").lower())
        check.equal(request.result, "A")
        check.is_false(request.is_loading)
        check.is_false(request.in_flight)
        check.equal(recorder.loading_transitions, [True, False])

    async def test_new_execute_clears_previous_error(self) -> None:
        responses = iter(
            [
                httpx.Response(500, json={"error": "boom"}),
                httpx.Response(200, content=sse({"content": "ok"}, {"done": True})),
            ]
        )
        request = make_request(httpx.MockTransport(lambda r: next(responses)))

        await request.execute({"cvText": "cv"})
        check.equal(request.error, "boom")

        await request.execute({"cvText": "cv"})
        check.is_none(request.error)
        check.equal(request.result, "ok")


class TestCancellation:
    """cancel(), reset() and superseding requests."""

    async def test_cancel_is_not_an_error(self) -> None:
        recorder = StateRecorder()
        request = make_request(
            streaming_transport([sse({"content": "A"}), 5.0, sse({"content": "B"})]),
            recorder,
        )

        running = asyncio.create_task(request.execute({"cvText": "cv"}))
        await _wait_for(lambda: request.result == "A")
        request.cancel()
        await asyncio.wait_for(running, timeout=1)

        check.is_false(request.is_loading)
        check.is_none(request.error)
        check.equal(request.result, "A")
        check.is_false(request.in_flight)
        check.equal(recorder.loading_transitions, [True, False])

    async def test_second_execute_supersedes_first(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            if body["cvText"] == "first":
                chunks: list[bytes | float] = [
                    sse({"content": "stale"}),
                    5.0,
                    sse({"content": "late"}, {"done": True}),
                ]
            else:
                chunks = [sse({"content": "fresh"}, {"done": True})]
            return httpx.Response(200, stream=ScriptedStream(chunks))

        recorder = StateRecorder()
        request = make_request(httpx.MockTransport(handler), recorder)

        first = asyncio.create_task(request.execute({"cvText": "first"}))
        await _wait_for(lambda: request.result == "stale")
        await request.execute({"cvText": "second"})
        await asyncio.wait_for(first, timeout=1)

        check.equal(request.result, "fresh")
        check.is_false(request.is_loading)
        check.is_none(request.error)
        check.is_false(request.in_flight)
        check.is_false(any("late" in s[1] for s in recorder.snapshots))
        # the superseded request never flips loading off for the new one
        check.equal(recorder.loading_transitions, [True, False])

    async def test_reset_clears_state_without_touching_stream(self) -> None:
        request = make_request(
            streaming_transport([sse({"content": "A"}), 0.05, sse({"content": "B"}, {"done": True})])
        )

        running = asyncio.create_task(request.execute({"cvText": "cv"}))
        await _wait_for(lambda: request.result == "A")
        request.reset()
        check.equal(request.result, "")
        check.is_true(request.is_loading)

        await asyncio.wait_for(running, timeout=1)
        check.equal(request.result, "B")
        check.is_false(request.is_loading)

    async def test_cancel_without_request_is_noop(self) -> None:
        recorder = StateRecorder()
        request = make_request(streaming_transport([]), recorder)

        request.cancel()

        check.is_false(request.is_loading)
        check.equal(recorder.snapshots, [])


async def _wait_for(condition, timeout: float = 1.0) -> None:
    """Poll until ``condition()`` is true."""
    async with asyncio.timeout(timeout):
        while not condition():
            await asyncio.sleep(0.001)

