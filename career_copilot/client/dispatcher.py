"""Streaming request dispatcher for the tool endpoints.

Posts a tool request, consumes the SSE response through ``SSEDecoder`` and
exposes ``is_loading`` / ``result`` / ``error`` state that updates as each
frame arrives, so a UI can render the text while it is being generated.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping

import httpx

from career_copilot.client.decoder import SSEDecoder
from career_copilot.models.schemas import ContentFrame, ErrorFrame, StreamFrame

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0


class StreamError(Exception):
    """Raised inside a request when the stream reports or causes a failure."""

    pass


def _error_message(response: httpx.Response) -> str:
    """Extract a readable message from a non-2xx response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text or f"Request failed: {response.status_code}"


class StreamingRequest:
    """Dispatch streaming requests to one endpoint, one at a time.

    Starting a new request cancels the one in flight, and a superseded
    request never touches state again. Cancellation is not an error.

    Attributes:
        is_loading: Whether a request is running.
        result: Text accumulated from content frames so far.
        error: Failure message of the last request, None if it did not fail.
    """

    def __init__(
        self,
        endpoint: str,
        base_url: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        on_change: Callable[["StreamingRequest"], None] | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            endpoint: Path of the tool endpoint, e.g. ``/api/cv/audit``.
            base_url: Server base URL the endpoint is resolved against.
            timeout: Network timeout in seconds.
            transport: Optional httpx transport (in-process apps, tests).
            on_change: Called with the dispatcher after every state change.
        """
        self.endpoint = endpoint
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._on_change = on_change

        self.is_loading = False
        self.result = ""
        self.error: str | None = None

        self._task: asyncio.Task[None] | None = None
        self._generation = 0

    @property
    def in_flight(self) -> bool:
        """Whether a request task is still running."""
        return self._task is not None and not self._task.done()

    async def execute(self, body: Mapping[str, str]) -> None:
        """Run a request and wait until it finishes or is superseded.

        Args:
            body: Named text fields sent as the JSON request body.
        """
        self._abort()
        self._generation += 1
        generation = self._generation

        self.result = ""
        self.error = None
        self.is_loading = True
        self._publish()

        task = asyncio.create_task(self._run(dict(body), generation))
        self._task = task
        try:
            # Returns without raising when the task is cancelled by a newer execute()
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

    def cancel(self) -> None:
        """Abort the in-flight request without reporting an error."""
        self._abort()
        if self.is_loading:
            self.is_loading = False
            self._publish()

    def reset(self) -> None:
        """Clear result and error. An in-flight request keeps running."""
        self.result = ""
        self.error = None
        self._publish()

    def _abort(self) -> None:
        if self._task is not None and not self._task.done():
            logger.debug(f"Cancelling in-flight request to {self.endpoint}")
            self._task.cancel()
        self._task = None
        # Invalidate the aborted run even if it is between awaits
        self._generation += 1

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _publish(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def _apply(self, frame: StreamFrame, generation: int) -> None:
        if not self._is_current(generation):
            return
        if isinstance(frame, ErrorFrame):
            raise StreamError(frame.error)
        if isinstance(frame, ContentFrame):
            self.result += frame.content
            self._publish()

    async def _run(self, body: dict[str, str], generation: int) -> None:
        decoder = SSEDecoder()
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                async with client.stream(
                    "POST",
                    self.endpoint,
                    json=body,
                    headers={"Accept": "text/event-stream"},
                ) as response:
                    if response.is_error:
                        await response.aread()
                        raise StreamError(_error_message(response))

                    async for chunk in response.aiter_bytes():
                        for frame in decoder.feed(chunk):
                            self._apply(frame, generation)
                        if decoder.finished:
                            break
                    for frame in decoder.close():
                        self._apply(frame, generation)
        except StreamError as e:
            self._fail(str(e), generation)
        except httpx.HTTPError as e:
            self._fail(f"Connection failed: {e}", generation)
        except Exception as e:
            logger.exception(f"Unexpected failure while reading {self.endpoint}")
            self._fail(str(e), generation)
        finally:
            if self._is_current(generation):
                self._task = None
                if self.is_loading:
                    self.is_loading = False
                    self._publish()

    def _fail(self, message: str, generation: int) -> None:
        if not self._is_current(generation):
            return
        logger.warning(f"Request to {self.endpoint} failed: {message}")
        self.error = message or "An error occurred"
