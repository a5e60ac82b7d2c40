"""Incremental decoder turning an SSE byte stream into stream frames."""

import codecs
import json
import logging

from career_copilot.models.schemas import ContentFrame, StreamFrame, parse_frame

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "


class SSEDecoder:
    """Decode ``data: <json>`` lines from arbitrarily split byte chunks.

    Bytes are decoded incrementally so a multi-byte character split across
    two chunks is held back until complete, and the last unterminated line
    is buffered until its newline arrives. Output therefore does not depend
    on where chunk boundaries fall.

    After a ``done`` or ``error`` frame the decoder is finished and ignores
    any further input.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.finished = False

    def feed(self, chunk: bytes) -> list[StreamFrame]:
        """Consume a chunk and return the frames it completed, in order."""
        if self.finished:
            return []
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        return self._process(lines)

    def close(self) -> list[StreamFrame]:
        """Flush pending bytes at end of input and process a final unterminated line."""
        if self.finished:
            return []
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return self._process(tail.split("\n"))

    def _process(self, lines: list[str]) -> list[StreamFrame]:
        frames: list[StreamFrame] = []
        for line in lines:
            frame = self._parse_line(line.removesuffix("\r"))
            if frame is None:
                continue
            frames.append(frame)
            if not isinstance(frame, ContentFrame):
                self.finished = True
                break
        return frames

    @staticmethod
    def _parse_line(line: str) -> StreamFrame | None:
        if not line.startswith(DATA_PREFIX):
            return None
        try:
            data = json.loads(line[len(DATA_PREFIX) :])
        except json.JSONDecodeError:
            logger.debug(f"Skipping malformed frame: {line[:80]!r}")
            return None
        return parse_frame(data)


def decode_stream(chunks: list[bytes]) -> list[StreamFrame]:
    """Decode a complete sequence of chunks into frames."""
    decoder = SSEDecoder()
    frames: list[StreamFrame] = []
    for chunk in chunks:
        frames.extend(decoder.feed(chunk))
    frames.extend(decoder.close())
    return frames
