"""Client for the streaming tool endpoints.

Responsibilities:
    - Decoding SSE byte streams into ordered frames
    - Dispatching one request at a time with live loading/result/error state
    - Recovering structured results from accumulated model output
"""

from career_copilot.client.decoder import SSEDecoder, decode_stream
from career_copilot.client.dispatcher import StreamingRequest
from career_copilot.client.results import extract_json_object, parse_result, parse_tool_result

__all__ = [
    "SSEDecoder",
    "StreamingRequest",
    "decode_stream",
    "extract_json_object",
    "parse_result",
    "parse_tool_result",
]
