"""Structured result extraction from accumulated model output.

The JSON tools ask the model for a single object, but models sometimes wrap
it in prose or code fences. The object is recovered with a greedy match from
the first ``{`` to the last ``}``. This is a heuristic: stray braces outside
the object or a truncated stream make it fail, and failure always yields
None rather than an exception.
"""

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from career_copilot.models.tools import OutputFormat, ToolConfig

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

ResultT = TypeVar("ResultT", bound=BaseModel)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Return the brace-delimited JSON object embedded in ``text``, if any."""
    match = _JSON_OBJECT.search(text)
    if match is None:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.debug(f"Embedded JSON did not parse: {e}")
        return None
    return data if isinstance(data, dict) else None


def parse_result(text: str, model: type[ResultT]) -> ResultT | None:
    """Extract and validate a structured result.

    Args:
        text: Accumulated model output.
        model: Result schema to validate against.

    Returns:
        The validated result, or None if extraction or validation fails.
    """
    data = extract_json_object(text)
    if data is None:
        return None
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Result did not match {model.__name__}: {e.error_count()} errors")
        return None


def parse_tool_result(tool: ToolConfig, text: str) -> BaseModel | None:
    """Parse the final output of a JSON tool; free-text tools return None."""
    if tool.output is not OutputFormat.JSON or tool.result_model is None:
        return None
    return parse_result(text, tool.result_model)
