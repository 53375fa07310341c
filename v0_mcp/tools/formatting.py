"""
Result formatting: every call outcome becomes exactly one MCP result.

`format_outcome` never raises. Failures are reported as a text block so the
calling agent always gets something it can read and act on.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from mcp import types

from ..models import Outcome, Success, ToolNotFound, UpstreamFailure, ValidationFailure
from . import ToolDescriptor

logger = logging.getLogger(__name__)

UNKNOWN_TOOL_PREFIX = "Error calling tool"


def text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def to_json(value: Any) -> str:
    """Stable, indented JSON for embedding upstream payloads in text."""
    try:
        return json.dumps(value, indent=2, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(value)


def items_of(response: Any) -> List[Any]:
    """Pull the item list out of a platform listing response."""
    if isinstance(response, list):
        return response
    if isinstance(response, dict) and isinstance(response.get("data"), list):
        return response["data"]
    return []


def field_of(item: Any, key: str, fallback: str = "unknown") -> str:
    if isinstance(item, dict) and item.get(key) is not None:
        return str(item[key])
    return fallback


def bullet_list(lines: Iterable[str], empty: str) -> str:
    rendered = "\n".join(f"- {line}" for line in lines)
    return rendered or empty


def listing(
    noun: str,
    items: List[Any],
    line: Any,
    total: Optional[int] = None,
) -> str:
    """`Found N <noun>:` followed by one bullet per item."""
    count = len(items) if total is None else total
    body = bullet_list((line(item) for item in items), f"No {noun} found")
    return f"Found {count} {noun}:\n\n{body}"


def _render_success(descriptor: ToolDescriptor, value: Any, arguments: Dict[str, Any]) -> str:
    try:
        return descriptor.render(value, arguments)
    except Exception:
        # An unexpected response shape must not cost the caller the data.
        logger.exception("Renderer for %s failed; returning raw response", descriptor.name)
        return f"{descriptor.name} succeeded.\n\nResponse: {to_json(value)}"


def format_outcome(
    descriptor: Optional[ToolDescriptor],
    outcome: Outcome,
    arguments: Optional[Dict[str, Any]] = None,
) -> types.CallToolResult:
    arguments = arguments or {}
    prefix = descriptor.error_prefix if descriptor else UNKNOWN_TOOL_PREFIX

    if isinstance(outcome, Success) and descriptor is not None:
        return text_result(_render_success(descriptor, outcome.value, arguments))
    if isinstance(outcome, ValidationFailure):
        return text_result(f"{prefix}: Invalid arguments: {outcome.describe()}", is_error=True)
    if isinstance(outcome, UpstreamFailure):
        if outcome.status is None:
            detail = outcome.message
        else:
            detail = f"HTTP {outcome.status}: {outcome.message}"
        return text_result(f"{prefix}: {detail}", is_error=True)
    if isinstance(outcome, ToolNotFound):
        return text_result(f"{UNKNOWN_TOOL_PREFIX}: Unknown tool '{outcome.name}'", is_error=True)
    return text_result(f"{prefix}: Unexpected outcome {outcome!r}", is_error=True)
