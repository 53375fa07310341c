from __future__ import annotations

from typing import Any

API_KEY = "key123"


def text_of(result: Any) -> str:
    """Concatenated text of a CallToolResult."""
    return "".join(block.text for block in result.content)
