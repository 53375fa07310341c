"""Exception hierarchy for v0_mcp.

    V0McpError
    ├── DuplicateToolNameError
    ├── ToolNotFoundError
    ├── UnauthorizedError
    └── UpstreamError(status, message)

Only ``UnauthorizedError`` is meant to reach a transport. Everything raised
after the guard is turned into a result envelope by the dispatcher.
"""

from __future__ import annotations

from typing import Optional


class V0McpError(Exception):
    """Base exception for all v0_mcp errors."""


class DuplicateToolNameError(V0McpError, ValueError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' already registered")


class ToolNotFoundError(V0McpError, KeyError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool '{name}'")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return f"Unknown tool '{self.name}'"


class UnauthorizedError(V0McpError):
    """The inbound request carries no usable credential."""


class UpstreamError(V0McpError):
    """The platform API answered with a non-success status or was unreachable."""

    def __init__(self, status: Optional[int], message: str) -> None:
        self.status = status
        self.message = message
        if status is None:
            super().__init__(message)
        else:
            super().__init__(f"HTTP {status}: {message}")
