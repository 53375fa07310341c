from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List, Optional

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .auth import stdio_credential
from .config import Settings, get_settings
from .dispatcher import ToolDispatcher
from .tools import ToolRegistry
from .tools import (
    chat_tools,
    deployment_tools,
    hook_tools,
    integration_tools,
    project_tools,
    user_tools,
)
from .v0_client import V0Client

SERVER_NAME = "v0-platform-mcp"
SERVER_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def create_registry() -> ToolRegistry:
    """Build the registry with every tool group. Done once per process."""
    registry = ToolRegistry()

    chat_tools.register_tools(registry)
    project_tools.register_tools(registry)
    deployment_tools.register_tools(registry)
    integration_tools.register_tools(registry)
    hook_tools.register_tools(registry)
    user_tools.register_tools(registry)

    return registry


def create_dispatcher(
    settings: Optional[Settings] = None,
    client: Optional[Any] = None,
) -> ToolDispatcher:
    settings = settings or get_settings()
    if client is None:
        client = V0Client.from_settings(settings)
    return ToolDispatcher(create_registry(), client)


def create_server(dispatcher: ToolDispatcher, credential: str) -> Server:
    """
    Create the MCP server for one connection.

    `credential` is the key this connection's calls are made with.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return dispatcher.registry.list_tools()

    # Arguments are decoded by the dispatcher so failures come back as tool results.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        # Returned whole so isError reaches stdio clients too.
        return await dispatcher.dispatch(name, arguments, credential)

    return server


async def run_stdio_server(settings: Settings) -> None:
    credential = stdio_credential(settings)
    async with V0Client.from_settings(settings) as client:
        dispatcher = create_dispatcher(settings, client)
        server = create_server(dispatcher, credential)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


def configure_logging(settings: Settings) -> None:
    # stdout belongs to the stdio transport
    logging.basicConfig(
        level=settings.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """
    Entrypoint for running the MCP server.

    Supports two transport modes:
    - stdio: For direct process-to-process communication (default)
    - http: For HTTP/SSE transport behind reverse proxy
    """
    settings = get_settings()
    configure_logging(settings)

    if settings.transport == "http":
        from .http_server import run_http_server

        anyio.run(run_http_server, settings)
    else:
        anyio.run(run_stdio_server, settings)


if __name__ == "__main__":
    main()
