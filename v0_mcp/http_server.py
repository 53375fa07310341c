from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from .auth import extract_credential, http_fallback
from .config import Settings, get_settings
from .dispatcher import ToolDispatcher
from .errors import UnauthorizedError
from .main import SERVER_NAME, SERVER_VERSION, create_dispatcher
from .models import CallContext

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2025-03-26"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def _rpc_error(message_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": message_id,
        "error": {"code": code, "message": message},
    }


def _rpc_result(message_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "result": result}


def create_http_app(
    settings: Optional[Settings] = None,
    dispatcher: Optional[ToolDispatcher] = None,
) -> FastAPI:
    """
    Create FastAPI app that serves the MCP tools over HTTP.

    MCP over HTTP:
    - Client sends POST requests with one JSON-RPC message in the body
    - Server answers with an SSE stream holding the JSON-RPC response
    - Each SSE event format: "data: <json-rpc-response>\\n\\n"

    Every `/mcp` request must carry the caller's v0 API key as a bearer
    token. Requests without one are rejected with 401 before any tool runs.
    """
    settings = settings or get_settings()
    owns_dispatcher = dispatcher is None
    dispatcher = dispatcher or create_dispatcher(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_dispatcher:
            await dispatcher.client.aclose()

    app = FastAPI(
        title="v0 Platform MCP",
        version=SERVER_VERSION,
        description="MCP server exposing the v0 Platform API as tools",
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher

    @app.get("/health")
    async def health() -> Dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": SERVER_NAME}

    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with service info."""
        return {
            "service": SERVER_NAME,
            "version": SERVER_VERSION,
            "protocol": "mcp",
            "transport": "http/sse",
            "endpoints": {
                "health": "/health",
                "mcp": "/mcp",
            },
        }

    @app.post("/mcp")
    async def mcp_endpoint(request: Request) -> Response:
        try:
            credential = extract_credential(request.headers, http_fallback(settings))
        except UnauthorizedError as e:
            return JSONResponse(status_code=401, content={"detail": str(e)})

        body = await request.body()
        if not body:
            return JSONResponse(
                status_code=400,
                content=_rpc_error(None, INVALID_REQUEST, "Empty request body"),
            )
        try:
            message = json.loads(body)
        except json.JSONDecodeError as e:
            return JSONResponse(
                status_code=400,
                content=_rpc_error(None, PARSE_ERROR, f"Parse error: {e}"),
            )

        if not isinstance(message, dict) or message.get("jsonrpc") != "2.0":
            message_id = message.get("id") if isinstance(message, dict) else None
            return JSONResponse(
                status_code=400,
                content=_rpc_error(
                    message_id, INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'"
                ),
            )

        method = message.get("method")
        message_id = message.get("id")
        params = message.get("params") or {}
        if not method:
            return JSONResponse(
                status_code=400,
                content=_rpc_error(
                    message_id, INVALID_REQUEST, "Invalid Request: method is required"
                ),
            )

        # Notifications get no response body.
        if "id" not in message:
            return Response(status_code=202)

        if not isinstance(params, dict):
            return JSONResponse(
                status_code=400,
                content=_rpc_error(
                    message_id, INVALID_PARAMS, "Invalid params: params must be an object"
                ),
            )

        async def generate_sse() -> AsyncIterator[str]:
            try:
                response = await handle_mcp_request(
                    dispatcher, method, params, message_id, credential
                )
            except Exception as e:
                logger.exception("Error handling MCP request")
                response = _rpc_error(message_id, INTERNAL_ERROR, f"Internal error: {e}")
            yield f"data: {json.dumps(response)}\n\n"

        return StreamingResponse(
            generate_sse(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering
            },
        )

    return app


async def handle_mcp_request(
    dispatcher: ToolDispatcher,
    method: str,
    params: Dict[str, Any],
    message_id: Any,
    credential: str,
) -> Dict[str, Any]:
    """Answer one authenticated JSON-RPC request."""
    if method == "initialize":
        return _rpc_result(
            message_id,
            {
                "protocolVersion": params.get("protocolVersion", PROTOCOL_VERSION),
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            },
        )

    if method == "ping":
        return _rpc_result(message_id, {})

    if method == "tools/list":
        tools = [
            t.model_dump(mode="json", by_alias=True, exclude_none=True)
            for t in dispatcher.registry.list_tools()
        ]
        return _rpc_result(message_id, {"tools": tools})

    if method == "tools/call":
        tool_name = params.get("name")
        if not tool_name or not isinstance(tool_name, str):
            return _rpc_error(message_id, INVALID_PARAMS, "Invalid params: 'name' is required")

        raw_arguments = params.get("arguments")
        context = CallContext(
            tool_name=tool_name,
            credential=credential,
            arguments=raw_arguments if isinstance(raw_arguments, dict) else {},
            request_id=str(message_id),
        )
        result = await dispatcher.dispatch_context(context, raw_arguments=raw_arguments)
        return _rpc_result(
            message_id,
            result.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    return _rpc_error(message_id, METHOD_NOT_FOUND, f"Method not found: {method}")


async def run_http_server(settings: Settings) -> None:
    """Run the HTTP server using uvicorn."""
    import uvicorn

    app = create_http_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
    server = uvicorn.Server(config)
    await server.serve()
