from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from mcp import types

from .errors import ToolNotFoundError, UpstreamError
from .models import (
    CallContext,
    Outcome,
    Success,
    ToolNotFound,
    UpstreamFailure,
    ValidationFailure,
)
from .tools import ToolRegistry
from .tools.formatting import format_outcome

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """
    Runs one tool call end to end: lookup, decode, execute, format.

    Holds no per-call state, so a single instance serves every concurrent
    call. Whatever goes wrong after lookup starts is returned as an error
    result; `dispatch` itself does not raise.
    """

    def __init__(self, registry: ToolRegistry, client: Any) -> None:
        self._registry = registry
        self._client = client

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def client(self) -> Any:
        return self._client

    async def dispatch(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
        credential: str,
    ) -> types.CallToolResult:
        context = CallContext(
            tool_name=name,
            credential=credential,
            arguments=arguments if isinstance(arguments, dict) else {},
        )
        return await self.dispatch_context(context, raw_arguments=arguments)

    async def dispatch_context(
        self,
        context: CallContext,
        raw_arguments: Any = None,
    ) -> types.CallToolResult:
        name = context.tool_name
        raw = context.arguments if raw_arguments is None else raw_arguments

        try:
            descriptor = self._registry.lookup(name)
        except ToolNotFoundError:
            logger.warning("Call to unknown tool %r", name)
            return format_outcome(None, ToolNotFound(name))

        decoded = descriptor.parameters.decode(raw)
        if isinstance(decoded, ValidationFailure):
            logger.info("Rejected %s arguments: %s", name, decoded.describe())
            return format_outcome(descriptor, decoded)

        logger.debug("Executing %s (request_id=%s)", name, context.request_id)
        outcome: Outcome
        try:
            result = await descriptor.operation(self._client, decoded, context.credential)
        except UpstreamError as e:
            logger.warning("%s failed upstream: %s", name, e)
            outcome = UpstreamFailure(message=e.message, status=e.status)
        except Exception as e:
            logger.exception("Error executing tool %s", name)
            outcome = UpstreamFailure(message=str(e) or type(e).__name__)
        else:
            outcome = Success(result)

        return format_outcome(descriptor, outcome, decoded)
