"""
Tool registration utilities.

Each `*_tools` module in this package exposes a `register_tools(registry)`
function that adds its tool descriptors to the central registry used by the
MCP server.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping

from mcp import types

from ..errors import DuplicateToolNameError, ToolNotFoundError
from .schema import Param, ParameterSchema

# (client, decoded arguments, credential) -> upstream response
Operation = Callable[[Any, Dict[str, Any], str], Awaitable[Any]]
# (upstream response, decoded arguments) -> text for the caller
Renderer = Callable[[Any, Dict[str, Any]], str]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    parameters: ParameterSchema
    operation: Operation
    render: Renderer
    error_prefix: str

    @classmethod
    def build(
        cls,
        name: str,
        description: str,
        params: Mapping[str, Param],
        operation: Operation,
        render: Renderer,
        error_prefix: str,
    ) -> "ToolDescriptor":
        return cls(
            name=name,
            description=description,
            parameters=ParameterSchema(params=params, name=name),
            operation=operation,
            render=render,
            error_prefix=error_prefix,
        )

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.parameters.to_json_schema(),
        )


class ToolRegistry:
    """
    In-memory registry mapping MCP tool names to their descriptors.

    Filled once at startup and only read afterwards.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        if descriptor.name in self._tools:
            raise DuplicateToolNameError(descriptor.name)
        self._tools[descriptor.name] = descriptor

    def register_all(self, descriptors: List[ToolDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def lookup(self, name: str) -> ToolDescriptor:
        if name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def list_tools(self) -> List[types.Tool]:
        return [d.to_mcp_tool() for d in self._tools.values()]

    def names(self) -> List[str]:
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())
