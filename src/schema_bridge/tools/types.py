"""Type definitions for MCP tool integration.

This module contains dataclasses describing remote tools and the results of
invoking them, independent of the MCP client library in use.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


def get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Read an attribute or a dict key, whichever the object provides."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


@dataclass
class ToolDescriptor:
    """A tool advertised by an MCP server.

    Attributes:
        name: Tool name used to invoke it
        description: Human readable description shown to the model
        input_schema: JSON Schema of the tool arguments
    """

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_mcp_tool(tool: Any) -> "ToolDescriptor":
        """Create a ToolDescriptor from an MCP tool definition.

        Args:
            tool: An ``mcp.types.Tool`` or an equivalent dict

        Returns:
            ToolDescriptor: The parsed descriptor
        """
        input_schema = get_value(tool, "inputSchema")
        if input_schema is None:
            input_schema = get_value(tool, "input_schema", {})

        return ToolDescriptor(
            name=get_value(tool, "name", ""),
            description=get_value(tool, "description") or "",
            input_schema=dict(input_schema or {}),
        )


@dataclass
class ToolInvocationResult:
    """Raw result of an MCP tool call.

    Attributes:
        content: Content chunks returned by the server (text, image, audio,
                 resource), as MCP content objects or dicts
        is_error: Whether the server flagged the call as failed
    """

    content: list[Any] = field(default_factory=list)
    is_error: bool = False


class ToolInvoker(Protocol):
    """Anything that can execute a tool by name."""

    async def call_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> ToolInvocationResult: ...
