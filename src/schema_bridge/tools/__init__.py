"""MCP tool discovery, schema conversion and execution layer.

This package connects to an MCP server, converts each tool's input schema to
a generation schema and executes tool calls made by the model.
"""

from schema_bridge.tools.bridge import MCPToolBridge, limit_tools
from schema_bridge.tools.tool import GenerationTool, format_content
from schema_bridge.tools.types import (
    ToolDescriptor,
    ToolInvocationResult,
    ToolInvoker,
)

__all__ = [
    "GenerationTool",
    "MCPToolBridge",
    "ToolDescriptor",
    "ToolInvocationResult",
    "ToolInvoker",
    "format_content",
    "limit_tools",
]
