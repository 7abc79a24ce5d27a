"""MCP server connection and tool discovery.

This module provides the MCPToolBridge, which connects to an MCP server over
HTTP, lists the tools it offers and wraps each of them as a GenerationTool.
The bridge is created once at startup and reused for every tool call.
"""

import logging
from collections.abc import Callable
from typing import Any

from fastmcp import Client

from schema_bridge.tools.tool import GenerationTool
from schema_bridge.tools.types import ToolDescriptor, ToolInvocationResult

logger = logging.getLogger(__name__)

ToolFilter = Callable[[ToolDescriptor], bool]


class MCPToolBridge:
    """Connects to an MCP server and exposes its tools.

    Attributes:
        server_url: The MCP endpoint (e.g. "http://127.0.0.1:8080/mcp")
        _client: The connected fastmcp Client, or None when disconnected
    """

    def __init__(self, server_url: str) -> None:
        """Initialize the bridge.

        Args:
            server_url: The MCP endpoint URL
        """
        self.server_url = server_url
        self._client: Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> Client:
        """Open the connection to the MCP server if it is not open yet.

        Returns:
            Client: The connected fastmcp client
        """
        if self._client is not None:
            return self._client
        client = Client(self.server_url)
        await client.__aenter__()
        self._client = client
        logger.info(f"Connected to MCP server at {self.server_url}")
        return client

    async def list_tools(self) -> list[ToolDescriptor]:
        """List the tools the server advertises.

        Returns:
            list[ToolDescriptor]: Descriptors in server order

        Raises:
            Exception: If the connection or the MCP request fails
        """
        client = await self.connect()
        tools = await client.list_tools()
        logger.debug(f"Discovered {len(tools)} tools from MCP server")
        return [ToolDescriptor.from_mcp_tool(tool) for tool in tools]

    async def connect_and_discover_tools(
        self, tool_filter: ToolFilter | None = None
    ) -> list[GenerationTool]:
        """Connect to the server and wrap its tools.

        Args:
            tool_filter: Optional predicate deciding which tools to keep

        Returns:
            list[GenerationTool]: One tool per kept descriptor

        Raises:
            Exception: If the connection or the MCP request fails
        """
        descriptors = await self.list_tools()
        tools = []
        for descriptor in descriptors:
            if tool_filter is not None and not tool_filter(descriptor):
                logger.debug(f"Skipped tool: {descriptor.name}")
                continue
            tools.append(GenerationTool(descriptor, invoker=self))

        logger.info(f"Registered {len(tools)} of {len(descriptors)} MCP tools")
        return tools

    async def call_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> ToolInvocationResult:
        """Invoke a tool on the server.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            ToolInvocationResult: Content chunks and error flag

        Raises:
            Exception: If the connection or the MCP request fails
        """
        client = await self.connect()
        result = await client.call_tool_mcp(name, arguments)
        return ToolInvocationResult(
            content=list(result.content),
            is_error=bool(getattr(result, "isError", False)),
        )

    async def disconnect(self) -> None:
        """Close the connection to the MCP server."""
        if self._client is None:
            return
        client = self._client
        self._client = None
        await client.__aexit__(None, None, None)
        logger.info("Disconnected from MCP server")


def limit_tools(max_tools: int | None) -> ToolFilter | None:
    """Build a filter that keeps only the first ``max_tools`` tools.

    Used to cap the tool count for models with a small context window.
    Returns None when there is no cap.
    """
    if max_tools is None:
        return None

    remaining = max_tools

    def keep(_descriptor: ToolDescriptor) -> bool:
        nonlocal remaining
        remaining -= 1
        return remaining >= 0

    return keep
