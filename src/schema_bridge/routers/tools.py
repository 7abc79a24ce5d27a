"""Tools router for listing and invoking MCP tools."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from schema_bridge.dependencies import get_tool_bridge, get_tools
from schema_bridge.models.tools import (
    CallToolRequest,
    CallToolResponse,
    ToolDetail,
    ToolListResponse,
)
from schema_bridge.schema import to_dict, to_json_schema
from schema_bridge.tools import GenerationTool, MCPToolBridge

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


def tool_to_detail(tool: GenerationTool) -> ToolDetail:
    """Convert a GenerationTool to its API representation."""
    return ToolDetail(
        name=tool.name,
        description=tool.description,
        parameters=to_json_schema(tool.parameters),
        generation_schema=to_dict(tool.parameters),
    )


def _find_tool(tools: list[GenerationTool], tool_name: str) -> GenerationTool:
    for tool in tools:
        if tool.name == tool_name:
            return tool
    raise HTTPException(
        status_code=404,
        detail={
            "error": {
                "code": "tool_not_found",
                "message": f"Tool {tool_name} not found",
                "details": {"tool_name": tool_name},
            }
        },
    )


@router.get("", response_model=ToolListResponse)
async def list_tools(
    tools: list[GenerationTool] = Depends(get_tools),
) -> ToolListResponse:
    """List the tools discovered on the MCP server.

    Returns an empty list when no MCP server is connected.
    """
    return ToolListResponse(tools=[tool_to_detail(tool) for tool in tools])


@router.get("/{tool_name}", response_model=ToolDetail)
async def get_tool(
    tool_name: str,
    tools: list[GenerationTool] = Depends(get_tools),
) -> ToolDetail:
    """Get a single tool and its converted parameter schema.

    Raises:
        HTTPException: 404 if the tool does not exist
    """
    return tool_to_detail(_find_tool(tools, tool_name))


@router.post("/{tool_name}/call", response_model=CallToolResponse)
async def call_tool(
    tool_name: str,
    request_body: CallToolRequest,
    bridge: MCPToolBridge = Depends(get_tool_bridge),
    tools: list[GenerationTool] = Depends(get_tools),
) -> CallToolResponse:
    """Invoke a tool and return its formatted output.

    Tool failures are reported in the result text, like they are to the
    model during chat.

    Raises:
        HTTPException: 503 if no MCP server is connected, 404 if the tool
            does not exist
    """
    tool = _find_tool(tools, tool_name)
    logger.info(f"Invoking tool {tool_name} via {bridge.server_url}")
    result = await tool.call(request_body.arguments)
    return CallToolResponse(tool_name=tool_name, result=result)
