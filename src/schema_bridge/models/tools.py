"""Pydantic models for tool listing and invocation endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ToolDetail(BaseModel):
    """A discovered MCP tool with its converted parameter schema."""

    name: str = Field(description="Tool name")
    description: str = Field(description="Tool description")
    parameters: dict[str, Any] = Field(
        description="Parameter schema in the JSON Schema dialect sent to the model"
    )
    generation_schema: dict[str, Any] = Field(
        description="Parameter schema as a tagged generation schema tree"
    )


class ToolListResponse(BaseModel):
    """Response body for GET /api/v1/tools."""

    tools: list[ToolDetail] = Field(default_factory=list)


class CallToolRequest(BaseModel):
    """Request body for POST /api/v1/tools/{tool_name}/call."""

    arguments: dict[str, Any] | str = Field(
        default_factory=dict,
        description="Tool arguments as an object or a JSON object string",
    )


class CallToolResponse(BaseModel):
    """Response body for POST /api/v1/tools/{tool_name}/call."""

    tool_name: str = Field(description="Name of the invoked tool")
    result: str = Field(description="Formatted tool output")
