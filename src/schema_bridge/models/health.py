"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of schema-bridge.
        ollama_connected: Optional boolean indicating Ollama connectivity.
        ollama_host: Optional string with the Ollama host URL.
        mcp_connected: Whether an MCP server is connected.
        mcp_server_url: The configured MCP server URL, if any.
        tool_count: Number of tools discovered at startup.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of schema-bridge")
    ollama_connected: bool | None = Field(
        default=None,
        description="Whether Ollama is connected",
    )
    ollama_host: str | None = Field(
        default=None,
        description="Ollama host URL",
    )
    mcp_connected: bool = Field(
        default=False,
        description="Whether an MCP server is connected",
    )
    mcp_server_url: str | None = Field(
        default=None,
        description="MCP server URL",
    )
    tool_count: int = Field(default=0, description="Number of discovered tools")
