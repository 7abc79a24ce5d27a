"""Configuration module for schema-bridge using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaBridgeSettings(BaseSettings):
    """Main configuration settings for schema-bridge.

    All settings can be overridden via environment variables with the
    SCHEMA_BRIDGE_ prefix. For example, SCHEMA_BRIDGE_MCP_SERVER_URL will
    override the mcp_server_url setting.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Ollama
    ollama_host: str = "http://localhost:11434"
    default_model: str = "llama3.2:latest"

    # MCP server providing the tools (no tools when unset)
    mcp_server_url: str | None = None

    # Tools
    max_tools: int | None = Field(default=None, ge=0)
    max_tool_rounds: int = Field(default=8, ge=1)

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="SCHEMA_BRIDGE_")
