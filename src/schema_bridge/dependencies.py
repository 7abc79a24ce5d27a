"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and services.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from schema_bridge.config import SchemaBridgeSettings
from schema_bridge.ollama import OllamaClient
from schema_bridge.services import ToolChatService
from schema_bridge.tools import GenerationTool, MCPToolBridge


@lru_cache
def get_settings() -> SchemaBridgeSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the SCHEMA_BRIDGE_ prefix.

    Returns:
        SchemaBridgeSettings: The application configuration settings.
    """
    return SchemaBridgeSettings()


def get_ollama_client(request: Request) -> OllamaClient:
    """Get the Ollama client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        OllamaClient: The Ollama client instance.

    Raises:
        HTTPException: If the Ollama client is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "ollama_client"):
        raise HTTPException(
            status_code=503,
            detail={
                "error": {
                    "code": "ollama_unavailable",
                    "message": "Ollama client not initialized",
                    "details": {},
                }
            },
        )
    return request.app.state.ollama_client


def get_tool_bridge(request: Request) -> MCPToolBridge:
    """Get the connected MCP tool bridge from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        MCPToolBridge: The bridge created during startup.

    Raises:
        HTTPException: If no MCP server is connected (503 Service Unavailable).
    """
    bridge = getattr(request.app.state, "tool_bridge", None)
    if bridge is None or not bridge.is_connected:
        raise HTTPException(
            status_code=503,
            detail={
                "error": {
                    "code": "tool_bridge_unavailable",
                    "message": "No MCP server is connected",
                    "details": {},
                }
            },
        )
    return bridge


def get_tools(request: Request) -> list[GenerationTool]:
    """Get the tools discovered at startup (empty without an MCP server)."""
    return list(getattr(request.app.state, "tools", []))


def get_chat_service(request: Request) -> ToolChatService:
    """Get a ToolChatService instance with app configuration.

    Creates a new service for each request, using the Ollama client and the
    discovered tools from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        ToolChatService: A new ToolChatService instance.

    Raises:
        HTTPException: If the Ollama client is not initialized (503 Service Unavailable).
    """
    settings = request.app.state.settings
    return ToolChatService(
        ollama_client=get_ollama_client(request),
        tools=get_tools(request),
        max_tool_rounds=settings.max_tool_rounds,
    )
