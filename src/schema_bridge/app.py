"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schema_bridge import __version__
from schema_bridge.config import SchemaBridgeSettings
from schema_bridge.ollama import OllamaClient
from schema_bridge.routers import chat, health, schemas, tools
from schema_bridge.tools import MCPToolBridge, limit_tools

logger = logging.getLogger(__name__)


async def _connect_tools(app: FastAPI, settings: SchemaBridgeSettings) -> None:
    """Connect to the configured MCP server and discover its tools."""
    app.state.tools = []
    if not settings.mcp_server_url:
        logger.info("No MCP server configured, running without tools")
        return

    bridge = MCPToolBridge(settings.mcp_server_url)
    app.state.tool_bridge = bridge
    try:
        app.state.tools = await bridge.connect_and_discover_tools(
            tool_filter=limit_tools(settings.max_tools)
        )
        for tool in app.state.tools:
            summary = tool.description.splitlines()[0] if tool.description else ""
            logger.info(f"{tool.name} : {summary}")
    except Exception as e:
        logger.warning(
            f"Failed to connect to MCP server at {settings.mcp_server_url}: {e}"
        )
        await bridge.disconnect()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Expensive objects (the Ollama client and the MCP tool bridge) are created
    once at startup and stored in app.state for reuse across all requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: SchemaBridgeSettings = app.state.settings
    app.state.ollama_client = OllamaClient(host=settings.ollama_host)
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    # Check initial connectivity
    connected = await app.state.ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    await _connect_tools(app, settings)

    yield

    # Shutdown: Clean up resources
    bridge = getattr(app.state, "tool_bridge", None)
    if bridge is not None:
        await bridge.disconnect()
    if hasattr(app.state, "ollama_client"):
        await app.state.ollama_client.close()
        logger.info("Ollama client closed")


def create_app(settings: SchemaBridgeSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional SchemaBridgeSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from schema_bridge.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="schema-bridge",
        description="Bridges MCP tools to constrained generation with local LLMs",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings
    app.state.tools = []

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(schemas.router)
    app.include_router(tools.router)
    app.include_router(chat.router)

    return app
