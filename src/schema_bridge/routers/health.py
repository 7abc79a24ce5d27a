"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from schema_bridge import __version__
from schema_bridge.models.health import HealthResponse
from schema_bridge.ollama import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of schema-bridge, the
    Ollama connectivity and the state of the MCP tool bridge.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    ollama_connected = None
    ollama_host = None

    # Check if Ollama client is available and test connectivity
    if hasattr(request.app.state, "ollama_client"):
        ollama_client: OllamaClient = request.app.state.ollama_client
        ollama_host = ollama_client.host

        try:
            ollama_connected = await ollama_client.check_connection()
            logger.debug(f"Ollama connectivity check: {ollama_connected}")
        except Exception as e:
            logger.warning(f"Ollama connectivity check failed: {e}")
            ollama_connected = False

    bridge = getattr(request.app.state, "tool_bridge", None)

    return HealthResponse(
        status="ok",
        version=__version__,
        ollama_connected=ollama_connected,
        ollama_host=ollama_host,
        mcp_connected=bridge is not None and bridge.is_connected,
        mcp_server_url=request.app.state.settings.mcp_server_url,
        tool_count=len(getattr(request.app.state, "tools", [])),
    )
