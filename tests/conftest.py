"""Pytest configuration and shared fixtures for schema-bridge tests.

This module provides common fixtures used across all test modules,
including test app creation, async client setup and sample schemas.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from schema_bridge import create_app
from schema_bridge.config import SchemaBridgeSettings


@pytest.fixture
def test_settings():
    """Create test settings without an MCP server.

    Returns:
        SchemaBridgeSettings: Settings instance configured for testing.
    """
    return SchemaBridgeSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        default_model="llama3.2:latest",
        mcp_server_url=None,
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def weather_schema():
    """Input schema of a typical MCP weather tool."""
    return {
        "type": "object",
        "properties": {
            "city": {"type": "string", "description": "City name"},
            "unit": {
                "description": "Temperature unit",
                "enum": ["celsius", "fahrenheit", None],
            },
            "days": {"type": "integer", "const": 3},
        },
        "required": ["city", "unit", "days"],
    }
