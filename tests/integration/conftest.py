"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that replace the
Ollama client and the MCP server with mocks, so API endpoints can be
exercised without external services.
"""

from unittest.mock import AsyncMock, patch

import pytest

from schema_bridge.tools import GenerationTool, ToolDescriptor, ToolInvocationResult


@pytest.fixture(autouse=True)
def mock_ollama_client():
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    """
    with patch("schema_bridge.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = "http://localhost:11434"
        mock_instance.check_connection.return_value = True
        mock_instance.chat.return_value = {
            "model": "llama3.2:latest",
            "message": {"role": "assistant", "content": "Hello!"},
            "eval_count": 5,
            "prompt_eval_count": 20,
        }

        # Return the mock instance when OllamaClient is instantiated
        mock_client_class.return_value = mock_instance

        yield mock_instance


@pytest.fixture
def mock_invoker():
    """An MCP invoker whose tool calls return a fixed text chunk."""
    invoker = AsyncMock()
    invoker.call_tool.return_value = ToolInvocationResult(
        content=[{"type": "text", "text": "Sunny, 22 degrees"}]
    )
    return invoker


@pytest.fixture
def weather_tool(weather_schema, mock_invoker):
    """A GenerationTool wrapping the weather schema."""
    descriptor = ToolDescriptor(
        name="get_weather",
        description="Get the current weather\nUses a public API.",
        input_schema=weather_schema,
    )
    return GenerationTool(descriptor, invoker=mock_invoker)


@pytest.fixture
def connected_tools(test_app, async_client, weather_tool):
    """Register the weather tool and a connected bridge on the running app.

    Depends on async_client so that the lifespan has already run and does
    not overwrite the registered tools.
    """
    bridge = AsyncMock()
    bridge.is_connected = True
    bridge.server_url = "http://mcp.test/mcp"
    test_app.state.tool_bridge = bridge
    test_app.state.tools = [weather_tool]
    return [weather_tool]
