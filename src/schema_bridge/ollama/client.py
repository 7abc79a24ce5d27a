"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient for
running tool-enabled chat requests. The client is designed to be created
once at startup and reused.
"""

import logging
from typing import Any

import ollama

logger = logging.getLogger(__name__)


def _to_dict(response: Any) -> dict[str, Any]:
    """Normalise an Ollama response object to a plain dict."""
    if hasattr(response, "model_dump"):
        return response.model_dump()
    if isinstance(response, dict):
        return response
    return vars(response)


class OllamaClient:
    """Async client for interacting with Ollama API.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            # Try to list models as a connectivity check
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        think: bool = False,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run a single non-streaming chat request.

        Tool calling needs the complete assistant message, so this method
        does not stream.

        Args:
            model: The model name to use for the chat
            messages: List of message dicts in Ollama format
            tools: Tool definitions in Ollama's function format
            think: Whether to request thinking/reasoning from the model
            options: Optional model parameters (temperature, etc.)

        Returns:
            dict: The response. ``message`` holds role, content and, when the
                  model decided to call tools, ``tool_calls``.

        Raises:
            Exception: If the Ollama API request fails
        """
        try:
            logger.debug(
                f"Sending chat request to {model} with {len(messages)} messages "
                f"and {len(tools or [])} tools"
            )
            response = await self._client.chat(
                model=model,
                messages=messages,
                tools=tools or None,
                stream=False,
                think=think or None,
                options=options,
            )
            return _to_dict(response)
        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            raise

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient uses httpx internally which handles cleanup.
        """
        logger.debug("OllamaClient closed")
