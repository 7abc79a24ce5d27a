"""Ollama client wrapper and integration layer.

This package provides an async client wrapper for communicating with the
Ollama API.
"""

from schema_bridge.ollama.client import OllamaClient

__all__ = ["OllamaClient"]
