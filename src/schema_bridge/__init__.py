"""schema-bridge: Bridges MCP tools to constrained generation with local LLMs.

This package converts the JSON Schema of MCP tools into generation schemas,
and provides a REST API and SSE streaming interface for converting schemas,
invoking tools and chatting with tool-enabled models via Ollama.
"""

__version__ = "0.1.0"

from schema_bridge.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
