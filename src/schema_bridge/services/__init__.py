"""Business logic services for schema-bridge.

This package contains service classes that implement the tool-calling chat
loop on top of the Ollama client and the MCP tool bridge.
"""

from schema_bridge.services.chat import (
    ChatEvent,
    ChatOutcome,
    ToolChatService,
    ToolLoopLimitError,
)

__all__ = [
    "ChatEvent",
    "ChatOutcome",
    "ToolChatService",
    "ToolLoopLimitError",
]
