"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from schema_bridge.models.chat import ChatMessage, ChatRequest, ChatResponse
from schema_bridge.models.health import HealthResponse
from schema_bridge.models.schemas import ConvertSchemaRequest, ConvertSchemaResponse
from schema_bridge.models.tools import (
    CallToolRequest,
    CallToolResponse,
    ToolDetail,
    ToolListResponse,
)

__all__ = [
    "CallToolRequest",
    "CallToolResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ConvertSchemaRequest",
    "ConvertSchemaResponse",
    "HealthResponse",
    "ToolDetail",
    "ToolListResponse",
]
