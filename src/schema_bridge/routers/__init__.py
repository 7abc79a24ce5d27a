"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, schemas, tools, chat).
"""

from schema_bridge.routers import chat, health, schemas, tools

__all__ = [
    "chat",
    "health",
    "schemas",
    "tools",
]
