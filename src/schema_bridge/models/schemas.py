"""Pydantic models for the schema conversion endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConvertSchemaRequest(BaseModel):
    """Request body for POST /api/v1/schemas/convert."""

    json_schema: dict[str, Any] = Field(
        alias="schema",
        description="JSON Schema document to convert, e.g. an MCP tool's inputSchema",
    )
    name: str | None = Field(
        default=None,
        description="Name for the root schema when the document has no title",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "city": {"type": "string"},
                            "unit": {"enum": ["celsius", "fahrenheit", None]},
                        },
                        "required": ["city"],
                    },
                    "name": "get_weather",
                }
            ]
        },
    )


class ConvertSchemaResponse(BaseModel):
    """Response body for POST /api/v1/schemas/convert."""

    generation_schema: dict[str, Any] = Field(
        alias="schema",
        description="The generation schema as a tagged tree",
    )
    json_schema: dict[str, Any] = Field(
        description="The generation schema rendered back to JSON Schema",
    )

    model_config = ConfigDict(populate_by_name=True)
