"""Schema conversion endpoint router."""

import logging

from fastapi import APIRouter

from schema_bridge.models.schemas import ConvertSchemaRequest, ConvertSchemaResponse
from schema_bridge.schema import convert_schema, to_dict, to_json_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/schemas", tags=["schemas"])


@router.post("/convert", response_model=ConvertSchemaResponse)
def convert(request_body: ConvertSchemaRequest) -> ConvertSchemaResponse:
    """Convert a JSON Schema document into a generation schema.

    Conversion never fails on malformed schemas; unsupported constructs are
    reduced or dropped.

    Args:
        request_body: The schema to convert and an optional root name

    Returns:
        ConvertSchemaResponse: The tagged generation schema and its JSON
        Schema rendering
    """
    schema = convert_schema(request_body.json_schema, name=request_body.name)
    logger.debug(f"Converted schema into a {type(schema).__name__}")

    return ConvertSchemaResponse(
        generation_schema=to_dict(schema),
        json_schema=to_json_schema(schema),
    )
