"""JSON Schema to generation schema conversion.

This package converts the JSON Schema of an MCP tool's input into the
generation schema a constrained decoder uses to shape the tool arguments a
model produces.
"""

from schema_bridge.schema.converter import SchemaConverter, SchemaType, convert_schema
from schema_bridge.schema.render import to_dict, to_json_schema
from schema_bridge.schema.resolver import ReferenceResolver, resolve
from schema_bridge.schema.types import (
    ArraySchema,
    FixedValue,
    GenerationSchema,
    ObjectSchema,
    PrimitiveKind,
    PrimitiveLeaf,
    Property,
    Range,
    UnionSchema,
)

__all__ = [
    "ArraySchema",
    "FixedValue",
    "GenerationSchema",
    "ObjectSchema",
    "PrimitiveKind",
    "PrimitiveLeaf",
    "Property",
    "Range",
    "ReferenceResolver",
    "SchemaConverter",
    "SchemaType",
    "UnionSchema",
    "convert_schema",
    "resolve",
    "to_dict",
    "to_json_schema",
]
