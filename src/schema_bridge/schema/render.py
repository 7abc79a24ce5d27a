"""Serialisation of generation schemas.

Two renderings are provided: a tagged dict that mirrors the variant tree
(used by the HTTP API) and a JSON Schema dict in the dialect Ollama accepts
for tool parameters.
"""

from typing import Any

from schema_bridge.schema.types import (
    ArraySchema,
    Constraint,
    FixedValue,
    GenerationSchema,
    ObjectSchema,
    PrimitiveLeaf,
    Property,
    Range,
    UnionSchema,
)


def _constraint_dict(constraint: Constraint) -> dict[str, Any] | None:
    if isinstance(constraint, FixedValue):
        return {"kind": "fixed", "value": constraint.value}
    if isinstance(constraint, Range):
        return {"kind": "range", "low": constraint.low, "high": constraint.high}
    return None


def _property_dict(prop: Property) -> dict[str, Any]:
    return {
        "name": prop.name,
        "description": prop.description,
        "is_optional": prop.is_optional,
        "schema": to_dict(prop.schema),
    }


def to_dict(schema: GenerationSchema) -> dict[str, Any]:
    """Render a schema as a tagged dict.

    Args:
        schema: The schema to render

    Returns:
        dict: ``{"kind": "primitive" | "object" | "array" | "union", ...}``

    Raises:
        TypeError: If ``schema`` is not a generation schema node
    """
    if isinstance(schema, PrimitiveLeaf):
        return {
            "kind": "primitive",
            "type": schema.kind.value,
            "constraint": _constraint_dict(schema.constraint),
        }
    if isinstance(schema, ObjectSchema):
        return {
            "kind": "object",
            "name": schema.name,
            "description": schema.description,
            "fields": [_property_dict(field) for field in schema.fields],
        }
    if isinstance(schema, ArraySchema):
        return {
            "kind": "array",
            "element": to_dict(schema.element),
            "min_elements": schema.min_elements,
            "max_elements": schema.max_elements,
        }
    if isinstance(schema, UnionSchema):
        return {
            "kind": "union",
            "name": schema.name,
            "description": schema.description,
            "branches": [to_dict(branch) for branch in schema.branches],
        }
    raise TypeError(f"Not a generation schema: {type(schema).__name__}")


def to_json_schema(schema: GenerationSchema) -> dict[str, Any]:
    """Render a schema as JSON Schema.

    Raises:
        TypeError: If ``schema`` is not a generation schema node
    """
    if isinstance(schema, PrimitiveLeaf):
        rendered: dict[str, Any] = {"type": schema.kind.value}
        if isinstance(schema.constraint, FixedValue):
            rendered["enum"] = [schema.constraint.value]
        elif isinstance(schema.constraint, Range):
            rendered["minimum"] = schema.constraint.low
            rendered["maximum"] = schema.constraint.high
        return rendered

    if isinstance(schema, ObjectSchema):
        properties = {}
        for field in schema.fields:
            rendered_field = to_json_schema(field.schema)
            if field.description:
                rendered_field["description"] = field.description
            properties[field.name] = rendered_field
        rendered = {"type": "object", "title": schema.name}
        if schema.description:
            rendered["description"] = schema.description
        rendered["properties"] = properties
        rendered["required"] = [f.name for f in schema.fields if not f.is_optional]
        return rendered

    if isinstance(schema, ArraySchema):
        rendered = {"type": "array", "items": to_json_schema(schema.element)}
        if schema.min_elements is not None:
            rendered["minItems"] = schema.min_elements
        if schema.max_elements is not None:
            rendered["maxItems"] = schema.max_elements
        return rendered

    if isinstance(schema, UnionSchema):
        branches = schema.branches
        if branches and all(
            isinstance(b, PrimitiveLeaf) and b.is_string_constant for b in branches
        ):
            rendered = {
                "type": "string",
                "enum": [b.constraint.value for b in branches],  # type: ignore[union-attr]
            }
        else:
            rendered = {"anyOf": [to_json_schema(b) for b in branches]}
        if schema.description:
            rendered["description"] = schema.description
        return rendered

    raise TypeError(f"Not a generation schema: {type(schema).__name__}")
