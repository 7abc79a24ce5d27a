"""Translation of ``enum`` and ``const`` into generation schemas.

JSON Schema can pin a value to a list of literals (``enum``) or to a single
literal (``const``). The generation engine has no literal type, so both are
expressed through constrained primitive leaves, grouped in a union for enums.
"""

import logging
from collections.abc import Mapping
from typing import Any

from schema_bridge.schema.types import (
    FixedValue,
    GenerationSchema,
    PrimitiveKind,
    PrimitiveLeaf,
    Range,
    UnionSchema,
)
from schema_bridge.schema.values import ValueKind, as_array, kind_of

logger = logging.getLogger(__name__)

ENUM_KEY = "enum"
CONST_KEY = "const"

_SCALAR_KINDS = {
    ValueKind.BOOL: PrimitiveKind.BOOLEAN,
    ValueKind.INT: PrimitiveKind.INTEGER,
    ValueKind.FLOAT: PrimitiveKind.NUMBER,
}


def string_constant(value: str) -> PrimitiveLeaf:
    return PrimitiveLeaf(PrimitiveKind.STRING, FixedValue(value))


def enum_schema(
    values: Any, name: str, description: str | None
) -> tuple[UnionSchema, bool | None]:
    """Build a union of constants from an ``enum`` array.

    "color": {"enum": ["red", "amber", "green", null, 42]} becomes a union of
    the three string constants followed by an integer constant; null only
    makes the enclosing property optional.

    Args:
        values: The raw ``enum`` value
        name: Name given to the union
        description: Description given to the union

    Returns:
        Tuple of (union schema, required override). The override is None when
        the enum says nothing about optionality and False when it admits null.
    """
    members = as_array(values)
    if members is None:
        logger.debug(f"enum of {name} is not an array, producing an empty union")
        return UnionSchema(name=name, description=description), None

    strings = [member for member in members if isinstance(member, str)]
    if len(strings) == len(members):
        branches = tuple(string_constant(member) for member in strings)
        return UnionSchema(name=name, description=description, branches=branches), None

    branches_list: list[GenerationSchema] = [string_constant(s) for s in strings]
    admits_null = False
    for member in members:
        if isinstance(member, str):
            continue
        kind = kind_of(member)
        if kind is ValueKind.NULL:
            admits_null = True
        elif kind in _SCALAR_KINDS:
            branches_list.append(PrimitiveLeaf(_SCALAR_KINDS[kind], FixedValue(member)))
        else:
            logger.debug(f"Skipping unsupported {kind.value} member in enum of {name}")

    schema = UnionSchema(name=name, description=description, branches=tuple(branches_list))
    return schema, False if admits_null else None


def const_schema(value: Any) -> PrimitiveLeaf | None:
    """Build a constrained leaf from a ``const`` value.

    "country": {"const": "United States of America"}

    Numbers become a range whose bounds are both the constant. Booleans,
    null, arrays and objects have no representation and yield None.
    """
    kind = kind_of(value)
    if kind is ValueKind.INT:
        return PrimitiveLeaf(PrimitiveKind.INTEGER, Range(value, value))
    if kind is ValueKind.FLOAT:
        return PrimitiveLeaf(PrimitiveKind.NUMBER, Range(value, value))
    if kind is ValueKind.STRING:
        return string_constant(value)
    logger.debug(f"Dropping unsupported {kind.value} const")
    return None


def apply_constraints(
    node: Mapping[str, Any],
    base: GenerationSchema,
    required: bool,
    name: str,
    description: str | None,
) -> tuple[GenerationSchema, bool]:
    """Override a base schema with the node's ``enum`` or ``const``.

    ``enum`` takes precedence; ``const`` is only consulted without it.

    Args:
        node: The schema node being converted
        base: Schema to use when no constraint applies
        required: Required flag of the enclosing property
        name: Name for a union built from ``enum``
        description: Description for a union built from ``enum``

    Returns:
        Tuple of (schema, required flag)
    """
    if ENUM_KEY in node:
        schema, required_override = enum_schema(node[ENUM_KEY], name, description)
        if required_override is not None:
            required = required_override
        return schema, required

    if CONST_KEY in node:
        constant = const_schema(node[CONST_KEY])
        if constant is not None:
            return constant, required

    return base, required
