"""Generic JSON value tree helpers.

Schemas arrive as parsed JSON, so the value tree is plain Python data:
None, bool, int, float, str, bytes, lists (or tuples) and string-keyed
mappings. The helpers in this module classify those values and read typed
payloads out of them without ever mutating the tree.
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, Union

Value = Union[
    None,
    bool,
    int,
    float,
    str,
    bytes,
    list["Value"],
    tuple["Value", ...],
    Mapping[str, "Value"],
]

REF_KEY = "$ref"


class ValueKind(str, Enum):
    """The variant a JSON value belongs to."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BINARY = "binary"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Value) -> ValueKind:
    """Classify a value.

    bool is checked before int since ``True`` is an ``int`` in Python.

    Args:
        value: Any value from a parsed JSON document.

    Returns:
        ValueKind: The variant of the value.

    Raises:
        TypeError: If the value is not representable as JSON.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (bytes, bytearray)):
        return ValueKind.BINARY
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def as_object(value: Any) -> Mapping[str, Any] | None:
    """Return the value if it is an object, otherwise None."""
    return value if isinstance(value, Mapping) else None


def as_array(value: Any) -> list[Any] | tuple[Any, ...] | None:
    """Return the value if it is an array, otherwise None."""
    return value if isinstance(value, (list, tuple)) else None


def as_string(value: Any) -> str | None:
    """Return the value if it is a string, otherwise None."""
    return value if isinstance(value, str) else None


def as_int(value: Any) -> int | None:
    """Return the value if it is an integer (booleans excluded)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def reference_of(value: Value) -> str | None:
    """Get the ``$ref`` pointer of an object, if it carries one."""
    obj = as_object(value)
    if obj is None:
        return None
    return as_string(obj.get(REF_KEY))


def is_reference(value: Value) -> bool:
    return reference_of(value) is not None


def walk(value: Value) -> Iterator[Value]:
    """Yield every node of a value tree, pre-order.

    Object values are visited in key order, array elements in sequence.
    """
    stack = [value]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Mapping):
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, (list, tuple)):
            stack.extend(reversed(node))


def has_references(value: Value) -> bool:
    """Check whether any node of the tree is a ``$ref`` object."""
    return any(is_reference(node) for node in walk(value))
