"""Generation schema types.

A generation schema describes the values a constrained decoder is allowed to
produce. It is a closed set of variants: primitive leaves, objects, arrays
and unions. Every node is a frozen dataclass, so a converted tree can be
shared freely once it has been built.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

Scalar = Union[bool, int, float, str]


class PrimitiveKind(str, Enum):
    """Primitive value kinds supported by the generation engine."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"


@dataclass(frozen=True)
class FixedValue:
    """Constrains a primitive to exactly one value."""

    value: Scalar


@dataclass(frozen=True)
class Range:
    """Constrains a primitive to the closed interval [low, high]."""

    low: Scalar
    high: Scalar


Constraint = Union[FixedValue, Range, None]


@dataclass(frozen=True)
class PrimitiveLeaf:
    """A terminal schema node of a primitive kind."""

    kind: PrimitiveKind
    constraint: Constraint = None

    @property
    def is_string_constant(self) -> bool:
        return self.kind is PrimitiveKind.STRING and isinstance(
            self.constraint, FixedValue
        )


@dataclass(frozen=True)
class Property:
    """A named field of an object schema.

    Attributes:
        name: Field name as it appears in the generated object
        description: Optional human readable description
        schema: Schema of the field value
        is_optional: Whether the generator may omit the field
    """

    name: str
    description: str | None
    schema: "GenerationSchema"
    is_optional: bool = False


@dataclass(frozen=True)
class ObjectSchema:
    """An object with an ordered list of fields."""

    name: str
    description: str | None
    fields: tuple[Property, ...] = ()

    def __post_init__(self) -> None:
        names = [field.name for field in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field names in object schema {self.name}")

    def field(self, name: str) -> Property | None:
        """Get a field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None


@dataclass(frozen=True)
class ArraySchema:
    """A homogeneous array with optional element count bounds."""

    element: "GenerationSchema"
    min_elements: int | None = None
    max_elements: int | None = None

    def __post_init__(self) -> None:
        if (
            self.min_elements is not None
            and self.max_elements is not None
            and self.min_elements > self.max_elements
        ):
            raise ValueError(
                f"min_elements ({self.min_elements}) exceeds "
                f"max_elements ({self.max_elements})"
            )


@dataclass(frozen=True)
class UnionSchema:
    """A choice between alternative schemas, in declaration order."""

    name: str
    description: str | None
    branches: tuple["GenerationSchema", ...] = ()


GenerationSchema = Union[PrimitiveLeaf, ObjectSchema, ArraySchema, UnionSchema]
