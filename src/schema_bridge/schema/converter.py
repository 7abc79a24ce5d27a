"""JSON Schema to generation schema conversion.

This module contains the SchemaConverter, a recursive-descent translator from
the loosely structured JSON Schema found in MCP tool definitions to the
generation schema tree. Conversion never fails: constructs the target format
cannot express are reduced or dropped, and the result is always a schema.
"""

import logging
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any

from schema_bridge.schema.constraints import (
    CONST_KEY,
    ENUM_KEY,
    apply_constraints,
    const_schema,
    enum_schema,
)
from schema_bridge.schema.resolver import ReferenceResolver
from schema_bridge.schema.types import (
    ArraySchema,
    GenerationSchema,
    ObjectSchema,
    PrimitiveKind,
    PrimitiveLeaf,
    Property,
    UnionSchema,
)
from schema_bridge.schema.values import as_array, as_int, as_object, as_string

logger = logging.getLogger(__name__)


class SchemaType(str, Enum):
    """Recognised values of the ``type`` keyword."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    ANY_OF = "anyOf"


_PRIMITIVES = {
    SchemaType.INTEGER: PrimitiveKind.INTEGER,
    SchemaType.NUMBER: PrimitiveKind.NUMBER,
    SchemaType.STRING: PrimitiveKind.STRING,
}


def classify(type_name: str | None) -> SchemaType | None:
    """Map a ``type`` string to a SchemaType, or None if unrecognised."""
    if type_name is None:
        return None
    try:
        return SchemaType(type_name)
    except ValueError:
        logger.debug(f"Unrecognised schema type: {type_name}")
        return None


def declared_type(node: Mapping[str, Any]) -> SchemaType | None:
    """Get the type a node declares.

    A node without ``type`` that carries an ``anyOf`` array counts as a union.
    """
    type_name = as_string(node.get("type"))
    if type_name is not None:
        return classify(type_name)
    if "type" not in node and as_array(node.get("anyOf")) is not None:
        return SchemaType.ANY_OF
    return None


def _type_list(node: Mapping[str, Any]) -> list[str] | None:
    types = as_array(node.get("type"))
    if types is None:
        return None
    return [t for t in types if isinstance(t, str)]


class _ConversionState:
    """Mutable state scoped to one top-level conversion."""

    def __init__(self, resolver: ReferenceResolver) -> None:
        self.resolver = resolver
        self.in_flight: set[str] = set()
        self.names: set[str] = set()

    def fresh_name(self) -> str:
        name = uuid.uuid4().hex
        while name in self.names:
            name = uuid.uuid4().hex
        self.names.add(name)
        return name

    @contextmanager
    def dereferenced(self, node: Any) -> Iterator[Any]:
        """Dereference a node for as long as its subtree is being built."""
        node, followed = self.resolver.dereference(node, self.in_flight)
        self.in_flight.update(followed)
        try:
            yield node
        finally:
            self.in_flight.difference_update(followed)


class SchemaConverter:
    """Converts a JSON Schema document into a generation schema.

    The converter only keeps the root document. Each public call starts a
    fresh conversion state, so an instance can be reused and shared between
    threads.

    Attributes:
        root: The JSON Schema document
        resolver: Resolver for local references into ``root``

    Example:
        >>> converter = SchemaConverter({"type": "object", "properties": {
        ...     "city": {"type": "string"}}, "required": ["city"]})
        >>> converter.schema(name="get_weather").fields[0].name
        'city'
    """

    def __init__(self, root: Mapping[str, Any]) -> None:
        self.root = root
        self.resolver = ReferenceResolver(root)

    def _new_state(self) -> _ConversionState:
        return _ConversionState(self.resolver)

    def schema(self, name: str | None = None) -> GenerationSchema:
        """Convert the root document.

        Args:
            name: Name for the root schema when the document has no title

        Returns:
            GenerationSchema: The converted root schema
        """
        return self.build_schema(self.root, name=name)

    def build_schema(
        self,
        node: Mapping[str, Any],
        name: str | None = None,
        description: str | None = None,
    ) -> GenerationSchema:
        """Convert a schema node.

        Args:
            node: The JSON Schema node
            name: Name to use when the node has no ``title``
            description: Description to use instead of the node's own

        Returns:
            GenerationSchema: The converted schema
        """
        return self._build_schema(node, self._new_state(), name, description)

    def build_property(
        self,
        node: Mapping[str, Any],
        name: str,
        required: bool,
        description: str | None = None,
    ) -> Property | None:
        """Convert a node into an object field.

        Args:
            node: The JSON Schema node of the property
            name: Field name
            required: Whether the enclosing object lists the field as required
            description: Description to use instead of the node's own

        Returns:
            Property | None: The field, or None if the node contributes none
        """
        return self._build_property(node, self._new_state(), name, required, description)

    # --- schema level ---

    def _build_schema(
        self,
        node: Any,
        state: _ConversionState,
        name: str | None = None,
        description: str | None = None,
    ) -> GenerationSchema:
        with state.dereferenced(node) as node:
            node = as_object(node) or {}
            title = as_string(node.get("title")) or name
            if description is None:
                description = as_string(node.get("description"))

            types = _type_list(node)
            if types is not None:
                return self._type_list_schema(node, types, state, title, description)

            schema_type = declared_type(node)

            if schema_type is SchemaType.BOOLEAN:
                return PrimitiveLeaf(PrimitiveKind.BOOLEAN)

            if schema_type is SchemaType.ARRAY:
                return self._array_schema(node, state)

            # Objects and unions always carry a name
            title = title or state.fresh_name()

            if schema_type in _PRIMITIVES:
                base = PrimitiveLeaf(_PRIMITIVES[schema_type])
                schema, _ = apply_constraints(node, base, True, title, description)
                return schema

            if schema_type is SchemaType.ANY_OF:
                return self._union_schema(node, state, title, description)

            if schema_type is SchemaType.OBJECT:
                return self._object_schema(node, state, title, description)

            if ENUM_KEY in node:
                schema, _ = enum_schema(node[ENUM_KEY], title, description)
                return schema

            if CONST_KEY in node:
                constant = const_schema(node[CONST_KEY])
                if constant is not None:
                    return constant

            return self._object_schema(node, state, title, description)

    def _type_list_schema(
        self,
        node: Mapping[str, Any],
        types: list[str],
        state: _ConversionState,
        name: str | None,
        description: str | None,
    ) -> GenerationSchema:
        # {"type": ["string", "integer", "null"]}
        concrete = [t for t in types if t != SchemaType.NULL.value]
        if len(concrete) == 1:
            return self._build_schema({**node, "type": concrete[0]}, state, name, description)

        name = name or state.fresh_name()
        if not concrete:
            return self._object_schema(node, state, name, description)

        branches = tuple(
            self._build_schema({**node, "type": t}, state, description=description)
            for t in concrete
        )
        return UnionSchema(name=name, description=description, branches=branches)

    def _union_schema(
        self,
        node: Mapping[str, Any],
        state: _ConversionState,
        name: str,
        description: str | None,
    ) -> UnionSchema:
        branches: list[GenerationSchema] = []
        for branch in as_array(node.get("anyOf")) or []:
            with state.dereferenced(branch) as branch:
                branch = as_object(branch)
                if branch is None:
                    logger.debug(f"Skipping non-object anyOf branch in {name}")
                    continue
                branches.append(self._build_schema(branch, state))
        return UnionSchema(name=name, description=description, branches=tuple(branches))

    def _array_schema(self, node: Mapping[str, Any], state: _ConversionState) -> ArraySchema:
        items = node.get("items")
        if as_object(items) is None:
            items = {}
        element = self._build_schema(items, state)

        min_items = as_int(node.get("minItems"))
        max_items = as_int(node.get("maxItems"))
        if min_items is not None and min_items < 0:
            min_items = None
        if max_items is not None and max_items < 0:
            max_items = None
        if min_items is not None and max_items is not None and min_items > max_items:
            logger.warning(
                f"minItems ({min_items}) exceeds maxItems ({max_items}), "
                "dropping the upper bound"
            )
            max_items = None

        return ArraySchema(element=element, min_elements=min_items, max_elements=max_items)

    def _object_schema(
        self,
        node: Mapping[str, Any],
        state: _ConversionState,
        name: str,
        description: str | None,
    ) -> ObjectSchema:
        required = {
            field for field in as_array(node.get("required")) or [] if isinstance(field, str)
        }
        properties = as_object(node.get("properties")) or {}

        fields: list[Property] = []
        for key, value in properties.items():
            prop = self._build_property(value, state, key, key in required)
            if prop is not None:
                fields.append(prop)

        return ObjectSchema(name=name, description=description, fields=tuple(fields))

    # --- property level ---

    def _build_property(
        self,
        node: Any,
        state: _ConversionState,
        name: str,
        required: bool,
        description: str | None = None,
    ) -> Property | None:
        with state.dereferenced(node) as node:
            node = as_object(node)
            if node is None:
                logger.debug(f"Skipping property {name}: schema is not an object")
                return None
            if description is None:
                description = as_string(node.get("description"))

            types = _type_list(node)
            if types is not None:
                if SchemaType.NULL.value in types:
                    required = False
                concrete = [t for t in types if t != SchemaType.NULL.value]
                if not concrete:
                    return None
                node = {**node, "type": concrete[0]}

            schema_type = declared_type(node)
            if schema_type is SchemaType.ANY_OF and "type" not in node:
                return self._collapsed_property(node, state, name, required, description)

            if schema_type is SchemaType.NULL:
                return None

            if schema_type is SchemaType.BOOLEAN:
                schema: GenerationSchema = PrimitiveLeaf(PrimitiveKind.BOOLEAN)
            elif schema_type is SchemaType.OBJECT:
                schema = self._build_schema(node, state)
            elif schema_type is SchemaType.ARRAY:
                schema = self._array_schema(node, state)
            elif schema_type in _PRIMITIVES:
                base = PrimitiveLeaf(_PRIMITIVES[schema_type])
                schema, required = apply_constraints(node, base, required, name, description)
            elif schema_type is SchemaType.ANY_OF:
                schema = self._union_schema(node, state, name, description)
            elif ENUM_KEY in node:
                schema, required_override = enum_schema(node[ENUM_KEY], name, description)
                if required_override is not None:
                    required = required_override
            elif CONST_KEY in node:
                constant = const_schema(node[CONST_KEY])
                if constant is None:
                    return None
                schema = constant
            else:
                schema = self._build_schema(node, state)

            return Property(
                name=name,
                description=description,
                schema=schema,
                is_optional=not required,
            )

    def _collapsed_property(
        self,
        node: Mapping[str, Any],
        state: _ConversionState,
        name: str,
        required: bool,
        description: str | None,
    ) -> Property | None:
        """Reduce a property-level ``anyOf`` to its first non-null branch.

        A field slot cannot hold a real union, so {"anyOf": [{"type": "string"},
        {"type": "null"}]} becomes an optional string. Later non-null branches
        are ignored.
        """
        chosen = None
        admits_null = False
        for branch in as_array(node.get("anyOf")) or []:
            target, _ = state.resolver.dereference(branch, state.in_flight)
            type_name = as_string((as_object(target) or {}).get("type"))
            if type_name == SchemaType.NULL.value:
                admits_null = True
            elif type_name is not None and chosen is None:
                chosen = branch

        if admits_null:
            required = False

        if chosen is None:
            if admits_null:
                return None
            fallback = {key: value for key, value in node.items() if key != "anyOf"}
            return self._build_property(fallback, state, name, required, description)

        return self._build_property(chosen, state, name, required, description)


def convert_schema(schema: Mapping[str, Any], name: str | None = None) -> GenerationSchema:
    """Convert a JSON Schema document into a generation schema.

    Args:
        schema: The JSON Schema document, e.g. an MCP tool's ``inputSchema``
        name: Name for the root schema when the document has no title

    Returns:
        GenerationSchema: The converted root schema
    """
    return SchemaConverter(schema).schema(name=name)
