"""Unit tests for JSON Schema to generation schema conversion."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from schema_bridge.schema import (
    ArraySchema,
    FixedValue,
    ObjectSchema,
    PrimitiveKind,
    PrimitiveLeaf,
    Property,
    Range,
    SchemaConverter,
    UnionSchema,
    convert_schema,
)
from schema_bridge.schema.converter import SchemaType, classify, declared_type


def build(node, **kwargs):
    return SchemaConverter(node).build_schema(node, **kwargs)


def build_property(node, name="field", required=True, root=None):
    return SchemaConverter(root or node).build_property(node, name, required)


class TestClassification:
    """Tests for mapping type keywords to SchemaType."""

    def test_known_types(self):
        assert classify("string") is SchemaType.STRING
        assert classify("anyOf") is SchemaType.ANY_OF
        assert classify("tuple") is None
        assert classify(None) is None

    def test_typeless_any_of_is_a_union(self):
        assert declared_type({"anyOf": []}) is SchemaType.ANY_OF
        assert declared_type({"anyOf": "nope"}) is None
        assert declared_type({"type": "string", "anyOf": []}) is SchemaType.STRING


class TestPrimitives:
    """Tests for primitive leaves."""

    @pytest.mark.parametrize(
        "type_name,kind",
        [
            ("boolean", PrimitiveKind.BOOLEAN),
            ("number", PrimitiveKind.NUMBER),
            ("integer", PrimitiveKind.INTEGER),
            ("string", PrimitiveKind.STRING),
        ],
    )
    def test_plain_primitive_has_no_constraint(self, type_name, kind):
        assert build({"type": type_name}) == PrimitiveLeaf(kind)

    def test_integer_const_becomes_point_range(self):
        schema = build({"type": "integer", "const": 5})
        assert schema == PrimitiveLeaf(PrimitiveKind.INTEGER, Range(5, 5))

    def test_string_const(self):
        schema = build({"type": "string", "const": "United States of America"})
        assert schema == PrimitiveLeaf(
            PrimitiveKind.STRING, FixedValue("United States of America")
        )

    def test_typeless_const(self):
        assert build({"const": 2.5}) == PrimitiveLeaf(PrimitiveKind.NUMBER, Range(2.5, 2.5))

    def test_string_enum_becomes_union(self):
        schema = build({"type": "string", "title": "Color", "enum": ["red", "amber", "green"]})

        assert isinstance(schema, UnionSchema)
        assert schema.name == "Color"
        assert len(schema.branches) == 3
        assert all(branch.is_string_constant for branch in schema.branches)


class TestObjects:
    """Tests for object schemas."""

    def test_required_and_optional_fields(self):
        node = {
            "type": "object",
            "properties": {
                "a": {"type": "string"},
                "b": {"type": "integer"},
                "c": {"type": "boolean"},
                "d": {"type": "number"},
            },
            "required": ["a", "c"],
        }

        schema = build(node)

        assert isinstance(schema, ObjectSchema)
        assert [f.name for f in schema.fields] == ["a", "b", "c", "d"]
        assert [f.is_optional for f in schema.fields] == [False, True, False, True]

    def test_name_prefers_title(self):
        node = {"type": "object", "title": "Weather", "description": "Forecast"}

        schema = build(node, name="get_weather")

        assert schema.name == "Weather"
        assert schema.description == "Forecast"

    def test_name_falls_back_to_caller_name(self):
        assert build({"type": "object"}, name="get_weather").name == "get_weather"

    def test_untitled_object_gets_generated_name(self):
        schema = build({"type": "object"})
        assert len(schema.name) == 32

    def test_generated_names_are_unique(self):
        node = {
            "type": "object",
            "title": "Root",
            "properties": {
                "a": {"type": "object"},
                "b": {"type": "object"},
            },
        }

        schema = build(node)

        assert schema.field("a").schema.name != schema.field("b").schema.name

    def test_caller_description_wins(self):
        schema = build({"type": "object", "description": "own"}, description="given")
        assert schema.description == "given"

    def test_missing_type_without_constraints_is_an_object(self):
        schema = build({"properties": {"x": {"type": "string"}}, "required": ["x"]})

        assert isinstance(schema, ObjectSchema)
        assert schema.fields == (
            Property(
                name="x",
                description=None,
                schema=PrimitiveLeaf(PrimitiveKind.STRING),
                is_optional=False,
            ),
        )

    def test_non_string_required_entries_are_ignored(self):
        node = {"type": "object", "properties": {"a": {"type": "string"}}, "required": [1, "a"]}
        assert build(node).field("a").is_optional is False

    def test_property_descriptions(self, weather_schema):
        schema = convert_schema(weather_schema, name="get_weather")

        assert schema.field("city").description == "City name"
        assert schema.field("unit").description == "Temperature unit"

    def test_null_property_is_dropped(self):
        node = {"type": "object", "properties": {"a": {"type": "null"}, "b": {"type": "string"}}}
        assert [f.name for f in build(node).fields] == ["b"]

    def test_non_object_property_is_dropped(self):
        node = {"type": "object", "properties": {"a": True, "b": {"type": "string"}}}
        assert [f.name for f in build(node).fields] == ["b"]


class TestArrays:
    """Tests for array schemas."""

    def test_bounds_and_element(self):
        node = {"type": "array", "minItems": 1, "maxItems": 3, "items": {"type": "string"}}

        assert build(node) == ArraySchema(
            element=PrimitiveLeaf(PrimitiveKind.STRING), min_elements=1, max_elements=3
        )

    def test_missing_items_is_an_empty_object(self):
        schema = build({"type": "array"})

        assert isinstance(schema.element, ObjectSchema)
        assert schema.element.fields == ()

    def test_negative_bounds_are_ignored(self):
        schema = build({"type": "array", "items": {"type": "integer"}, "minItems": -1})
        assert schema.min_elements is None

    def test_inverted_bounds_drop_the_maximum(self, caplog):
        node = {"type": "array", "items": {"type": "integer"}, "minItems": 5, "maxItems": 2}

        with caplog.at_level(logging.WARNING):
            schema = build(node)

        assert schema.min_elements == 5
        assert schema.max_elements is None
        assert "exceeds maxItems" in caplog.text

    def test_array_property(self):
        prop = build_property({"type": "array", "items": {"type": "number"}}, "scores")
        assert prop.schema == ArraySchema(element=PrimitiveLeaf(PrimitiveKind.NUMBER))


class TestSchemaLevelUnions:
    """Tests for anyOf on schema level."""

    def test_branches_in_source_order(self):
        schema = build({"anyOf": [{"type": "string"}, {"type": "integer"}]}, name="Id")

        assert isinstance(schema, UnionSchema)
        assert schema.name == "Id"
        assert schema.branches == (
            PrimitiveLeaf(PrimitiveKind.STRING),
            PrimitiveLeaf(PrimitiveKind.INTEGER),
        )

    def test_null_branch_is_kept(self):
        """Test that every mapping branch contributes to the union."""
        schema = build({"anyOf": [{"type": "string"}, {"type": "null"}]})

        assert len(schema.branches) == 2
        assert schema.branches[0] == PrimitiveLeaf(PrimitiveKind.STRING)
        assert isinstance(schema.branches[1], ObjectSchema)
        assert schema.branches[1].fields == ()

    def test_null_only_union_is_not_empty(self):
        schema = convert_schema({"anyOf": [{"type": "null"}]})
        assert len(schema.branches) == 1

    def test_non_object_branches_are_skipped(self):
        schema = build({"anyOf": ["string", {"type": "integer"}, None]})
        assert schema.branches == (PrimitiveLeaf(PrimitiveKind.INTEGER),)

    def test_empty_any_of_is_an_empty_union(self):
        assert build({"anyOf": []}, name="Nothing").branches == ()

    def test_referenced_branches(self):
        root = {
            "$defs": {"Code": {"type": "integer"}},
            "anyOf": [{"$ref": "#/$defs/Code"}, {"type": "boolean"}],
        }

        schema = convert_schema(root)

        assert schema.branches == (
            PrimitiveLeaf(PrimitiveKind.INTEGER),
            PrimitiveLeaf(PrimitiveKind.BOOLEAN),
        )


class TestPropertyLevelUnions:
    """Tests for anyOf collapse on property level."""

    def test_optional_string(self):
        prop = build_property({"anyOf": [{"type": "string"}, {"type": "null"}]}, "nickname")

        assert prop == Property(
            name="nickname",
            description=None,
            schema=PrimitiveLeaf(PrimitiveKind.STRING),
            is_optional=True,
        )

    def test_first_non_null_branch_wins(self):
        node = {"anyOf": [{"type": "null"}, {"type": "integer"}, {"type": "string"}]}

        prop = build_property(node)

        assert prop.schema == PrimitiveLeaf(PrimitiveKind.INTEGER)
        assert prop.is_optional is True

    def test_without_null_keeps_required_flag(self):
        prop = build_property({"anyOf": [{"type": "number"}, {"type": "string"}]})

        assert prop.schema == PrimitiveLeaf(PrimitiveKind.NUMBER)
        assert prop.is_optional is False

    def test_only_null_contributes_no_field(self):
        assert build_property({"anyOf": [{"type": "null"}]}) is None

    def test_chosen_branch_keeps_its_structure(self):
        node = {
            "description": "Tags",
            "anyOf": [
                {"type": "array", "items": {"type": "string"}, "maxItems": 4},
                {"type": "null"},
            ],
        }

        prop = build_property(node, "tags")

        assert prop.description == "Tags"
        assert prop.schema == ArraySchema(
            element=PrimitiveLeaf(PrimitiveKind.STRING), max_elements=4
        )

    def test_referenced_branch(self):
        root = {"$defs": {"Unit": {"type": "string", "enum": ["c", "f"]}}}
        node = {"anyOf": [{"$ref": "#/$defs/Unit"}, {"type": "null"}]}

        prop = build_property(node, "unit", root=root)

        assert isinstance(prop.schema, UnionSchema)
        assert prop.schema.name == "unit"
        assert prop.is_optional is True


class TestPropertyConstraints:
    """Tests for enum and const on property level."""

    def test_enum_with_null_is_optional(self):
        prop = build_property({"enum": ["red", "amber", None]}, "color")

        assert prop.is_optional is True
        assert isinstance(prop.schema, UnionSchema)
        assert len(prop.schema.branches) == 2

    def test_string_enum_keeps_required_flag(self):
        prop = build_property({"type": "string", "enum": ["red", "amber", "green"]}, "color")

        assert prop.is_optional is False
        assert len(prop.schema.branches) == 3

    def test_unsupported_const_contributes_no_field(self):
        assert build_property({"const": True}) is None

    def test_weather_schema(self, weather_schema):
        schema = convert_schema(weather_schema, name="get_weather")

        assert schema.name == "get_weather"
        assert schema.field("city").is_optional is False
        assert schema.field("unit").is_optional is True
        assert schema.field("days").schema == PrimitiveLeaf(
            PrimitiveKind.INTEGER, Range(3, 3)
        )


class TestTypeLists:
    """Tests for type arrays such as ["string", "null"]."""

    def test_nullable_schema(self):
        assert build({"type": ["string", "null"]}) == PrimitiveLeaf(PrimitiveKind.STRING)

    def test_several_types_become_a_union(self):
        schema = build({"type": ["string", "integer"]}, name="Value")

        assert schema == UnionSchema(
            name="Value",
            description=None,
            branches=(
                PrimitiveLeaf(PrimitiveKind.STRING),
                PrimitiveLeaf(PrimitiveKind.INTEGER),
            ),
        )

    def test_nullable_property_is_optional(self):
        prop = build_property({"type": ["integer", "null"]}, "age")

        assert prop.schema == PrimitiveLeaf(PrimitiveKind.INTEGER)
        assert prop.is_optional is True

    def test_null_only_property_contributes_no_field(self):
        assert build_property({"type": ["null"]}) is None


class TestReferences:
    """Tests for $ref handling during conversion."""

    def test_shared_definition_is_built_for_every_use(self):
        root = {
            "type": "object",
            "title": "Trip",
            "$defs": {
                "Address": {
                    "title": "Address",
                    "type": "object",
                    "properties": {"city": {"type": "string"}},
                    "required": ["city"],
                }
            },
            "properties": {
                "home": {"$ref": "#/$defs/Address"},
                "work": {"$ref": "#/$defs/Address"},
            },
        }

        schema = convert_schema(root)

        assert schema.field("home").schema == schema.field("work").schema
        assert schema.field("home").schema.field("city") is not None

    def test_sibling_description_overrides_target(self):
        root = {
            "type": "object",
            "$defs": {"Name": {"type": "string", "description": "A name"}},
            "properties": {"n": {"$ref": "#/$defs/Name", "description": "Nickname"}},
        }

        assert convert_schema(root).field("n").description == "Nickname"

    def test_self_reference_terminates(self):
        root = {
            "type": "object",
            "a": {"$ref": "#/a"},
            "properties": {"x": {"$ref": "#/a"}},
        }

        schema = convert_schema(root)

        assert isinstance(schema.field("x").schema, ObjectSchema)
        assert schema.field("x").schema.fields == ()

    def test_recursive_definition_terminates(self):
        root = {
            "$defs": {
                "Node": {
                    "type": "object",
                    "title": "Node",
                    "properties": {
                        "value": {"type": "integer"},
                        "children": {"type": "array", "items": {"$ref": "#/$defs/Node"}},
                    },
                }
            },
            "$ref": "#/$defs/Node",
        }

        schema = convert_schema(root)

        assert schema.name == "Node"
        inner = schema.field("children").schema.element
        assert isinstance(inner, ObjectSchema)
        assert inner.fields == ()

    def test_dangling_reference_is_logged(self, caplog):
        root = {"type": "object", "properties": {"x": {"$ref": "#/$defs/Missing"}}}

        with caplog.at_level(logging.WARNING):
            schema = convert_schema(root)

        assert schema.field("x").schema.fields == ()
        assert "Dangling reference" in caplog.text


class TestReuse:
    """Tests for converting with the same converter more than once."""

    def test_repeated_conversion_is_stable(self, weather_schema):
        converter = SchemaConverter(weather_schema)
        assert converter.schema(name="get_weather") == converter.schema(name="get_weather")

    def test_references_resolve_on_every_call(self):
        root = {
            "type": "object",
            "title": "Root",
            "$defs": {"Id": {"type": "integer"}},
            "properties": {"id": {"$ref": "#/$defs/Id"}},
        }
        converter = SchemaConverter(root)

        first = converter.schema()
        second = converter.schema()

        assert first == second
        assert first.field("id").schema == PrimitiveLeaf(PrimitiveKind.INTEGER)

    def test_shared_converter_across_threads(self):
        """Test that concurrent conversions of a recursive document agree."""
        root = {
            "$ref": "#/$defs/Node",
            "$defs": {
                "Node": {
                    "type": "object",
                    "title": "Node",
                    "properties": {
                        "x": {"type": "integer"},
                        "y": {"type": "array", "items": {"$ref": "#/$defs/Node"}},
                    },
                }
            },
        }
        converter = SchemaConverter(root)

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda _: converter.schema(), range(200)))

        for schema in results:
            assert tuple(field.name for field in schema.fields) == ("x", "y")
            element = schema.field("y").schema.element
            assert isinstance(element, ObjectSchema)
            assert element.fields == ()
