"""Tests for the Shape model."""

import dataclasses
import pytest
from json_builder import build_shape
from json_builder.models import Shape
from json_builder.types import SchemaError, ShapeType, TimestampFormat


class TestShapeFromDict:
    """Tests for building shapes from descriptions."""

    def test_scalar_shape(self):
        shape = Shape.from_dict({"type": "string"})

        assert shape.type == ShapeType.STRING
        assert shape.is_scalar
        assert shape.output_name is None
        assert len(shape.members) == 0
        assert shape.member is None

    def test_structure_members_keep_declaration_order(self):
        shape = Shape.from_dict({
            "type": "structure",
            "members": {
                "zeta": {"type": "integer"},
                "alpha": {"type": "string", "serialized_name": "Alpha"},
                "mid": {"type": "boolean"}
            }
        })

        assert list(shape.members) == ["zeta", "alpha", "mid"]
        assert shape.members["alpha"].name == "alpha"
        assert shape.members["alpha"].output_name == "Alpha"
        assert shape.members["zeta"].output_name == "zeta"

    def test_structure_without_members(self):
        shape = Shape.from_dict({"type": "structure"})
        assert shape.type == ShapeType.STRUCTURE
        assert len(shape.members) == 0

    def test_list_shape(self):
        shape = Shape.from_dict({"type": "list", "members": {"type": "integer"}})

        assert shape.type == ShapeType.LIST
        assert shape.member.type == ShapeType.INTEGER

    def test_map_shape(self):
        shape = Shape.from_dict({
            "type": "map",
            "keys": {"type": "string"},
            "members": {"type": "float"}
        })

        assert shape.type == ShapeType.MAP
        assert shape.key.type == ShapeType.STRING
        assert shape.member.type == ShapeType.FLOAT

    def test_map_key_defaults_to_string(self):
        shape = Shape.from_dict({"type": "map", "members": {"type": "string"}})
        assert shape.key.type == ShapeType.STRING

    def test_type_aliases(self):
        assert Shape.from_dict({"type": "long"}).type == ShapeType.INTEGER
        assert Shape.from_dict({"type": "double"}).type == ShapeType.FLOAT

    def test_unknown_keys_ignored(self):
        shape = Shape.from_dict({"type": "string", "documentation": "A name"})
        assert shape.type == ShapeType.STRING

    def test_build_shape_alias(self):
        assert build_shape({"type": "blob"}).type == ShapeType.BLOB


class TestShapeErrors:
    """Tests for schema errors raised at build time."""

    def test_unknown_type(self):
        with pytest.raises(SchemaError, match="Unrecognized shape type 'character'"):
            Shape.from_dict({"type": "character"})

    def test_missing_type(self):
        with pytest.raises(SchemaError, match="Unrecognized shape type None"):
            Shape.from_dict({"members": {}})

    def test_nested_unknown_type_reports_path(self):
        with pytest.raises(SchemaError) as excinfo:
            Shape.from_dict({
                "type": "structure",
                "members": {
                    "outer": {
                        "type": "structure",
                        "members": {"inner": {"type": "nope"}}
                    }
                }
            })
        assert excinfo.value.path == "outer.inner"

    def test_list_without_members(self):
        with pytest.raises(SchemaError, match="Missing 'members'"):
            Shape.from_dict({"type": "list"})

    def test_structure_members_must_be_mapping(self):
        with pytest.raises(SchemaError, match="must be a mapping"):
            Shape.from_dict({"type": "structure", "members": [{"type": "string"}]})

    def test_metadata_must_be_mapping(self):
        with pytest.raises(SchemaError, match="metadata at when must be a mapping") as excinfo:
            Shape.from_dict({
                "type": "structure",
                "members": {"when": {"type": "timestamp", "metadata": "rfc822"}}
            })
        assert excinfo.value.path == "when"

    def test_description_must_be_mapping(self):
        with pytest.raises(SchemaError, match="must be a mapping"):
            Shape.from_dict("string")

    def test_invalid_timestamp_format_not_checked_at_build(self):
        shape = Shape.from_dict({
            "type": "timestamp",
            "metadata": {"timestamp_format": "oops"}
        })
        assert shape.timestamp_format == "oops"
        assert shape.resolved_timestamp_format() is None


class TestShapeImmutability:
    """Tests that shapes cannot be changed after construction."""

    def setup_method(self):
        self.shape = Shape.from_dict({
            "type": "structure",
            "members": {"name": {"type": "string"}},
            "metadata": {"note": "x"}
        })

    def test_attributes_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            self.shape.serialized_name = "Other"

    def test_members_read_only(self):
        with pytest.raises(TypeError):
            self.shape.members["extra"] = Shape(ShapeType.STRING)

    def test_metadata_read_only(self):
        with pytest.raises(TypeError):
            self.shape.metadata["note"] = "y"

    def test_source_description_not_shared(self):
        description = {"type": "timestamp", "metadata": {"timestamp_format": "rfc822"}}
        shape = Shape.from_dict(description)
        description["metadata"]["timestamp_format"] = "unixtimestamp"

        assert shape.resolved_timestamp_format() == TimestampFormat.RFC822


class TestShapeRendering:
    """Tests for to_dict and describe."""

    def test_to_dict_round_trip(self):
        description = {
            "type": "structure",
            "members": {
                "when": {
                    "type": "timestamp",
                    "serialized_name": "When",
                    "metadata": {"timestamp_format": "rfc822"}
                },
                "tags": {"type": "map", "members": {"type": "string"}, "keys": {"type": "string"}}
            }
        }
        assert Shape.from_dict(description).to_dict() == description

    def test_describe(self):
        shape = Shape.from_dict({
            "type": "structure",
            "members": {
                "items": {"type": "list", "members": {"type": "timestamp"}},
                "name": {"type": "string", "serialized_name": "Name"}
            }
        })
        assert shape.describe() == (
            "<root>: structure\n"
            "  items: list\n"
            "    []: timestamp (iso8601)\n"
            "  Name: string"
        )
