"""Shape model: an immutable node of a schema tree."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from ..types import ShapeType, SchemaError, TimestampFormat


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Shape:
    """
    Immutable schema node describing one position of a value tree.

    A Shape carries its type, the name it is emitted under, its child
    shapes and any format metadata. Shapes are built once from a schema
    description and may be shared freely between encode calls.
    """

    type: ShapeType
    name: Optional[str] = None
    serialized_name: Optional[str] = None
    members: Mapping[str, 'Shape'] = field(default_factory=_empty)
    member: Optional['Shape'] = None
    key: Optional['Shape'] = None
    metadata: Mapping[str, Any] = field(default_factory=_empty)

    @property
    def output_name(self) -> Optional[str]:
        """Name emitted in the serialized form."""
        return self.serialized_name or self.name

    @property
    def is_scalar(self) -> bool:
        """Whether this shape is a leaf shape."""
        return self.type.is_scalar

    @property
    def timestamp_format(self) -> Optional[str]:
        """Raw timestamp_format metadata value, or None when unset."""
        return self.metadata.get("timestamp_format")

    @classmethod
    def from_dict(cls, description: Mapping[str, Any], name: Optional[str] = None,
                  path: Optional[str] = None) -> 'Shape':
        """
        Build a Shape tree from a declarative schema description.

        Args:
            description: Mapping with ``type`` and optional ``serialized_name``,
                ``members``, ``keys`` and ``metadata`` entries
            name: Logical member name the shape is declared under
            path: Dotted location used in error messages

        Returns:
            Shape instance

        Raises:
            SchemaError: If the type tag is unknown or a child description
                has the wrong form
        """
        location = path or name or "<root>"
        if not isinstance(description, Mapping):
            raise SchemaError(
                f"Shape description at {location} must be a mapping, "
                f"got {type(description).__name__}",
                context={"path": location}
            )

        tag = description.get("type")
        shape_type = ShapeType.from_tag(tag)
        if shape_type is None:
            raise SchemaError(f"Unrecognized shape type {tag!r} at {location}",
                              context={"path": location, "type": tag})

        serialized_name = description.get("serialized_name")
        raw_metadata = description.get("metadata") or {}
        if not isinstance(raw_metadata, Mapping):
            raise SchemaError(f"Shape metadata at {location} must be a mapping",
                              context={"path": location})
        metadata = MappingProxyType(dict(raw_metadata))

        members: Mapping[str, Shape] = _empty()
        member = None
        key = None

        if shape_type == ShapeType.STRUCTURE:
            raw_members = description.get("members") or {}
            if not isinstance(raw_members, Mapping):
                raise SchemaError(f"Structure members at {location} must be a mapping",
                                  context={"path": location})
            members = MappingProxyType({
                member_name: cls.from_dict(child, name=member_name,
                                           path=cls._join(path, member_name))
                for member_name, child in raw_members.items()
            })
        elif shape_type == ShapeType.LIST:
            member = cls._child(description, "members", path, "member")
        elif shape_type == ShapeType.MAP:
            member = cls._child(description, "members", path, "value")
            key = cls.from_dict(description.get("keys") or {"type": "string"},
                                path=cls._join(path, "key"))

        return cls(
            type=shape_type,
            name=name,
            serialized_name=serialized_name,
            members=members,
            member=member,
            key=key,
            metadata=metadata
        )

    @classmethod
    def _child(cls, description: Mapping[str, Any], entry: str,
               path: Optional[str], label: str) -> 'Shape':
        """Build the single element shape of a list or map."""
        location = cls._join(path, label)
        child = description.get(entry)
        if child is None:
            raise SchemaError(f"Missing {entry!r} description at {location}",
                              context={"path": location})
        return cls.from_dict(child, path=location)

    @staticmethod
    def _join(path: Optional[str], part: str) -> str:
        return f"{path}.{part}" if path else part

    def to_dict(self) -> Dict[str, Any]:
        """Convert shape back to its normalized schema description."""
        description: Dict[str, Any] = {"type": self.type.value}
        if self.serialized_name:
            description["serialized_name"] = self.serialized_name
        if self.type == ShapeType.STRUCTURE:
            description["members"] = {
                member_name: child.to_dict()
                for member_name, child in self.members.items()
            }
        elif self.member is not None:
            description["members"] = self.member.to_dict()
        if self.key is not None:
            description["keys"] = self.key.to_dict()
        if self.metadata:
            description["metadata"] = dict(self.metadata)
        return description

    def resolved_timestamp_format(self, default: TimestampFormat = TimestampFormat.ISO8601) -> Optional[TimestampFormat]:
        """
        Resolve the timestamp_format metadata.

        Returns:
            The declared TimestampFormat, ``default`` when unset, or None
            when the declared value is not a known format
        """
        raw = self.timestamp_format
        if raw is None:
            return default
        try:
            return TimestampFormat(raw)
        except ValueError:
            return None

    def describe(self, indent: int = 0, label: Optional[str] = None) -> str:
        """Get a one-line-per-shape tree summary."""
        label = label or self.output_name or "<root>"
        line = f"{'  ' * indent}{label}: {self.type.value}"
        if self.type == ShapeType.TIMESTAMP:
            line += f" ({self.timestamp_format or TimestampFormat.ISO8601.value})"
        lines = [line]
        for child in self.members.values():
            lines.append(child.describe(indent + 1))
        if self.member is not None:
            element_label = "[]" if self.type == ShapeType.LIST else "{}"
            lines.append(self.member.describe(indent + 1, element_label))
        return "\n".join(lines)
