"""Core type definitions for the JSON Builder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ShapeType(Enum):
    """Enumeration of supported shape types."""
    STRUCTURE = "structure"
    LIST = "list"
    MAP = "map"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    BLOB = "blob"

    @property
    def is_scalar(self) -> bool:
        """Whether this type is a leaf (non-container) type."""
        return self not in (ShapeType.STRUCTURE, ShapeType.LIST, ShapeType.MAP)

    @classmethod
    def from_tag(cls, tag: Any) -> Optional['ShapeType']:
        """
        Resolve a schema type tag to a ShapeType.

        Args:
            tag: The ``type`` value from a schema description

        Returns:
            The matching ShapeType, or None if the tag is not recognized
        """
        if not isinstance(tag, str):
            return None
        tag = SHAPE_TYPE_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return None


# Smithy/botocore type names that share a JSON encoding with a core type
SHAPE_TYPE_ALIASES: Dict[str, str] = {
    "long": "integer",
    "double": "float",
}


class TimestampFormat(Enum):
    """Enumeration of timestamp wire formats."""
    ISO8601 = "iso8601"
    RFC822 = "rfc822"
    UNIX_TIMESTAMP = "unixtimestamp"


class ErrorType(Enum):
    """Enumeration of error types."""
    SCHEMA = "schema"
    TIMESTAMP_FORMAT = "timestamp_format"
    VALUE = "value"


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    location: Optional[str] = None


@dataclass
class EncodeResult:
    """Result of an encode operation run through the CLI."""
    success: bool
    json_string: str
    output_size: int = 0
    error: Optional[str] = None


class BuilderError(Exception):
    """Base exception for schema and encoding failures."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context or {}

    @property
    def path(self) -> Optional[str]:
        """Dotted member path where the error occurred, if known."""
        return self.context.get("path")


class SchemaError(BuilderError, ValueError):
    """Raised when a schema description cannot be turned into a Shape."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.SCHEMA, context)


class InvalidTimestampFormatError(BuilderError, ValueError):
    """Raised when a timestamp shape declares an unknown timestamp_format."""

    def __init__(self, timestamp_format: Any, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"invalid timestamp format: {timestamp_format!r}",
                         ErrorType.TIMESTAMP_FORMAT, context)
        self.timestamp_format = timestamp_format


class ValueEncodingError(BuilderError, TypeError):
    """Raised when a value cannot be encoded against its shape."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.VALUE, context)


# Abstract base classes for interfaces

class JSONBuilderInterface(ABC):
    """Abstract interface for the JSON Builder."""

    @abstractmethod
    def to_json(self, shape: Any, params: Any) -> str:
        """Encode a value tree against a shape as compact JSON text."""
        pass


class ScalarEncoderInterface(ABC):
    """Abstract interface for scalar codecs."""

    @abstractmethod
    def encode(self, shape: Any, value: Any, path: str) -> Any:
        """Convert a scalar value to its JSON-ready Python form."""
        pass
