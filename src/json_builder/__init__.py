"""
JSON Builder - Shape-directed JSON encoding.

Encodes in-memory value trees as compact JSON, directed by a declarative
schema of structures, lists, maps and scalar types.
"""

__version__ = "1.0.0"

from .models import Shape
from .types import (
    ShapeType,
    TimestampFormat,
    BuilderError,
    SchemaError,
    InvalidTimestampFormatError,
    ValueEncodingError,
)
from .json_builder import JSONBuilder, encode
from .shape_loader import ShapeLoader

build_shape = Shape.from_dict

__all__ = [
    "JSONBuilder",
    "ShapeLoader",
    "Shape",
    "ShapeType",
    "TimestampFormat",
    "BuilderError",
    "SchemaError",
    "InvalidTimestampFormatError",
    "ValueEncodingError",
    "build_shape",
    "encode",
]
