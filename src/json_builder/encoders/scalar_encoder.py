"""Scalar codecs for string, number, boolean and blob shapes."""

import base64
import logging
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union
from ..models import Shape
from ..types import ScalarEncoderInterface, ShapeType, ValueEncodingError


class ScalarEncoder(ScalarEncoderInterface):
    """
    Encoder for non-timestamp scalar shapes.

    Converts each scalar to the Python value whose ``json.dumps`` form is
    the wire representation for its shape type.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the scalar encoder.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._codecs: Dict[ShapeType, Callable[[Any, str], Any]] = {
            ShapeType.STRING: self.encode_string,
            ShapeType.INTEGER: self.encode_integer,
            ShapeType.FLOAT: self.encode_float,
            ShapeType.BOOLEAN: self.encode_boolean,
            ShapeType.BLOB: self.encode_blob,
        }

    def encode(self, shape: Shape, value: Any, path: str) -> Any:
        """
        Encode a scalar value according to its shape type.

        Args:
            shape: Scalar shape
            value: Value to encode
            path: Dotted member path for error reporting

        Returns:
            JSON-ready Python value
        """
        codec = self._codecs.get(shape.type)
        if codec is None:
            raise ValueEncodingError(f"No scalar codec for shape type {shape.type.value} at {path}",
                                     context={"path": path})
        return codec(value, path)

    def encode_string(self, value: Any, path: str) -> str:
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, str):
            raise self._mismatch("string", value, path)
        return value

    def encode_integer(self, value: Any, path: str) -> int:
        if isinstance(value, bool):
            raise self._mismatch("integer", value, path)
        if isinstance(value, int):
            return value
        if not isinstance(value, (float, Decimal)):
            raise self._mismatch("integer", value, path)
        try:
            number = int(value)
        except (ValueError, OverflowError):
            raise self._mismatch("integer", value, path)
        # integral floats only; 12.7 must not become 12
        if number != value:
            raise ValueEncodingError(f"Integer at {path} has a fractional part: {value!r}",
                                     context={"path": path, "expected": "integer"})
        return number

    def encode_float(self, value: Any, path: str) -> Union[int, float]:
        if isinstance(value, bool):
            raise self._mismatch("float", value, path)
        if isinstance(value, int):
            return value
        try:
            number = float(value) if isinstance(value, (Decimal, str)) else value
        except ValueError:
            raise self._mismatch("float", value, path)
        if not isinstance(number, float):
            raise self._mismatch("float", value, path)
        if not math.isfinite(number):
            raise ValueEncodingError(f"Non-finite float {value!r} at {path} is not valid JSON",
                                     context={"path": path})
        return number

    def encode_boolean(self, value: Any, path: str) -> bool:
        if not isinstance(value, bool):
            raise self._mismatch("boolean", value, path)
        return value

    def encode_blob(self, value: Any, path: str) -> str:
        """
        Base64-encode a raw byte payload.

        Accepts bytes-like values, text (encoded as UTF-8) and readable
        file-like objects.
        """
        if hasattr(value, "read"):
            value = value.read()
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise self._mismatch("blob", value, path)
        return base64.b64encode(bytes(value)).decode("ascii")

    @staticmethod
    def _mismatch(expected: str, value: Any, path: str) -> ValueEncodingError:
        return ValueEncodingError(
            f"Expected {expected} at {path}, got {type(value).__name__}",
            context={"path": path, "expected": expected}
        )
