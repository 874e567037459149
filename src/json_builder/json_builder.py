"""Main JSON Builder implementation: shape-directed JSON encoding."""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, Optional
from .types import (
    JSONBuilderInterface,
    ShapeType,
    TimestampFormat,
    ValueEncodingError
)
from .models import Shape
from .encoders import ScalarEncoder, TimestampEncoder
from .profiler import PerformanceProfiler


class JSONBuilder(JSONBuilderInterface):
    """
    Encodes value trees as compact JSON, directed by a Shape tree.

    Structures act as projections: members are emitted in shape order
    under their output names, missing members are omitted and input keys
    the shape does not declare are dropped. The builder holds no per-call
    state, so one instance may serve concurrent callers.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 ensure_ascii: bool = False,
                 default_timestamp_format: TimestampFormat = TimestampFormat.ISO8601,
                 enable_profiling: bool = False):
        """
        Initialize the JSON Builder.

        Args:
            logger: Optional logger instance
            ensure_ascii: Escape non-ASCII characters in the output
            default_timestamp_format: Format for timestamp shapes without
                timestamp_format metadata
            enable_profiling: Record metrics for every to_json call
        """
        self.logger = logger or logging.getLogger(__name__)
        self.ensure_ascii = ensure_ascii
        self.default_timestamp_format = default_timestamp_format

        self.scalar_encoder = ScalarEncoder(self.logger)
        self.timestamp_encoder = TimestampEncoder(default_timestamp_format, self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

        self._formatters: Dict[ShapeType, Callable[[Shape, Any, str], Any]] = {
            ShapeType.STRUCTURE: self._structure,
            ShapeType.LIST: self._list,
            ShapeType.MAP: self._map,
            ShapeType.TIMESTAMP: self.timestamp_encoder.encode,
        }

    def to_json(self, shape: Shape, params: Any) -> str:
        """
        Encode ``params`` against ``shape``.

        Args:
            shape: Root shape, usually a structure
            params: Value tree to encode

        Returns:
            Compact JSON text

        Raises:
            InvalidTimestampFormatError: If a timestamp shape declares an
                unknown timestamp_format
            ValueEncodingError: If a value does not fit its shape
        """
        if self.profiler is None:
            return self._dump(self.format(shape, params))

        with self.profiler.profile_operation("to_json") as session:
            json_string = self._dump(self.format(shape, params))
            session.record_output(len(json_string.encode("utf-8")))
        return json_string

    def format(self, shape: Shape, value: Any, path: str = "") -> Any:
        """
        Convert a value to its JSON-ready Python form.

        Args:
            shape: Shape describing ``value``
            value: Value to convert
            path: Dotted location of ``value`` in the tree

        Returns:
            Plain dicts, lists and scalars ready for json.dumps
        """
        formatter = self._formatters.get(shape.type, self.scalar_encoder.encode)
        return formatter(shape, value, path)

    def _structure(self, shape: Shape, values: Any, path: str) -> Dict[str, Any]:
        if not isinstance(values, Mapping):
            raise self._mismatch("structure", values, path)

        data: Dict[str, Any] = {}
        for member_name, member_shape in shape.members.items():
            value = values.get(member_name)
            if value is None:
                continue
            data[member_shape.output_name] = self.format(
                member_shape, value, self._join(path, member_name))

        if self.logger.isEnabledFor(logging.DEBUG):
            dropped = [key for key in values if key not in shape.members]
            if dropped:
                self.logger.debug(f"Dropped undeclared keys at {path or '<root>'}: {dropped}")
        return data

    def _list(self, shape: Shape, values: Any, path: str) -> List[Any]:
        if not isinstance(values, Sequence) or isinstance(values, (str, bytes, bytearray)):
            raise self._mismatch("list", values, path)
        return [
            self.format(shape.member, value, f"{path}[{index}]")
            for index, value in enumerate(values)
        ]

    def _map(self, shape: Shape, values: Any, path: str) -> Dict[str, Any]:
        if not isinstance(values, Mapping):
            raise self._mismatch("map", values, path)

        data: Dict[str, Any] = {}
        for key, value in values.items():
            if not isinstance(key, str):
                raise ValueEncodingError(
                    f"Map keys must be strings at {path}, got {type(key).__name__}",
                    context={"path": path, "key": key}
                )
            data[key] = self.format(shape.member, value, self._join(path, key))
        return data

    def _dump(self, data: Any) -> str:
        try:
            return json.dumps(data, separators=(",", ":"),
                              ensure_ascii=self.ensure_ascii, allow_nan=False)
        except ValueError as e:
            raise ValueEncodingError(f"Output is not valid JSON: {e}")

    @staticmethod
    def _join(path: str, part: str) -> str:
        return f"{path}.{part}" if path else part

    @staticmethod
    def _mismatch(expected: str, value: Any, path: str) -> ValueEncodingError:
        return ValueEncodingError(
            f"Expected {expected} at {path or '<root>'}, got {type(value).__name__}",
            context={"path": path, "expected": expected}
        )


_default_builder = JSONBuilder()


def encode(shape: Shape, params: Any) -> str:
    """Encode ``params`` against ``shape`` with a default JSONBuilder."""
    return _default_builder.to_json(shape, params)
