"""Shape loader: materializes and reuses Shape trees."""

import json
import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Any, Mapping, Optional, Union
from .models import Shape
from .types import SchemaError


ShapeSource = Union[Shape, Mapping[str, Any], str, Path]


class ShapeLoader:
    """
    Loads schema descriptions and caches the resulting Shape trees.

    Descriptions that serialize to the same compact JSON share one
    Shape instance, which is safe because shapes are immutable. The
    least recently used shape is evicted once the cache is full.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_cache_size: int = 128):
        """
        Initialize the shape loader.

        Args:
            logger: Optional logger instance
            max_cache_size: Maximum number of cached shapes
        """
        if max_cache_size < 1:
            raise ValueError("max_cache_size must be positive")
        self.logger = logger or logging.getLogger(__name__)
        self.max_cache_size = max_cache_size
        self._cache: "OrderedDict[str, Shape]" = OrderedDict()
        self._lock = threading.Lock()

    def load(self, source: ShapeSource) -> Shape:
        """
        Load a Shape from a description, JSON text or JSON file.

        Args:
            source: Shape, mapping, JSON string, or Path to a JSON file

        Returns:
            Shape instance

        Raises:
            SchemaError: If the source cannot be read or built
        """
        if isinstance(source, Shape):
            return source
        if isinstance(source, Path):
            return self.load_file(source)
        if isinstance(source, str):
            return self.load_string(source)
        return self.build(source)

    def load_file(self, path: Path) -> Shape:
        """Load a schema description from a JSON file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaError(f"Cannot read schema file {path}: {e}", context={"file": str(path)})
        self.logger.debug(f"Loaded schema file {path}")
        return self.load_string(text)

    def load_string(self, text: str) -> Shape:
        """Load a schema description from JSON text."""
        try:
            description = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Schema is not valid JSON: {e.msg} at line {e.lineno}, column {e.colno}")
        return self.build(description)

    def build(self, description: Mapping[str, Any]) -> Shape:
        """
        Build a Shape, reusing a cached one for an equal description.

        Args:
            description: Schema description mapping

        Returns:
            Shape instance
        """
        cache_key = self._cache_key(description)
        if cache_key is None:
            return Shape.from_dict(description)

        with self._lock:
            cached = self._cache.get(cache_key)
            if cached is not None:
                self._cache.move_to_end(cache_key)
        if cached is not None:
            self.logger.debug("Reusing cached shape")
            return cached

        shape = Shape.from_dict(description)
        with self._lock:
            shape = self._cache.setdefault(cache_key, shape)
            self._cache.move_to_end(cache_key)
            while len(self._cache) > self.max_cache_size:
                self._cache.popitem(last=False)
            cached_count = len(self._cache)
        self.logger.info(f"Materialized {shape.type.value} shape ({cached_count} cached)")
        return shape

    @property
    def cache_size(self) -> int:
        """Number of cached shapes."""
        with self._lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        """Drop all cached shapes."""
        with self._lock:
            self._cache.clear()

    @staticmethod
    def _cache_key(description: Any) -> Optional[str]:
        try:
            return json.dumps(description, separators=(",", ":"))
        except (TypeError, ValueError):
            return None
