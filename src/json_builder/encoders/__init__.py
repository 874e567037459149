"""Scalar codecs for the JSON Builder."""

from .scalar_encoder import ScalarEncoder
from .timestamp_encoder import TimestampEncoder

__all__ = ["ScalarEncoder", "TimestampEncoder"]
