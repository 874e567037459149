"""Timestamp codec: UTC normalization and wire formatting."""

import calendar
import logging
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional, Union
from ..models import Shape
from ..types import (
    ScalarEncoderInterface,
    InvalidTimestampFormatError,
    TimestampFormat,
    ValueEncodingError
)


class TimestampEncoder(ScalarEncoderInterface):
    """
    Encoder for timestamp shapes.

    Every value is converted to a UTC instant first and then rendered
    according to the shape's ``timestamp_format`` metadata.
    """

    def __init__(self, default_format: TimestampFormat = TimestampFormat.ISO8601,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the timestamp encoder.

        Args:
            default_format: Format used when a shape declares none
            logger: Optional logger instance
        """
        self.default_format = default_format
        self.logger = logger or logging.getLogger(__name__)

    def encode(self, shape: Shape, value: Any, path: str) -> Union[str, int]:
        """
        Encode a timestamp value.

        Args:
            shape: Timestamp shape carrying optional format metadata
            value: datetime, date, epoch seconds or ISO-8601 string
            path: Dotted member path for error reporting

        Returns:
            Formatted string, or integer epoch seconds for unixtimestamp

        Raises:
            InvalidTimestampFormatError: If the declared format is unknown
            ValueEncodingError: If the value cannot be read as an instant
        """
        timestamp_format = shape.resolved_timestamp_format(self.default_format)
        if timestamp_format is None:
            raise InvalidTimestampFormatError(shape.timestamp_format, context={"path": path})

        instant = self.to_utc(value, path)
        return self.format(instant, timestamp_format)

    @staticmethod
    def format(instant: datetime, timestamp_format: TimestampFormat) -> Union[str, int]:
        """
        Render a UTC instant in the given wire format.

        Args:
            instant: Timezone-aware datetime in UTC
            timestamp_format: Target format

        Returns:
            Formatted representation
        """
        if timestamp_format == TimestampFormat.ISO8601:
            return instant.replace(microsecond=0, tzinfo=None).isoformat() + "Z"
        elif timestamp_format == TimestampFormat.RFC822:
            return format_datetime(instant.replace(microsecond=0, tzinfo=None))
        else:  # UNIX_TIMESTAMP
            return calendar.timegm(instant.utctimetuple())

    @staticmethod
    def to_utc(value: Any, path: str = "") -> datetime:
        """
        Normalize a timestamp-like value to an aware UTC datetime.

        Naive datetimes are read as local time. Naive ISO-8601 strings
        are read as UTC.

        Args:
            value: Value to normalize
            path: Dotted member path for error reporting

        Returns:
            datetime with tzinfo set to UTC

        Raises:
            ValueEncodingError: If the value is not a recognizable instant
        """
        if isinstance(value, datetime):
            return value.astimezone(timezone.utc)

        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as e:
                raise ValueEncodingError(f"Epoch value {value!r} at {path} is out of range: {e}",
                                         context={"path": path})

        if isinstance(value, str):
            text = value.strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                raise ValueEncodingError(f"Cannot parse timestamp {value!r} at {path}",
                                         context={"path": path})
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)

        raise ValueEncodingError(
            f"Expected a timestamp at {path}, got {type(value).__name__}",
            context={"path": path}
        )
