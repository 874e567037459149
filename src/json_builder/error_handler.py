"""Error handling implementation for the JSON Builder."""

import logging
from typing import Optional
from .types import BuilderError, ErrorResponse, ErrorType, TimestampFormat


class ErrorHandler:
    """
    Error handler for JSON Builder operations.

    Turns schema and encoding failures into user-facing responses with a
    suggested action. Encoding is deterministic, so no error is retried.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def handle_builder_error(self, error: BuilderError) -> ErrorResponse:
        """
        Handle builder errors and provide a suggested action.

        Args:
            error: BuilderError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Builder error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.SCHEMA:
            return self._handle_schema_error(error)
        elif error.error_type == ErrorType.TIMESTAMP_FORMAT:
            return self._handle_timestamp_format_error(error)
        elif error.error_type == ErrorType.VALUE:
            return self._handle_value_error(error)
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                location=error.path
            )

    def _handle_schema_error(self, error: BuilderError) -> ErrorResponse:
        """Handle schema description errors."""
        return ErrorResponse(
            can_recover=False,
            suggested_action="Fix the schema description. Supported types are: "
                             "structure, list, map, string, integer, float, boolean, "
                             "timestamp, blob.",
            location=error.path
        )

    def _handle_timestamp_format_error(self, error: BuilderError) -> ErrorResponse:
        """Handle unknown timestamp_format metadata."""
        formats = ", ".join(f.value for f in TimestampFormat)
        return ErrorResponse(
            can_recover=False,
            suggested_action=f"Set metadata.timestamp_format to one of: {formats}.",
            location=error.path
        )

    def _handle_value_error(self, error: BuilderError) -> ErrorResponse:
        """Handle values that do not fit their shape."""
        return ErrorResponse(
            can_recover=False,
            suggested_action="Check that the input value matches the type declared "
                             "by its shape.",
            location=error.path
        )
