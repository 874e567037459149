"""Tests for error handler."""

from json_builder.error_handler import ErrorHandler
from json_builder.types import (
    BuilderError,
    ErrorType,
    InvalidTimestampFormatError,
    SchemaError,
    ValueEncodingError
)


class TestErrorHandler:
    """Tests for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_handle_schema_error(self):
        error = SchemaError("Unrecognized shape type 'nope' at abc", context={"path": "abc"})

        response = self.error_handler.handle_builder_error(error)

        assert not response.can_recover
        assert "schema" in response.suggested_action.lower()
        assert response.location == "abc"

    def test_handle_timestamp_format_error(self):
        error = InvalidTimestampFormatError("oops", context={"path": "when"})

        response = self.error_handler.handle_builder_error(error)

        assert not response.can_recover
        assert "unixtimestamp" in response.suggested_action
        assert response.location == "when"

    def test_handle_value_error(self):
        error = ValueEncodingError("Expected list at items, got str", context={"path": "items"})

        response = self.error_handler.handle_builder_error(error)

        assert not response.can_recover
        assert "input value" in response.suggested_action
        assert response.location == "items"

    def test_error_without_context(self):
        response = self.error_handler.handle_builder_error(
            BuilderError("boom", ErrorType.VALUE))
        assert response.location is None


class TestBuilderErrors:
    """Tests for the error class hierarchy."""

    def test_schema_error_is_value_error(self):
        assert isinstance(SchemaError("bad"), ValueError)
        assert SchemaError("bad").error_type == ErrorType.SCHEMA

    def test_timestamp_error_message(self):
        error = InvalidTimestampFormatError("oops")

        assert "invalid timestamp" in str(error)
        assert error.timestamp_format == "oops"
        assert error.error_type == ErrorType.TIMESTAMP_FORMAT

    def test_value_error_is_type_error(self):
        assert isinstance(ValueEncodingError("bad"), TypeError)
