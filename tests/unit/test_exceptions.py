"""Tests for bottleneckiq.exceptions."""

from bottleneckiq.exceptions import (
    BottleneckIQError,
    ExtractionError,
    InvalidInputError,
    ValidationError,
)


class TestBottleneckIQError:
    def test_message(self):
        e = BottleneckIQError("technical error")
        assert str(e) == "technical error"

    def test_user_message_default(self):
        e = BottleneckIQError("technical error")
        assert e.user_message == "technical error"

    def test_user_message_custom(self):
        e = BottleneckIQError("technical error", user_message="Something went wrong")
        assert e.user_message == "Something went wrong"


class TestInvalidInputError:
    def test_fields(self):
        e = InvalidInputError("Empty batch", field="tasks", value="[]")
        assert e.field == "tasks"
        assert e.value == "[]"

    def test_defaults(self):
        e = InvalidInputError("Error")
        assert e.field is None
        assert e.value is None

    def test_inherits(self):
        assert issubclass(InvalidInputError, BottleneckIQError)


class TestExtractionError:
    def test_source(self):
        e = ExtractionError("Bad file", source="upload.csv")
        assert e.source == "upload.csv"

    def test_inherits(self):
        assert issubclass(ExtractionError, BottleneckIQError)


class TestValidationError:
    def test_fields(self):
        e = ValidationError("Bad value", field="queue_wait_time", value="-3")
        assert e.field == "queue_wait_time"
        assert e.value == "-3"

    def test_inherits(self):
        assert issubclass(ValidationError, BottleneckIQError)
