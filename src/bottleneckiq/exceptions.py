"""Custom exceptions for BottleneckIQ.

Exception hierarchy:
- BottleneckIQError (base)
  - InvalidInputError: Caller supplied input the analytics core cannot use
  - ExtractionError: Failed to read/parse task data from a file
  - ValidationError: Task data failed validation
"""


class BottleneckIQError(Exception):
    """Base exception for all BottleneckIQ errors."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        """Initialize with technical message and optional user-friendly message.

        Args:
            message: Technical error message for logging/debugging.
            user_message: Human-readable message for UI display.
                         If None, uses the technical message.
        """
        super().__init__(message)
        self.user_message = user_message or message


class InvalidInputError(BottleneckIQError):
    """Raised when the analytics core receives unusable input.

    Example: Empty task collection, unknown preset scenario id.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.field = field
        self.value = value


class ExtractionError(BottleneckIQError):
    """Raised when task data extraction from input fails.

    Example: CSV parsing failed, Excel file is corrupted.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.source = source


class ValidationError(BottleneckIQError):
    """Raised when task data validation fails.

    Example: Negative queue times, missing required columns.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.field = field
        self.value = value
