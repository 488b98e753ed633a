"""
Exception hierarchy for the PII detector.
"""

from typing import Optional


class PIIDetectorException(Exception):
    """Base exception for PII detector operations."""

    def __init__(self, message: str, correlation_id: Optional[str] = None):
        super().__init__(message)
        self.correlation_id = correlation_id


class InvalidInputException(PIIDetectorException):
    """Raised when a file path is missing or does not exist."""
    pass


class UnsupportedFormatException(PIIDetectorException):
    """Raised when a file extension is not in the supported allow-list."""

    def __init__(
        self,
        message: str,
        extension: str = "",
        correlation_id: Optional[str] = None
    ):
        super().__init__(message, correlation_id)
        self.extension = extension


class ExtractionFailedException(PIIDetectorException):
    """Raised when text extraction from a file fails."""

    def __init__(
        self,
        file_path: str,
        cause: Optional[BaseException] = None,
        correlation_id: Optional[str] = None
    ):
        message = f"Failed to extract text from file: {file_path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message, correlation_id)
        self.file_path = file_path
        self.cause = cause


class InvalidPatternException(PIIDetectorException):
    """Raised when a custom pattern cannot be added."""
    pass


class EmptyPatternException(InvalidPatternException, InvalidInputException):
    """Raised when a custom pattern is None or empty."""
    pass


class PatternSyntaxException(InvalidPatternException):
    """Raised when a custom pattern does not compile."""

    def __init__(
        self,
        pattern: str,
        cause: Optional[BaseException] = None,
        correlation_id: Optional[str] = None
    ):
        message = f"Invalid regex pattern: {pattern!r}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message, correlation_id)
        self.pattern = pattern
        self.cause = cause


class ConfigurationException(PIIDetectorException):
    """Raised when configuration is invalid."""
    pass
