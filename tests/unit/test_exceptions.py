"""
Unit tests for the exception hierarchy.
"""

import pytest

from pii_detector.exceptions import (
    PIIDetectorException,
    InvalidInputException,
    UnsupportedFormatException,
    ExtractionFailedException,
    InvalidPatternException,
    EmptyPatternException,
    PatternSyntaxException,
    ConfigurationException
)


class TestExceptions:
    """Test cases for detector exceptions."""

    @pytest.mark.parametrize("exception_class", [
        InvalidInputException,
        UnsupportedFormatException,
        InvalidPatternException,
        EmptyPatternException,
        ConfigurationException,
    ])
    def test_hierarchy(self, exception_class):
        """Test every exception derives from the base exception."""
        error = exception_class("message", correlation_id="abc")

        assert isinstance(error, PIIDetectorException)
        assert error.correlation_id == "abc"
        assert str(error) == "message"

    def test_errors_are_distinguishable(self):
        """Test the four error kinds do not overlap."""
        unsupported = UnsupportedFormatException("nope", extension=".bmp")
        extraction = ExtractionFailedException("a.pdf")
        syntax = PatternSyntaxException("[")

        assert not isinstance(unsupported, (InvalidInputException, ExtractionFailedException))
        assert not isinstance(extraction, (InvalidInputException, UnsupportedFormatException))
        assert not isinstance(syntax, InvalidInputException)

    def test_empty_pattern_is_invalid_input(self):
        """Test an empty pattern is both an invalid pattern and invalid input."""
        error = EmptyPatternException("Pattern cannot be null or empty.")

        assert isinstance(error, InvalidPatternException)
        assert isinstance(error, InvalidInputException)

    def test_extraction_failed_carries_path_and_cause(self):
        """Test extraction failures keep the file path and cause."""
        cause = OSError("disk error")
        error = ExtractionFailedException("/data/a.xlsx", cause, correlation_id="abc")

        assert error.file_path == "/data/a.xlsx"
        assert error.cause is cause
        assert error.correlation_id == "abc"
        assert str(error) == "Failed to extract text from file: /data/a.xlsx (disk error)"

    def test_extraction_failed_without_cause(self):
        """Test the message without a cause."""
        error = ExtractionFailedException("/data/a.xlsx")

        assert str(error) == "Failed to extract text from file: /data/a.xlsx"
        assert error.cause is None

    def test_pattern_syntax_carries_pattern(self):
        """Test pattern syntax errors keep the pattern."""
        cause = ValueError("unterminated character set")
        error = PatternSyntaxException("[abc", cause)

        assert error.pattern == "[abc"
        assert error.cause is cause
        assert "Invalid regex pattern: '[abc'" in str(error)
