"""
Main PIIDetector entry point that composes the pattern set and extraction dispatcher.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .models.config import DetectorConfig
from .models.observability import generate_correlation_id
from .services.dispatcher import ExtractionDispatcher
from .services.observability import StructuredLogger
from .services.pattern_set import PatternSet
from .factory import (
    PatternSetFactory,
    DispatcherFactory,
    LoggerFactory
)


class PIIDetector:
    """
    Detects Personally Identifiable Information in text or files.

    Text is checked against an ordered set of regular expressions and the
    result is a plain yes/no. Files are first flattened to text by a
    format-specific extractor chosen from the file extension.
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        """
        Initialize the detector.

        Args:
            config: Detector configuration; defaults are used when omitted
        """
        self.config = config or DetectorConfig()

        self.logger: StructuredLogger = LoggerFactory.create_logger(self.config)
        self.pattern_set: PatternSet = PatternSetFactory.create_pattern_set(
            self.config, logger=self.logger
        )
        self.dispatcher: ExtractionDispatcher = DispatcherFactory.create_dispatcher(
            self.config, self.pattern_set, logger=self.logger
        )

    def contains_pii(self, text: Optional[str]) -> bool:
        """
        Determine whether the text contains anything resembling PII.

        Args:
            text: Text to check; None or empty returns False

        Returns:
            True if any rule matches
        """
        return self.pattern_set.matches(text)

    def contains_pii_from_file(self, file_path: Union[str, Path, None]) -> bool:
        """
        Determine whether a file contains anything resembling PII.

        Args:
            file_path: Path to the file to check

        Returns:
            True if any rule matches the file's extracted text

        Raises:
            InvalidInputException: If the path is empty or the file does not exist
            UnsupportedFormatException: If the file extension is not supported
            ExtractionFailedException: If text extraction from the file fails
        """
        return self.dispatcher.detect(file_path, correlation_id=generate_correlation_id())

    def add_pattern(self, pattern: Optional[str]) -> None:
        """
        Add a custom regex pattern to the detection rules.

        Args:
            pattern: Regular expression in Python ``re`` syntax

        Raises:
            InvalidPatternException: If the pattern is empty or invalid
        """
        self.pattern_set.add_pattern(pattern)

    def get_detector_info(self) -> Dict[str, Any]:
        """
        Get information about the detector configuration.

        Returns:
            Dictionary containing detector information
        """
        return {
            "rule_count": len(self.pattern_set),
            "custom_patterns": list(self.pattern_set.custom_patterns),
            "supported_extensions": self.dispatcher.get_supported_extensions(),
            "config": self.config.to_dict(),
        }

    def health_check(self) -> bool:
        """
        Check if the detector is healthy.

        Returns:
            True if the pattern set detects a known email address
        """
        return self.pattern_set.health_check()

    def __str__(self) -> str:
        """String representation of the detector."""
        return f"PIIDetector(rules={len(self.pattern_set)})"

    def __repr__(self) -> str:
        """Detailed string representation of the detector."""
        return (
            f"PIIDetector(rules={len(self.pattern_set)}, "
            f"custom={len(self.pattern_set.custom_patterns)}, "
            f"extensions={len(self.dispatcher.get_supported_extensions())})"
        )
