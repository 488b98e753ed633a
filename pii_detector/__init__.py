"""
PII Detector - regex-based detection of Personally Identifiable Information.

This package checks text, or text extracted from common document formats,
for substrings that look like emails, phone numbers, national identifiers,
payment cards, addresses and similar personal data.
"""

from .detector import PIIDetector
from .models import DetectorConfig, LoggingConfig, FileFormat, Rule
from .services import PatternSet, ExtractionDispatcher, TextExtractor
from .factory import (
    ExtractorFactory,
    PatternSetFactory,
    DispatcherFactory,
    LoggerFactory
)
from .exceptions import (
    PIIDetectorException,
    InvalidInputException,
    UnsupportedFormatException,
    ExtractionFailedException,
    InvalidPatternException,
    EmptyPatternException,
    PatternSyntaxException,
    ConfigurationException
)

__version__ = "0.1.0"
__author__ = "PII Detector Team"

__all__ = [
    "PIIDetector",
    "DetectorConfig",
    "LoggingConfig",
    "FileFormat",
    "Rule",
    "PatternSet",
    "ExtractionDispatcher",
    "TextExtractor",
    "ExtractorFactory",
    "PatternSetFactory",
    "DispatcherFactory",
    "LoggerFactory",
    "PIIDetectorException",
    "InvalidInputException",
    "UnsupportedFormatException",
    "ExtractionFailedException",
    "InvalidPatternException",
    "EmptyPatternException",
    "PatternSyntaxException",
    "ConfigurationException",
]
