"""
Data models and configuration classes for the PII detector.
"""

from .config import DetectorConfig, LoggingConfig
from .file_format import FileFormat
from .observability import LogLevel, LogContext, LogEntry
from .rule import Rule

__all__ = [
    "DetectorConfig",
    "LoggingConfig",
    "FileFormat",
    "LogLevel",
    "LogContext",
    "LogEntry",
    "Rule",
]
