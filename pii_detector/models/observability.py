"""
Observability models for structured logging.
"""

import uuid
from datetime import datetime
from typing import Dict, Optional, Any
from dataclasses import dataclass, field
from enum import Enum


class LogLevel(Enum):
    """Log levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogContext:
    """Context information for structured logging."""

    correlation_id: str
    operation: Optional[str] = None
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert log context to dictionary."""
        return {
            "correlation_id": self.correlation_id,
            "operation": self.operation,
            "component": self.component,
            "metadata": self.metadata
        }


@dataclass
class LogEntry:
    """Structured log entry."""

    timestamp: datetime
    level: LogLevel
    message: str
    context: LogContext
    logger_name: str = "pii_detector"
    exception: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "message": self.message,
            "logger": self.logger_name,
            "exception": self.exception,
            **self.context.to_dict()
        }


def generate_correlation_id() -> str:
    """Generate a unique correlation ID."""
    return str(uuid.uuid4())


def create_log_context(
    correlation_id: Optional[str] = None,
    operation: Optional[str] = None,
    component: Optional[str] = None,
    **metadata
) -> LogContext:
    """Create a log context with optional parameters."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    return LogContext(
        correlation_id=correlation_id,
        operation=operation,
        component=component,
        metadata=dict(metadata)
    )
