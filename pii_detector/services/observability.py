"""
Structured logging for the PII detector.
"""

import json
import logging
import os
import threading
import traceback
from collections import deque
from datetime import datetime, timezone
from typing import List, Optional

from ..models.config import LoggingConfig
from ..models.observability import LogLevel, LogContext, LogEntry, create_log_context


class StructuredLogger:
    """Structured logger with JSON output and context propagation."""

    def __init__(
        self,
        name: str = "pii_detector",
        level: LogLevel = LogLevel.INFO,
        log_format: str = "json",
        log_file: Optional[str] = None,
        max_entries: int = 1000
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Log level
            log_format: Log format ("json" or "text")
            log_file: Optional log file path
            max_entries: Number of recent entries kept for retrieval
        """
        self.name = name
        self.level = level
        self.log_format = log_format
        self.log_file = log_file

        # Thread-local storage for context
        self._local = threading.local()

        # Several instances may share one named logger. Each filters its own
        # level in log(), so the shared logger only ever lowers its threshold.
        self._logger = logging.getLogger(name)
        requested = getattr(logging, level.value)
        if self._logger.level == logging.NOTSET or requested < self._logger.level:
            self._logger.setLevel(requested)

        self._setup_handlers()

        self._log_entries: deque = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: LoggingConfig) -> "StructuredLogger":
        """Create a logger from a LoggingConfig."""
        return cls(
            name=config.logger_name,
            level=LogLevel(config.log_level.upper()),
            log_format=config.log_format,
            log_file=config.log_file
        )

    def _setup_handlers(self) -> None:
        """Attach console and file handlers the named logger does not have yet."""
        if self.log_format == "json":
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        existing = self._logger.handlers
        # FileHandler subclasses StreamHandler
        has_console = any(
            type(handler) is logging.StreamHandler for handler in existing
        )
        if not has_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        if self.log_file:
            log_path = os.path.abspath(self.log_file)
            has_file = any(
                isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path
                for handler in existing
            )
            if not has_file:
                file_handler = logging.FileHandler(self.log_file)
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)

    def set_context(self, context: LogContext) -> None:
        """Set logging context for current thread."""
        self._local.context = context

    def get_context(self) -> Optional[LogContext]:
        """Get logging context for current thread."""
        return getattr(self._local, 'context', None)

    def clear_context(self) -> None:
        """Clear logging context for current thread."""
        if hasattr(self._local, 'context'):
            delattr(self._local, 'context')

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        exception: Optional[BaseException] = None,
        **kwargs
    ) -> None:
        """
        Log a structured message.

        Args:
            level: Log level
            message: Log message
            context: Optional log context (uses thread-local if not provided)
            exception: Optional exception to log
            **kwargs: Additional context data
        """
        if self._should_skip_level(level):
            return

        if context is None:
            context = self.get_context()

        if context is None:
            context = create_log_context()

        if kwargs:
            context = LogContext(
                correlation_id=context.correlation_id,
                operation=context.operation,
                component=context.component,
                metadata={**context.metadata, **kwargs}
            )

        log_entry = LogEntry(
            timestamp=datetime.now(timezone.utc),
            level=level,
            message=message,
            context=context,
            logger_name=self.name,
            exception=self._format_exception(exception) if exception else None
        )

        with self._lock:
            self._log_entries.append(log_entry)

        python_level = getattr(logging, level.value)

        if self.log_format == "json":
            self._logger.log(python_level, json.dumps(log_entry.to_dict(), default=str))
        else:
            self._logger.log(python_level, self._format_text_message(log_entry))

    def _should_skip_level(self, level: LogLevel) -> bool:
        """Check if log level should be skipped."""
        return getattr(logging, level.value) < getattr(logging, self.level.value)

    def _format_exception(self, exception: BaseException) -> str:
        """Render an exception with its traceback."""
        return ''.join(traceback.format_exception(
            type(exception), exception, exception.__traceback__
        ))

    def _format_text_message(self, log_entry: LogEntry) -> str:
        """Format log entry for text output."""
        parts = [log_entry.message]

        if log_entry.context.correlation_id:
            parts.append(f"correlation_id={log_entry.context.correlation_id}")

        if log_entry.context.operation:
            parts.append(f"operation={log_entry.context.operation}")

        for key, value in log_entry.context.metadata.items():
            parts.append(f"{key}={value}")

        if log_entry.exception:
            parts.append(log_entry.exception.rstrip())

        return " | ".join(parts)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, exception: Optional[BaseException] = None, **kwargs) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, message, exception=exception, **kwargs)

    def get_recent_logs(self, limit: int = 100) -> List[LogEntry]:
        """Get recent log entries."""
        with self._lock:
            return list(self._log_entries)[-limit:]


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        message = record.getMessage()

        # Messages from StructuredLogger are already serialized
        if message.startswith('{'):
            return message

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": message,
            "logger": record.name,
            "thread_id": str(threading.get_ident()),
            "process_id": str(os.getpid())
        }

        return json.dumps(log_data)


def get_logger(config: Optional[LoggingConfig] = None) -> StructuredLogger:
    """Create a StructuredLogger from config, or with defaults."""
    return StructuredLogger.from_config(config or LoggingConfig())
