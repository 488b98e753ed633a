"""
Configuration classes for the PII detector.
"""

import codecs
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from ..exceptions import ConfigurationException


@dataclass
class LoggingConfig:
    """Logging configuration for the detector."""

    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None
    logger_name: str = "pii_detector"

    def validate(self) -> None:
        """Validate logging configuration parameters."""
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ConfigurationException(
                f"Invalid log_level '{self.log_level}'. Must be one of: {valid_log_levels}"
            )

        valid_log_formats = ["json", "text"]
        if self.log_format not in valid_log_formats:
            raise ConfigurationException(
                f"Invalid log_format '{self.log_format}'. Must be one of: {valid_log_formats}"
            )

        if not self.logger_name:
            raise ConfigurationException("logger_name cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert logging config to dictionary."""
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
            "logger_name": self.logger_name,
        }


@dataclass
class DetectorConfig:
    """Main configuration class for the PII detector."""

    # Patterns appended after the built-in rules
    custom_patterns: List[str] = field(default_factory=list)

    # Encoding used for plain-text formats
    text_encoding: str = "utf-8"

    logging: Optional[LoggingConfig] = None

    def __post_init__(self):
        """Initialize default configurations and validate."""
        if self.logging is None:
            self.logging = LoggingConfig()

        self.validate()

    def validate(self) -> None:
        """Validate the complete configuration."""
        if not isinstance(self.custom_patterns, list):
            raise ConfigurationException("custom_patterns must be a list of strings")

        for pattern in self.custom_patterns:
            if not isinstance(pattern, str) or not pattern:
                raise ConfigurationException(
                    f"custom_patterns entries must be non-empty strings, got {pattern!r}"
                )

        if not self.text_encoding:
            raise ConfigurationException("text_encoding cannot be empty")

        try:
            codecs.lookup(self.text_encoding)
        except LookupError:
            raise ConfigurationException(
                f"Unknown text_encoding '{self.text_encoding}'"
            )

        if self.logging:
            self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        config_dict = {
            "custom_patterns": list(self.custom_patterns),
            "text_encoding": self.text_encoding,
        }

        if self.logging:
            config_dict["logging"] = self.logging.to_dict()

        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "DetectorConfig":
        """Create configuration from dictionary."""
        config_dict = dict(config_dict)

        logging_config = None
        if "logging" in config_dict:
            logging_config = LoggingConfig(**config_dict.pop("logging"))

        return cls(logging=logging_config, **config_dict)
