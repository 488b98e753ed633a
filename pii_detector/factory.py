"""
Factory classes for creating detector components based on configuration.
"""

from typing import Dict, List, Type, Optional
from .models.config import DetectorConfig
from .models.file_format import FileFormat
from .services.extractors import (
    TextExtractor,
    PlainTextExtractor,
    JsonTextExtractor,
    XlsxTextExtractor,
    PdfTextExtractor,
    DocxTextExtractor
)
from .services.observability import StructuredLogger, get_logger
from .services.pattern_set import PatternSet
from .services.dispatcher import ExtractionDispatcher
from .exceptions import ConfigurationException, InvalidPatternException


class ExtractorFactory:
    """Factory for creating text extractors by format tag."""

    # Registry of available extractor implementations
    _extractor_registry: Dict[FileFormat, Type[TextExtractor]] = {
        FileFormat.TEXT: PlainTextExtractor,
        FileFormat.JSON: JsonTextExtractor,
        FileFormat.XLSX: XlsxTextExtractor,
        FileFormat.PDF: PdfTextExtractor,
        FileFormat.DOCX: DocxTextExtractor,
    }

    # Extractors that decode text themselves and take an encoding
    _encoded_formats = (FileFormat.TEXT, FileFormat.JSON)

    @classmethod
    def create_extractor(
        cls,
        file_format: FileFormat,
        config: Optional[DetectorConfig] = None
    ) -> TextExtractor:
        """
        Create a text extractor for a format.

        Args:
            file_format: Format tag to extract
            config: Optional detector configuration

        Returns:
            Text extractor instance

        Raises:
            ConfigurationException: If no extractor is registered for the format
        """
        if file_format not in cls._extractor_registry:
            available_formats = [f.value for f in cls._extractor_registry]
            raise ConfigurationException(
                f"Unsupported file format '{file_format}'. "
                f"Available formats: {available_formats}"
            )

        extractor_class = cls._extractor_registry[file_format]

        if file_format in cls._encoded_formats:
            encoding = config.text_encoding if config else "utf-8"
            return extractor_class(encoding=encoding)

        return extractor_class()

    @classmethod
    def create_all(cls, config: Optional[DetectorConfig] = None) -> Dict[FileFormat, TextExtractor]:
        """Create one extractor per registered format."""
        return {
            file_format: cls.create_extractor(file_format, config)
            for file_format in cls._extractor_registry
        }

    @classmethod
    def get_available_formats(cls) -> List[FileFormat]:
        """Get list of formats with a registered extractor."""
        return list(cls._extractor_registry.keys())


class PatternSetFactory:
    """Factory for creating pattern sets based on configuration."""

    @classmethod
    def create_pattern_set(
        cls,
        config: DetectorConfig,
        logger: Optional[StructuredLogger] = None
    ) -> PatternSet:
        """
        Create a pattern set with the built-in rules plus configured custom patterns.

        Raises:
            ConfigurationException: If a configured custom pattern is invalid
        """
        pattern_set = PatternSet(logger=logger)

        for pattern in config.custom_patterns:
            try:
                pattern_set.add_pattern(pattern)
            except InvalidPatternException as e:
                raise ConfigurationException(
                    f"Invalid custom pattern {pattern!r}: {str(e)}"
                ) from e

        return pattern_set


class LoggerFactory:
    """Factory for creating the structured logger."""

    @classmethod
    def create_logger(cls, config: DetectorConfig) -> StructuredLogger:
        """Create a structured logger from the detector's logging config."""
        return get_logger(config.logging)


class DispatcherFactory:
    """Factory for creating the extraction dispatcher."""

    @classmethod
    def create_dispatcher(
        cls,
        config: DetectorConfig,
        pattern_set: PatternSet,
        logger: Optional[StructuredLogger] = None
    ) -> ExtractionDispatcher:
        """Create a dispatcher with one extractor per supported format."""
        return ExtractionDispatcher(
            pattern_set=pattern_set,
            extractors=ExtractorFactory.create_all(config),
            logger=logger
        )
