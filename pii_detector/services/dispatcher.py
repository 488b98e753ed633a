"""
Extraction dispatcher that routes files to text extractors by extension.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..models.file_format import (
    EXTENSION_FORMATS,
    FileFormat,
    format_for_path,
    get_extension
)
from ..models.observability import LogContext, create_log_context
from ..exceptions import (
    InvalidInputException,
    UnsupportedFormatException,
    ExtractionFailedException
)
from .extractors import TextExtractor
from .pattern_set import PatternSet
from .observability import StructuredLogger


class ExtractionDispatcher:
    """Selects an extractor by file extension and scans the extracted text."""

    def __init__(
        self,
        pattern_set: PatternSet,
        extractors: Dict[FileFormat, TextExtractor],
        logger: Optional[StructuredLogger] = None
    ):
        """
        Initialize the dispatcher.

        Args:
            pattern_set: Pattern set used to scan extracted text
            extractors: Extractor for each supported format
            logger: Optional structured logger
        """
        self.pattern_set = pattern_set
        self.extractors = dict(extractors)
        self.logger = logger

    def detect(
        self,
        file_path: Union[str, Path, None],
        correlation_id: Optional[str] = None
    ) -> bool:
        """
        Check whether a file contains PII.

        Args:
            file_path: Path to the file to scan
            correlation_id: Optional correlation ID attached to logs and errors

        Returns:
            True if any rule matches the extracted text

        Raises:
            InvalidInputException: If the path is empty or the file does not exist
            UnsupportedFormatException: If the extension is not supported
            ExtractionFailedException: If text extraction fails
        """
        context = create_log_context(
            correlation_id=correlation_id,
            operation="detect",
            component="dispatcher"
        )

        text = self.extract_text(file_path, correlation_id=context.correlation_id)
        result = self.pattern_set.matches(text)

        if self.logger:
            self.logger.info(
                "Scanned file",
                context=context,
                file_path=str(file_path),
                text_length=len(text),
                contains_pii=result
            )

        return result

    def extract_text(
        self,
        file_path: Union[str, Path, None],
        correlation_id: Optional[str] = None
    ) -> str:
        """
        Extract the text of a file without scanning it.

        Raises:
            InvalidInputException: If the path is empty or the file does not exist
            UnsupportedFormatException: If the extension is not supported
            ExtractionFailedException: If text extraction fails
        """
        context = create_log_context(
            correlation_id=correlation_id,
            operation="extract_text",
            component="dispatcher"
        )

        file_format = self.resolve_format(file_path, correlation_id=context.correlation_id)
        extractor = self.extractors[file_format]

        if self.logger:
            self.logger.debug(
                "Extracting text",
                context=context,
                file_path=str(file_path),
                file_format=file_format.value
            )

        try:
            return extractor.extract_text(file_path)
        except ExtractionFailedException as e:
            e.correlation_id = context.correlation_id
            self._log_extraction_failure(e, context, file_path)
            raise
        except Exception as e:
            # Injected extractors may raise without wrapping
            error = ExtractionFailedException(
                str(file_path), e, correlation_id=context.correlation_id
            )
            self._log_extraction_failure(error, context, file_path)
            raise error from e

    def _log_extraction_failure(
        self,
        error: ExtractionFailedException,
        context: LogContext,
        file_path: Union[str, Path, None]
    ) -> None:
        if self.logger:
            self.logger.error(
                "Text extraction failed",
                exception=error.cause or error,
                context=context,
                file_path=str(file_path)
            )

    def resolve_format(
        self,
        file_path: Union[str, Path, None],
        correlation_id: Optional[str] = None
    ) -> FileFormat:
        """
        Validate a path and resolve its format tag.

        Raises:
            InvalidInputException: If the path is empty or the file does not exist
            UnsupportedFormatException: If the extension is not supported
        """
        if not file_path or not Path(file_path).is_file():
            if self.logger:
                self.logger.warning(
                    "Invalid file path",
                    context=create_log_context(
                        correlation_id=correlation_id,
                        operation="resolve_format",
                        component="dispatcher"
                    ),
                    file_path=str(file_path)
                )
            raise InvalidInputException(
                "Invalid or non-existent file path.", correlation_id=correlation_id
            )

        file_format = format_for_path(file_path)
        if file_format is None or file_format not in self.extractors:
            extension = get_extension(file_path)
            if self.logger:
                self.logger.warning(
                    "Unsupported file extension",
                    context=create_log_context(
                        correlation_id=correlation_id,
                        operation="resolve_format",
                        component="dispatcher"
                    ),
                    extension=extension
                )
            raise UnsupportedFormatException(
                f"File extension '{extension}' is not supported.",
                extension=extension,
                correlation_id=correlation_id
            )

        return file_format

    def get_supported_extensions(self) -> List[str]:
        """
        Get list of supported file extensions.

        Returns:
            List of supported file extensions
        """
        return [
            extension for extension, file_format in EXTENSION_FORMATS.items()
            if file_format in self.extractors
        ]

    def is_supported_file(self, file_path: Union[str, Path]) -> bool:
        """
        Check if a file is supported based on its extension.

        Args:
            file_path: Path to the file

        Returns:
            True if the file is supported, False otherwise
        """
        file_format = format_for_path(file_path)
        return file_format is not None and file_format in self.extractors

    def __str__(self) -> str:
        """String representation of the dispatcher."""
        return f"ExtractionDispatcher(formats={len(self.extractors)})"

    def __repr__(self) -> str:
        """Detailed string representation of the dispatcher."""
        return (
            f"ExtractionDispatcher(formats={[f.value for f in self.extractors]}, "
            f"extensions={len(self.get_supported_extensions())})"
        )
