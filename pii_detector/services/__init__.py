"""
Service layer components for pattern matching, text extraction and logging.
"""

from .pattern_set import PatternSet
from .extractors import TextExtractor
from .dispatcher import ExtractionDispatcher
from .observability import StructuredLogger

__all__ = [
    "PatternSet",
    "TextExtractor",
    "ExtractionDispatcher",
    "StructuredLogger",
]
