"""
File format tags resolved from file extensions.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union


class FileFormat(Enum):
    """Format tag handed to a text extractor."""
    TEXT = "text"
    JSON = "json"
    XLSX = "xlsx"
    PDF = "pdf"
    DOCX = "docx"


# Extension allow-list. Plain-text-like formats are read verbatim.
EXTENSION_FORMATS: Dict[str, FileFormat] = {
    ".txt": FileFormat.TEXT,
    ".csv": FileFormat.TEXT,
    ".vcf": FileFormat.TEXT,   # vCard
    ".ics": FileFormat.TEXT,   # iCalendar
    ".mht": FileFormat.TEXT,   # MIME HTML
    ".rtf": FileFormat.TEXT,
    ".xml": FileFormat.TEXT,
    ".json": FileFormat.JSON,
    ".xlsx": FileFormat.XLSX,
    ".pdf": FileFormat.PDF,
    ".docx": FileFormat.DOCX,
}


def get_extension(file_path: Union[str, Path]) -> str:
    """Return the lower-cased extension of a path, including the dot."""
    return Path(file_path).suffix.lower()


def format_for_path(file_path: Union[str, Path]) -> Optional[FileFormat]:
    """Return the format tag for a path, or None if the extension is unsupported."""
    return EXTENSION_FORMATS.get(get_extension(file_path))
