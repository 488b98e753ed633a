"""
Text extractors that flatten supported file formats into plain text.
"""

import codecs
import tempfile
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Union

from docx2txt.docx2txt import xml2text
from langchain_community.document_loaders import (
    TextLoader,
    JSONLoader,
    PyPDFLoader
)
from openpyxl import load_workbook

from ..models.file_format import FileFormat
from ..exceptions import ExtractionFailedException


def reading_encoding(encoding: str) -> str:
    """Encoding to read files with. A UTF-8 byte order mark is dropped."""
    if codecs.lookup(encoding).name == "utf-8":
        return "utf-8-sig"
    return encoding


def decode_bytes(raw: bytes, encoding: str) -> str:
    """Decode file contents, replacing bytes that are invalid in the encoding."""
    return raw.decode(reading_encoding(encoding), errors="replace")


class TextExtractor(ABC):
    """Abstract interface for format-specific text extraction."""

    file_format: FileFormat

    def extract_text(self, file_path: Union[str, Path]) -> str:
        """
        Extract the text content of a file.

        Args:
            file_path: Path to the file

        Returns:
            Extracted text

        Raises:
            ExtractionFailedException: If the file cannot be read or parsed
        """
        try:
            return self._extract(Path(file_path))
        except ExtractionFailedException:
            raise
        except Exception as e:
            raise ExtractionFailedException(str(file_path), e) from e

    @abstractmethod
    def _extract(self, file_path: Path) -> str:
        """Format-specific extraction. Any exception is wrapped by extract_text."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(format={self.file_format.value})"


class PlainTextExtractor(TextExtractor):
    """Reads plain-text-like formats verbatim."""

    file_format = FileFormat.TEXT

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def _extract(self, file_path: Path) -> str:
        loader = TextLoader(str(file_path), encoding=reading_encoding(self.encoding))
        try:
            documents = loader.load()
        except RuntimeError as e:
            if not isinstance(e.__cause__, UnicodeDecodeError):
                raise
            # Undecodable bytes become U+FFFD and the rest of the file is still scanned
            return decode_bytes(file_path.read_bytes(), self.encoding)
        return "".join(doc.page_content for doc in documents)


class JsonTextExtractor(TextExtractor):
    """Joins every string value of a JSON document. Keys and other scalars are ignored."""

    file_format = FileFormat.JSON

    # Recursive descent yields values in document order, never object keys
    jq_schema = ".. | strings"

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def _extract(self, file_path: Path) -> str:
        raw = file_path.read_bytes()
        text = decode_bytes(raw, self.encoding)

        # JSONLoader only reads BOM-less UTF-8
        if text.encode("utf-8") == raw:
            return self._load(file_path)

        with tempfile.TemporaryDirectory() as temp_dir:
            staged = Path(temp_dir) / file_path.name
            staged.write_text(text, encoding="utf-8")
            return self._load(staged)

    def _load(self, file_path: Path) -> str:
        loader = JSONLoader(str(file_path), jq_schema=self.jq_schema, text_content=True)
        return "".join(f"{doc.page_content} " for doc in loader.load())


class XlsxTextExtractor(TextExtractor):
    """Joins the value of every cell across all sheets in document order."""

    file_format = FileFormat.XLSX

    def _extract(self, file_path: Path) -> str:
        # openpyxl resolves shared-string references into cell values
        workbook = load_workbook(file_path, read_only=True, data_only=True)
        try:
            if not workbook.sheetnames:
                raise ExtractionFailedException(
                    str(file_path),
                    ValueError("The Excel file does not contain a workbook part.")
                )

            parts: List[str] = []
            for worksheet in workbook.worksheets:
                for row in worksheet.iter_rows(values_only=True):
                    for value in row:
                        if value is None:
                            continue
                        parts.append(f"{self._format_value(value)} ")
            return "".join(parts)
        finally:
            workbook.close()

    def _format_value(self, value: Any) -> str:
        """Render a cell value the way it is stored in the sheet."""
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


class PdfTextExtractor(TextExtractor):
    """Concatenates the text of every page in page order."""

    file_format = FileFormat.PDF

    def _extract(self, file_path: Path) -> str:
        loader = PyPDFLoader(str(file_path))
        return "".join(page.page_content for page in loader.load())


class DocxTextExtractor(TextExtractor):
    """Returns the body text of a Word document. Headers and footers are not read."""

    file_format = FileFormat.DOCX

    main_part = "word/document.xml"

    def _extract(self, file_path: Path) -> str:
        with zipfile.ZipFile(file_path) as archive:
            document_xml = archive.read(self.main_part)
        return xml2text(document_xml)
