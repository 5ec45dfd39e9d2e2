"""
Base classes and interfaces for document text extraction
Defines abstract base class for the engines that turn uploaded files into raw text
"""
from abc import ABC, abstractmethod

from models import ExtractionMethod, RawDocumentText


class TextExtractionError(Exception):
    """Raised when a text source cannot read a document"""


class BaseTextExtractor(ABC):
    """
    Abstract base class for text extraction engines
    All extractors (pdfplumber, Tesseract, etc.) should implement this interface
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this extractor"""
        pass

    @property
    @abstractmethod
    def extraction_method(self) -> ExtractionMethod:
        """Return the extraction method tag attached to the text"""
        pass

    @abstractmethod
    def supports(self, mime_type: str) -> bool:
        """
        Check whether this extractor handles a MIME type

        Args:
            mime_type: e.g. 'application/pdf', 'image/png'

        Returns:
            True if extract() can be called for it
        """
        pass

    @abstractmethod
    def extract(self, content: bytes) -> RawDocumentText:
        """
        Extract text from a document

        Args:
            content: Raw file bytes

        Returns:
            RawDocumentText

        Raises:
            TextExtractionError: when the document cannot be read
        """
        pass

    def validate_content(self, content: bytes) -> bool:
        """
        Validate that there is something to process

        Args:
            content: Raw file bytes

        Returns:
            True if valid, raises exception otherwise
        """
        if not content:
            raise TextExtractionError(f"{self.name}: document is empty")
        return True
