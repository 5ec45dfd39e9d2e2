"""
Document Text Extractors Package
"""
from .base_extractor import (
    BaseTextExtractor,
    TextExtractionError,
)
from .pdfplumber_extractor import PDFPlumberExtractor
from .tesseract_extractor import TesseractExtractor

__all__ = [
    'BaseTextExtractor',
    'TextExtractionError',
    'PDFPlumberExtractor',
    'TesseractExtractor',
]
