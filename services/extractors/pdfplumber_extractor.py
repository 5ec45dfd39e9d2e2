"""
PDFPlumber-based text extraction for digital PDFs
"""
import io
import logging

import pdfplumber

from models import ExtractionMethod, RawDocumentText
from .base_extractor import BaseTextExtractor

logger = logging.getLogger(__name__)


class PDFPlumberExtractor(BaseTextExtractor):
    """
    Text extractor using pdfplumber library
    Best for digital PDFs with an embedded text layer
    """

    @property
    def name(self) -> str:
        return "pdfplumber"

    @property
    def extraction_method(self) -> ExtractionMethod:
        return ExtractionMethod.PDF_TEXT

    def supports(self, mime_type: str) -> bool:
        return mime_type == "application/pdf"

    def extract(self, content: bytes) -> RawDocumentText:
        """Extract the text layer of every page"""
        self.validate_content(content)

        page_texts = []
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page in pdf.pages:
                page_texts.append(page.extract_text() or "")

        text = "\n".join(page_texts)
        logger.info(f"PDFPlumber extracted {len(page_texts)} pages, {len(text)} chars")

        return RawDocumentText(text=text, extraction_method=self.extraction_method)
