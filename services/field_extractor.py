"""
Field Extractor Service
Locates regulatory fields (VAT number, registration number, company name,
registered address) in text recovered from onboarding documents
"""
from typing import Optional, Dict
import logging

from config.validation_config import VALIDATION_CONFIG
from models import DocumentType, ExtractedDocumentData, ExtractionMethod, RawDocumentText
from services.field_extractors.base_field_extractor import BaseDocumentParser
from services.field_extractors.registration_extractor import RegistrationDocumentParser
from services.field_extractors.vat_extractor import VatDocumentParser

logger = logging.getLogger(__name__)


class FieldExtractor:
    """
    Entry point for document field extraction
    - One parser per document type, each with its own confidence table
    - Absent fields are recorded in errors, never raised
    """

    def __init__(self, config: Dict = None):
        self.config = config or VALIDATION_CONFIG
        self.parsers: Dict[DocumentType, BaseDocumentParser] = {
            DocumentType.VAT: VatDocumentParser(self.config),
            DocumentType.REGISTRATION: RegistrationDocumentParser(self.config),
        }

    def extract(self, document: RawDocumentText, document_type: DocumentType) -> ExtractedDocumentData:
        """
        Extract fields from text produced by a text source

        Args:
            document: Raw text with its extraction method and OCR score
            document_type: Selects the parser and confidence table

        Returns:
            ExtractedDocumentData
        """
        logger.info(
            f"Extracting {document_type.value} fields from {document.extraction_method.value} text "
            f"({len(document.text)} chars)"
        )
        return self.parsers[document_type].parse(
            document.text,
            document.extraction_method,
            document.ocr_confidence_score,
        )

    def parse_vat_document(
        self,
        raw_text: Optional[str],
        extraction_method: ExtractionMethod = ExtractionMethod.PDF_TEXT,
        ocr_confidence_score: Optional[float] = None
    ) -> ExtractedDocumentData:
        """Extract VAT number, registration number and company name"""
        return self.parsers[DocumentType.VAT].parse(raw_text, extraction_method, ocr_confidence_score)

    def parse_registration_document(
        self,
        raw_text: Optional[str],
        extraction_method: ExtractionMethod = ExtractionMethod.PDF_TEXT,
        ocr_confidence_score: Optional[float] = None
    ) -> ExtractedDocumentData:
        """Extract registration number, company name and registered address"""
        return self.parsers[DocumentType.REGISTRATION].parse(raw_text, extraction_method, ocr_confidence_score)
