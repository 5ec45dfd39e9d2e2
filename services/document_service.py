"""
Document Validation Service
Runs an uploaded onboarding document through text extraction, field extraction
and validation, turning every text-source failure into a failed extraction
"""
from typing import Optional, List
import logging

from models import (
    ConfidenceLevel,
    DocumentType,
    ExpectedCompanyData,
    ExtractedDocumentData,
    ExtractionMethod,
    ValidationResult,
)
from services.extractors import BaseTextExtractor, PDFPlumberExtractor, TesseractExtractor
from services.field_extractor import FieldExtractor
from services.validators.document_validator import DocumentValidator

logger = logging.getLogger(__name__)


class DocumentValidationService:
    """Extracts and validates company documents (VAT and registration certificates)"""

    def __init__(
        self,
        extractors: Optional[List[BaseTextExtractor]] = None,
        field_extractor: Optional[FieldExtractor] = None,
        validator: Optional[DocumentValidator] = None
    ):
        self.extractors = extractors if extractors is not None else [PDFPlumberExtractor(), TesseractExtractor()]
        self.field_extractor = field_extractor or FieldExtractor()
        self.validator = validator or DocumentValidator()

    def extract_document_data(
        self,
        content: bytes,
        mime_type: str,
        document_type: DocumentType
    ) -> ExtractedDocumentData:
        """
        Extract fields from an uploaded document

        Args:
            content: File bytes
            mime_type: MIME type of the upload, selects the text source
            document_type: VAT or registration certificate

        Returns:
            ExtractedDocumentData, success=False when no text could be read
        """
        extractor = self._select_extractor(mime_type)
        if extractor is None:
            logger.warning(f"Unsupported file type: {mime_type}")
            return ExtractedDocumentData(
                success=False,
                confidence=ConfidenceLevel.LOW,
                extraction_method=ExtractionMethod.NONE,
                errors=(f"Unsupported file type: {mime_type}",),
            )

        logger.info(f"Extracting text with {extractor.name} ({document_type.value})")
        try:
            document = extractor.extract(content)
        except Exception as e:
            logger.error(f"{extractor.name} extraction failed: {e}")
            return ExtractedDocumentData(
                success=False,
                confidence=ConfidenceLevel.LOW,
                extraction_method=extractor.extraction_method,
                errors=(str(e) or type(e).__name__,),
            )

        return self.field_extractor.extract(document, document_type)

    def validate_document(
        self,
        content: bytes,
        mime_type: str,
        document_type: DocumentType,
        expected: ExpectedCompanyData
    ) -> ValidationResult:
        """Extract fields from a document and validate them against expected data"""
        extracted = self.extract_document_data(content, mime_type, document_type)
        result = self.validator.validate(extracted, expected)

        logger.info(
            f"Document validation: valid={result.is_valid}, "
            f"manual_review={result.requires_manual_review}, ocr_failed={result.ocr_failed}"
        )
        return result

    def _select_extractor(self, mime_type: str) -> Optional[BaseTextExtractor]:
        for extractor in self.extractors:
            if extractor.supports(mime_type):
                return extractor
        return None
