"""VAT registration certificate parser"""
from models import DocumentType
from .base_field_extractor import BaseDocumentParser, ExtractedFields


class VatDocumentParser(BaseDocumentParser):
    """Extracts VAT number (10 digits starting with 4), registration number and company name"""

    document_type = DocumentType.VAT
    confidence_fields = ('vat_number', 'registration_number', 'company_name')
    primary_fields = ('vat_number', 'registration_number', 'company_name')

    def _extract_fields(self, text: str, extracted: ExtractedFields) -> None:
        self._record(extracted, 'vat_number', self._extract_vat_number(text), 'VAT number')
        self._record(
            extracted, 'registration_number', self._extract_registration_number(text), 'registration number'
        )
        self._record(extracted, 'company_name', self._extract_company_name(text), 'company name')
