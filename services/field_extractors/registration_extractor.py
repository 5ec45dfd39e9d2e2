"""Company registration certificate parser"""
from models import DocumentType
from .base_field_extractor import BaseDocumentParser, ExtractedFields


class RegistrationDocumentParser(BaseDocumentParser):
    """Extracts registration number, company name and registered address"""

    document_type = DocumentType.REGISTRATION
    confidence_fields = (
        'registration_number',
        'company_name',
        'street_address',
        'city',
        'province_state',
        'postal_code',
    )
    primary_fields = ('registration_number', 'company_name')

    # Address fields in the order they are reported when missing
    ADDRESS_LABELS = (
        ('street_address', 'street address'),
        ('city', 'city'),
        ('province_state', 'province'),
        ('postal_code', 'postal code'),
    )

    def _extract_fields(self, text: str, extracted: ExtractedFields) -> None:
        self._record(
            extracted, 'registration_number', self._extract_registration_number(text), 'registration number'
        )
        self._record(extracted, 'company_name', self._extract_company_name(text), 'company name')

        address = self._extract_address(text)
        for name, label in self.ADDRESS_LABELS:
            self._record(extracted, name, address[name], label)
