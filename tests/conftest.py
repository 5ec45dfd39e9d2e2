"""Shared test fixtures for document validation tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path so we can import the modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import ConfidenceLevel, ExtractedDocumentData, ExtractionMethod  # noqa: E402
from services.field_extractor import FieldExtractor  # noqa: E402
from services.validators.document_validator import DocumentValidator  # noqa: E402


VAT_CERTIFICATE_TEXT = "\n".join([
    "SOUTH AFRICAN REVENUE SERVICE",
    "Notice of Registration: Value-Added Tax",
    "VAT Registration Number: 4123456789",
    "Registered Name: ACME TRADING (PTY) LTD",
    "Company Registration Number: 2015/123456/07",
    "Date of Liability: 2023-03-01",
])

REGISTRATION_CERTIFICATE_TEXT = "\n".join([
    "COMPANIES AND INTELLECTUAL PROPERTY COMMISSION",
    "Registration Certificate",
    "Registration Number: 2021/123456/07",
    "Enterprise Name: BLUE RIVER MINING (PTY) LTD",
    "Date of Registration: 15 March 2021",
    "Registered Address: 12 Church Street",
    "Hatfield",
    "Pretoria",
    "Gauteng 0181",
])


@pytest.fixture
def vat_certificate_text() -> str:
    """Text layer of a SARS VAT registration notice."""
    return VAT_CERTIFICATE_TEXT


@pytest.fixture
def registration_certificate_text() -> str:
    """Text layer of a CIPC registration certificate."""
    return REGISTRATION_CERTIFICATE_TEXT


@pytest.fixture
def field_extractor() -> FieldExtractor:
    return FieldExtractor()


@pytest.fixture
def validator() -> DocumentValidator:
    return DocumentValidator()


@pytest.fixture
def complete_extraction() -> ExtractedDocumentData:
    """Extraction with all seven comparable fields located."""
    return ExtractedDocumentData(
        success=True,
        vat_number="4123456789",
        registration_number="2021/123456/07",
        company_name="BLUE RIVER MINING (PTY) LTD",
        street_address="12 CHURCH STREET",
        city="PRETORIA",
        province_state="GAUTENG",
        postal_code="0181",
        confidence=ConfidenceLevel.HIGH,
        extraction_method=ExtractionMethod.PDF_TEXT,
    )
