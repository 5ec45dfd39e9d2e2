"""
Pydantic models for the company document validation engine
"""
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExtractionMethod(str, Enum):
    """How the document text was obtained"""
    PDF_TEXT = "pdf_text"
    OCR_IMAGE = "ocr_image"
    NONE = "none"


class ConfidenceLevel(str, Enum):
    """Qualitative extraction confidence bucket"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DocumentType(str, Enum):
    """Supported regulatory document types"""
    VAT = "vat"
    REGISTRATION = "registration"


class ValidatedField(str, Enum):
    """Fields compared by the validator (values are the wire names)"""
    VAT_NUMBER = "vatNumber"
    REGISTRATION_NUMBER = "registrationNumber"
    COMPANY_NAME = "companyName"
    STREET_ADDRESS = "streetAddress"
    CITY = "city"
    PROVINCE_STATE = "provinceState"
    POSTAL_CODE = "postalCode"


class _FrozenModel(BaseModel):
    """Immutable model with camelCase aliases for JSON exchange"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RawDocumentText(_FrozenModel):
    """Text recovered from a document by a text source"""
    text: str
    extraction_method: ExtractionMethod
    ocr_confidence_score: Optional[float] = Field(
        None, ge=0, le=100, description="OCR engine score, only for ocr_image"
    )


class CompanyFields(_FrozenModel):
    """The comparable company fields shared by extracted and expected data"""
    vat_number: Optional[str] = Field(None, description="10 digits starting with 4")
    registration_number: Optional[str] = Field(None, description="YYYY/NNNNNN/NN")
    company_name: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    province_state: Optional[str] = None
    postal_code: Optional[str] = None


class ExpectedCompanyData(CompanyFields):
    """Company data entered by hand during onboarding"""


class ExtractedDocumentData(CompanyFields):
    """Fields located in a document's text"""
    success: bool
    raw_text: Optional[str] = None
    confidence: ConfidenceLevel = ConfidenceLevel.LOW
    extraction_method: ExtractionMethod = ExtractionMethod.NONE
    errors: Tuple[str, ...] = ()


class FieldMismatch(_FrozenModel):
    """A field whose expected and extracted values disagree"""
    field: ValidatedField
    expected: str
    extracted: str
    similarity: Optional[int] = Field(None, ge=0, le=100, description="Only for fuzzy-compared fields")


class ValidationResult(_FrozenModel):
    """Verdict for one document against the expected company data"""
    is_valid: bool
    mismatches: Tuple[FieldMismatch, ...] = ()
    extracted_data: ExtractedDocumentData
    requires_manual_review: bool
    ocr_failed: bool
