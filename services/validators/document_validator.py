"""
Document Validation
Cross-checks fields extracted from a document against hand-entered company data
"""
from typing import Optional, List, Dict, Callable
import logging

from config.validation_config import VALIDATION_CONFIG
from models import (
    ConfidenceLevel,
    ExpectedCompanyData,
    ExtractedDocumentData,
    FieldMismatch,
    ValidatedField,
    ValidationResult,
)
from services.normalizer import normalize_identifier
from services.similarity import similarity_percent

logger = logging.getLogger(__name__)


def _normalize_province(value: str) -> str:
    return value.upper().strip()


class DocumentValidator:
    """Validates extracted document fields against expected company data"""

    # (field, attribute, normalizer) compared for equality after normalizing
    EXACT_FIELDS = (
        (ValidatedField.VAT_NUMBER, 'vat_number', normalize_identifier),
        (ValidatedField.REGISTRATION_NUMBER, 'registration_number', normalize_identifier),
        (ValidatedField.POSTAL_CODE, 'postal_code', normalize_identifier),
        (ValidatedField.PROVINCE_STATE, 'province_state', _normalize_province),
    )

    # (field, attribute) compared with similarity_percent against a threshold
    FUZZY_FIELDS = (
        (ValidatedField.COMPANY_NAME, 'company_name'),
        (ValidatedField.STREET_ADDRESS, 'street_address'),
        (ValidatedField.CITY, 'city'),
    )

    def __init__(self, config: Dict = None):
        """
        Initialize document validator

        Args:
            config: Configuration dict (uses VALIDATION_CONFIG if not provided)
        """
        self.config = config or VALIDATION_CONFIG
        self.similarity_thresholds = self.config['similarity_thresholds']

    def validate(self, extracted: ExtractedDocumentData, expected: ExpectedCompanyData) -> ValidationResult:
        """
        Compare every field present on both sides

        A field missing on either side is skipped, never a mismatch. When
        extraction failed, no field is compared and the document goes to
        manual review.

        Args:
            extracted: Fields located in the document
            expected: Company data entered by hand

        Returns:
            ValidationResult
        """
        if not extracted.success:
            logger.warning(f"Extraction failed, skipping field comparison: {extracted.errors}")
            return ValidationResult(
                is_valid=False,
                mismatches=(),
                extracted_data=extracted,
                requires_manual_review=True,
                ocr_failed=True,
            )

        mismatches: List[FieldMismatch] = []

        for validated_field, attr, normalize in self.EXACT_FIELDS:
            mismatch = self._compare_exact(
                validated_field, getattr(expected, attr), getattr(extracted, attr), normalize
            )
            if mismatch:
                mismatches.append(mismatch)

        for validated_field, attr in self.FUZZY_FIELDS:
            mismatch = self._compare_fuzzy(
                validated_field, getattr(expected, attr), getattr(extracted, attr), self.similarity_thresholds[attr]
            )
            if mismatch:
                mismatches.append(mismatch)

        logger.info(f"Total mismatches found: {len(mismatches)}")

        return ValidationResult(
            is_valid=len(mismatches) == 0,
            mismatches=tuple(mismatches),
            extracted_data=extracted,
            requires_manual_review=extracted.confidence == ConfidenceLevel.LOW and len(mismatches) > 0,
            ocr_failed=False,
        )

    def _compare_exact(
        self,
        validated_field: ValidatedField,
        expected: Optional[str],
        extracted: Optional[str],
        normalize: Callable[[str], str]
    ) -> Optional[FieldMismatch]:
        """Exact comparison of normalized values"""
        if not expected or not extracted:
            return None

        expected_norm = normalize(expected)
        extracted_norm = normalize(extracted)
        logger.info(f"{validated_field.value} comparison: '{expected_norm}' vs '{extracted_norm}'")

        if expected_norm == extracted_norm:
            return None

        logger.warning(f"{validated_field.value} mismatch: {expected_norm} != {extracted_norm}")
        return FieldMismatch(field=validated_field, expected=expected, extracted=extracted)

    def _compare_fuzzy(
        self,
        validated_field: ValidatedField,
        expected: Optional[str],
        extracted: Optional[str],
        threshold: int
    ) -> Optional[FieldMismatch]:
        """Fuzzy comparison, mismatch when similarity is below the threshold"""
        if not expected or not extracted:
            return None

        similarity = similarity_percent(expected, extracted)
        logger.info(f"{validated_field.value} similarity: {similarity}% ({expected} vs {extracted})")

        if similarity >= threshold:
            return None

        logger.warning(f"{validated_field.value} mismatch: {similarity}% < {threshold}%")
        return FieldMismatch(
            field=validated_field,
            expected=expected,
            extracted=extracted,
            similarity=similarity,
        )
