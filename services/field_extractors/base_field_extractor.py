"""
Base classes for document parsing
Each parser knows which fields its document type carries, which of them are
primary, and how to locate them in raw text
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Optional, List, Dict, Callable, Tuple
import logging
import re

from config.validation_config import VALIDATION_CONFIG
from models import ConfidenceLevel, DocumentType, ExtractedDocumentData, ExtractionMethod
from services.confidence_scorer import ConfidenceScorer
from services.normalizer import clean_company_name

logger = logging.getLogger(__name__)

VAT_NUMBER_RE = re.compile(r'\b4\d{9}\b')
REGISTRATION_NUMBER_RE = re.compile(r'\b\d{4}/\d{6}/\d{2}\b')
POSTAL_CODE_RE = re.compile(r'\b(\d{4})\b')
WHITESPACE_RE = re.compile(r'\s+')

# Names are capped so a long suffix-less run of capitals cannot backtrack
# from every start position
COMPANY_NAME_MAX_LENGTH = 100
COMPANY_NAME_GROUP = r"\b([A-Z][A-Z\s&'-]{0,%d})" % (COMPANY_NAME_MAX_LENGTH - 1)

# <name> <legal suffix>, tried in this order, first match wins
COMPANY_NAME_PATTERNS = tuple(
    re.compile(COMPANY_NAME_GROUP + suffix, re.IGNORECASE) for suffix in (
        r"\s*\(PTY\)\s*LTD\b",
        r"\s*\(PTY\)\s*LIMITED\b",
        r"\s*\bLIMITED\b",
        r"\s*\(RF\)\s*NPC\b",
        r"\s*\bNPC\b",
        r"\s*\bCC\b",
    )
)

# "Company Name: ..." up to the end of the line
COMPANY_NAME_LABEL_RE = re.compile(
    r"(?:Company\s+Name|Name|Trading\s+Name)\s*:[^\S\n]*([A-Z][A-Za-z&'()\- \t]*)",
    re.IGNORECASE,
)

ADDRESS_BLOCK_LABEL = r'(?:Registered\s+Address|Physical\s+Address|Address|Business\s+Address)'

# South African provinces, list order breaks ties
SA_PROVINCES = (
    'EASTERN CAPE',
    'FREE STATE',
    'GAUTENG',
    'KWAZULU-NATAL',
    'LIMPOPO',
    'MPUMALANGA',
    'NORTHERN CAPE',
    'NORTH WEST',
    'WESTERN CAPE',
)


@dataclass
class ExtractedFields:
    """Working set of fields while a single document is parsed"""
    vat_number: Optional[str] = None
    registration_number: Optional[str] = None
    company_name: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    province_state: Optional[str] = None
    postal_code: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def count_found(self, names: Tuple[str, ...]) -> int:
        return sum(1 for name in names if getattr(self, name))

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != 'errors'}


class BaseDocumentParser(ABC):
    """
    Abstract base class for document parsers
    Each document type (VAT certificate, registration certificate) implements this
    """

    document_type: DocumentType
    # Fields counted towards confidence
    confidence_fields: Tuple[str, ...] = ()
    # At least one of these must be located for success
    primary_fields: Tuple[str, ...] = ()

    def __init__(self, config: Dict = None):
        self.config = config or VALIDATION_CONFIG
        self.min_text_length = self.config['text_extraction']['min_text_length']
        self.year_range = self.config['address_rules']['year_range']
        self.max_block_lines = self.config['address_rules']['max_block_lines']
        self.scorer = ConfidenceScorer(self.config)
        self.address_block_re = re.compile(
            ADDRESS_BLOCK_LABEL + r'\s*:?\s*([^\n]+(?:\n[^\n]+){0,%d})' % (self.max_block_lines - 1),
            re.IGNORECASE,
        )

    @abstractmethod
    def _extract_fields(self, text: str, extracted: ExtractedFields) -> None:
        """
        Locate this document type's fields in the text

        Args:
            text: Raw document text
            extracted: Accumulator to fill, missing fields recorded in its errors
        """
        pass

    def parse(
        self,
        raw_text: Optional[str],
        extraction_method: ExtractionMethod = ExtractionMethod.PDF_TEXT,
        ocr_confidence_score: Optional[float] = None
    ) -> ExtractedDocumentData:
        """
        Parse raw document text into ExtractedDocumentData

        Never raises for missing fields; they are recorded in errors.

        Args:
            raw_text: Text from the PDF or OCR text source
            extraction_method: Which source produced the text
            ocr_confidence_score: OCR engine score, replaces the field-count
                confidence on the ocr_image path

        Returns:
            ExtractedDocumentData
        """
        if not raw_text or len(raw_text.strip()) < self.min_text_length:
            return ExtractedDocumentData(
                success=False,
                raw_text=raw_text or '',
                confidence=ConfidenceLevel.LOW,
                extraction_method=extraction_method,
                errors=(self._no_text_message(extraction_method),),
            )

        extracted = ExtractedFields()
        self._extract_fields(raw_text, extracted)

        confidence = self.scorer.from_field_count(
            self.document_type, extracted.count_found(self.confidence_fields)
        )

        if extraction_method == ExtractionMethod.OCR_IMAGE:
            if ocr_confidence_score is not None:
                ocr_confidence = self.scorer.from_ocr_score(ocr_confidence_score)
                logger.debug(
                    f"OCR score {ocr_confidence_score:.1f} -> {ocr_confidence.value} "
                    f"replaces field-count confidence {confidence.value}"
                )
                confidence = ocr_confidence
            else:
                logger.warning("OCR text without an engine score, keeping field-count confidence")

        return ExtractedDocumentData(
            success=extracted.count_found(self.primary_fields) > 0,
            raw_text=raw_text,
            confidence=confidence,
            extraction_method=extraction_method,
            errors=tuple(extracted.errors),
            **extracted.as_dict()
        )

    def _no_text_message(self, extraction_method: ExtractionMethod) -> str:
        if extraction_method == ExtractionMethod.OCR_IMAGE:
            return "Image OCR produced no usable text"
        return "PDF text extraction produced no usable text"

    def _extract_with_fallback(self, strategies: List[Callable[[], Optional[str]]]) -> Optional[str]:
        """Try extraction strategies in order, return the first value found"""
        for strategy_func in strategies:
            value = strategy_func()
            if value:
                return value
        return None

    def _record(self, extracted: ExtractedFields, name: str, value: Optional[str], label: str) -> None:
        """Store a located value, or note that it is missing"""
        if value:
            setattr(extracted, name, value)
            logger.info(f"Extracted {label}: {value}")
        else:
            extracted.errors.append(f"Could not find {label} in document")

    # === SHARED FIELD EXTRACTION ===

    def _extract_vat_number(self, text: str) -> Optional[str]:
        match = VAT_NUMBER_RE.search(text)
        return match.group(0) if match else None

    def _extract_registration_number(self, text: str) -> Optional[str]:
        match = REGISTRATION_NUMBER_RE.search(text)
        return match.group(0) if match else None

    def _extract_company_name(self, text: str) -> Optional[str]:
        """Extract company name, legal suffix patterns first, then labels"""
        return self._extract_with_fallback([
            lambda: self._extract_company_name_with_suffix(text),
            lambda: self._extract_company_name_from_label(text),
        ])

    def _extract_company_name_with_suffix(self, text: str) -> Optional[str]:
        """Strategy 1: '<name> (PTY) LTD' style, in pattern priority order"""
        normalized_text = WHITESPACE_RE.sub(' ', text).strip()

        for pattern in COMPANY_NAME_PATTERNS:
            match = pattern.search(normalized_text)
            if match:
                name = match.group(1)
                suffix = match.group(0)[len(name):]
                return clean_company_name(f"{name.strip()} {suffix.strip()}")

        return None

    def _extract_company_name_from_label(self, text: str) -> Optional[str]:
        """Strategy 2: 'Company Name:' / 'Name:' / 'Trading Name:' label"""
        match = COMPANY_NAME_LABEL_RE.search(text)
        if match:
            name = clean_company_name(match.group(1))
            return name or None
        return None

    def _extract_address(self, text: str) -> Dict[str, Optional[str]]:
        """
        Extract province, postal code, street address and city

        Returns:
            Dict with street_address, city, province_state, postal_code
            (None where not found)
        """
        province = self._extract_province(text)
        postal_code = self._extract_postal_code(text)
        street_address = None
        city = None

        lines = self._extract_address_lines(text)
        if lines:
            # First line is usually the street address
            street_address = lines[0].upper()

            remaining = lines[1:]
            if remaining:
                # City sits just above the province / postal code line
                city_line = remaining[-2] if len(remaining) > 1 else remaining[-1]
                city = self._clean_city(city_line, postal_code, province)

        return {
            'street_address': street_address,
            'city': city,
            'province_state': province,
            'postal_code': postal_code,
        }

    def _extract_province(self, text: str) -> Optional[str]:
        normalized_text = WHITESPACE_RE.sub(' ', text.upper())
        for province in SA_PROVINCES:
            if province in normalized_text:
                logger.debug(f"Found province in text: {province}")
                return province
        return None

    def _extract_postal_code(self, text: str) -> Optional[str]:
        """Last standalone 4-digit token that does not look like a year"""
        first_year, last_year = self.year_range
        candidates = [
            code for code in POSTAL_CODE_RE.findall(text)
            if not first_year <= int(code) <= last_year
        ]
        return candidates[-1] if candidates else None

    def _extract_address_lines(self, text: str) -> List[str]:
        match = self.address_block_re.search(text)
        if not match:
            return []
        return [line.strip() for line in match.group(1).strip().split('\n') if line.strip()]

    def _clean_city(self, line: str, postal_code: Optional[str], province: Optional[str]) -> Optional[str]:
        """Remove postal code, province and edge commas from a city line"""
        city = line.upper()
        if postal_code:
            city = city.replace(postal_code, '', 1).strip()
        if province:
            city = city.replace(province, '', 1).strip()
        city = city.strip(' \t,')
        return city or None
