"""
Validation Configuration
Centralized configuration for document text extraction, confidence bucketing and fuzzy validation
"""

VALIDATION_CONFIG = {
    # Text extraction pre-check
    "text_extraction": {
        "min_text_length": 10,  # Trimmed text shorter than this is unusable
    },

    # OCR engine score (0-100) → confidence bucket, strictly greater than
    "ocr_confidence_thresholds": {
        "high": 80,
        "medium": 60,
    },

    # Located field count → confidence bucket, at least
    "field_count_thresholds": {
        "vat": {
            "high": 3,    # VAT number, registration number, company name
            "medium": 2,
        },
        "registration": {
            "high": 5,    # Out of six: registration, name and four address fields
            "medium": 3,
        },
    },

    # Fuzzy comparison thresholds (similarity percent below this is a mismatch)
    "similarity_thresholds": {
        "company_name": 85,
        "street_address": 70,  # More lenient, addresses vary in formatting
        "city": 80,
    },

    # Address extraction
    "address_rules": {
        # 4-digit tokens in this range are treated as calendar years, not postal codes
        "year_range": (1900, 2099),
        "max_block_lines": 4,
    },
}
