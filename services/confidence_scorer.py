"""
Confidence Scoring
Maps located-field counts and OCR engine scores onto confidence buckets
"""
from typing import Dict
import logging

from config.validation_config import VALIDATION_CONFIG
from models import ConfidenceLevel, DocumentType

logger = logging.getLogger(__name__)


class ConfidenceScorer:
    """Calculates the qualitative confidence of an extraction"""

    def __init__(self, config: Dict = None):
        """
        Initialize confidence scorer

        Args:
            config: Configuration dict (uses VALIDATION_CONFIG if not provided)
        """
        self.config = config or VALIDATION_CONFIG
        self.field_count_thresholds = self.config['field_count_thresholds']
        self.ocr_thresholds = self.config['ocr_confidence_thresholds']

    def from_field_count(self, document_type: DocumentType, fields_found: int) -> ConfidenceLevel:
        """
        Bucket the number of located fields for a document type

        Args:
            document_type: Which threshold table applies
            fields_found: How many of the document's fields were located

        Returns:
            HIGH, MEDIUM or LOW
        """
        thresholds = self.field_count_thresholds[document_type.value]

        if fields_found >= thresholds['high']:
            return ConfidenceLevel.HIGH
        if fields_found >= thresholds['medium']:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def from_ocr_score(self, score: float) -> ConfidenceLevel:
        """Bucket an OCR engine score (0-100)"""
        if score > self.ocr_thresholds['high']:
            return ConfidenceLevel.HIGH
        if score > self.ocr_thresholds['medium']:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW
