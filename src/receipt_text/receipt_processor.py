"""
Receipt Text Processing Pipeline
Runs every field extractor over one OCR text blob, validates the results
and assembles the structured data with a confidence score

Workflow:
1. Extract header fields (establishment, tax id, date, time)
2. Extract line items and the total
3. Cross-check items against the total
4. Extract payment method and ancillary fields
5. Score and assemble the result (absent fields omitted)
"""

from typing import List, Optional

from loguru import logger

from receipt_text.extractor import (
    extract_additional_info,
    extract_date,
    extract_establishment,
    extract_items,
    extract_payment_method,
    extract_tax_id,
    extract_time,
    extract_total,
)
from receipt_text.models import ProcessedResult, StructuredData
from receipt_text.scoring import ConfidenceScorer, confidence_level
from receipt_text.utils import load_config
from receipt_text.validators import (
    Judgment,
    validate_additional_info,
    validate_consistency,
    validate_date,
    validate_establishment,
    validate_items,
    validate_payment_method,
    validate_tax_id,
    validate_time,
    validate_total,
)


class ReceiptProcessor:
    """
    End-to-end receipt text pipeline.

    Holds only configuration, so a single instance can serve any number of
    callers and threads. process() never raises for string input.
    """

    def __init__(self, config: Optional[dict] = None, config_path: Optional[str] = None):
        """Initialize from a config dict, a YAML path, or the default file"""
        self.config = config if config is not None else load_config(config_path)

        scoring = self.config.get('scoring', {})
        self.scorer = ConfidenceScorer(scoring.get('penalties'))
        self.tolerance = float(scoring.get('consistency_tolerance', 0.10))
        self.levels = dict(scoring.get('levels', {'high': 0.8, 'medium': 0.5}))

        logger.debug(f"Receipt Processor ready (tolerance={self.tolerance})")

    def process(self, text: str) -> ProcessedResult:
        """
        Process one receipt text.

        Args:
            text: Raw OCR text, possibly multi-line

        Returns:
            ProcessedResult with structured data, confidence and validations

        Raises:
            TypeError: text is not a string
        """
        if not isinstance(text, str):
            raise TypeError(f"Receipt text must be str, got {type(text).__name__}")

        judgments: List[Judgment] = []

        # ── Header fields ─────────────────────────────────────────────────
        establishment = extract_establishment(text)
        judgments += validate_establishment(establishment)

        tax_id = extract_tax_id(text)
        judgments += validate_tax_id(tax_id)

        date = extract_date(text)
        judgments += validate_date(date)

        time = extract_time(text)
        judgments += validate_time(time)

        # ── Items and total (consistency needs both) ──────────────────────
        items = extract_items(text)
        judgments += validate_items(items)

        total = extract_total(text)
        judgments += validate_total(total)

        judgments += validate_consistency(items, total, self.tolerance)

        # ── Informational fields ──────────────────────────────────────────
        payment = extract_payment_method(text)
        judgments += validate_payment_method(payment)

        additional = extract_additional_info(text)
        judgments += validate_additional_info(additional)

        data = StructuredData(
            establishment=establishment.value,
            tax_id=tax_id.formatted,
            date=date.formatted,
            time=time.value,
            items=items or None,
            total_value=total.value,
            total_is_approximate=True if total.is_approximate else None,
            payment_method=payment.value,
            additional_info=None if additional.is_empty() else additional,
        )

        confidence = self.scorer.score(judgments)

        logger.debug(
            f"[ReceiptProcessor] establishment={establishment.value!r} "
            f"total={total.value!r} items={len(items)} "
            f"confidence={confidence:.2f}"
        )

        return ProcessedResult(
            structured_data=data,
            confidence=confidence,
            validations=[j.outcome for j in judgments],
        )

    def confidence_level(self, confidence: float) -> str:
        return confidence_level(confidence, self.levels)


_default_processor: Optional[ReceiptProcessor] = None


def get_processor() -> ReceiptProcessor:
    """Lazily built processor using the default config file."""
    global _default_processor
    if _default_processor is None:
        _default_processor = ReceiptProcessor()
    return _default_processor


def process(text: str) -> ProcessedResult:
    """Process one receipt text with the default configuration."""
    return get_processor().process(text)
