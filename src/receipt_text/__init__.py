"""
receipt_text: structured data from noisy OCR receipt text

Usage
-----
from receipt_text import process
result = process(text)
result.to_dict()   # {"structuredData": {...}, "confidence": 0.95, "validations": [...]}
"""

from receipt_text.models import (
    AdditionalInfo,
    LineItem,
    ProcessedResult,
    ServiceTax,
    StructuredData,
    ValidationOutcome,
)
from receipt_text.receipt_processor import ReceiptProcessor, process

__version__ = "1.0.0"

__all__ = [
    "process",
    "ReceiptProcessor",
    "ProcessedResult",
    "StructuredData",
    "LineItem",
    "ServiceTax",
    "AdditionalInfo",
    "ValidationOutcome",
]
