"""
Extractor package: one stateless function per receipt field.

Every extractor takes the full raw text and returns either an
ExtractionResult (value, formatted, correction_applied), a list of
LineItem, a TotalResult or an AdditionalInfo record.

Usage
-----
from receipt_text.extractor import extract_date
result = extract_date(text)
"""

from receipt_text.extractor.header_fields import (
    extract_date,
    extract_establishment,
    extract_tax_id,
    extract_time,
    format_tax_id,
)
from receipt_text.extractor.item_extractor import ITEM_MATCHERS, extract_items
from receipt_text.extractor.payment_extractor import extract_additional_info, extract_payment_method
from receipt_text.extractor.totals_extractor import TotalResult, extract_total

__all__ = [
    "extract_establishment",
    "extract_tax_id",
    "format_tax_id",
    "extract_date",
    "extract_time",
    "extract_items",
    "ITEM_MATCHERS",
    "extract_total",
    "TotalResult",
    "extract_payment_method",
    "extract_additional_info",
]
