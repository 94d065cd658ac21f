"""
Header Field Extractors
=======================
Fields printed in the receipt header:
  - establishment (first meaningful line)
  - tax id        (CNPJ, 14 digits)
  - date          (DD/MM/YY[YY] or DD-MM-YY[YY])
  - time          (HH:MM or HH.MM)
"""

import re
from typing import Optional, Tuple

from loguru import logger

from receipt_text.extractor.base_extractor import (
    Strategy,
    first_match,
    is_decorative,
    split_lines,
)
from receipt_text.models import ExtractionResult
from receipt_text.pattern_based_corrector import fix_date_label


# ─── Patterns ─────────────────────────────────────────────────────────────────

_EDGE_ASTERISKS = re.compile(r'^\*+\s*|\s*\*+$')

# Horizontal whitespace only: the digit run must not swallow the next line
_TAX_ID = re.compile(r'CNPJ[:\s]*([0-9./\- \t]+)', re.IGNORECASE)

TAX_ID_LENGTH = 14

_DATE_STRATEGIES: Tuple[Strategy, ...] = (
    Strategy('labelled', re.compile(r'Data:?\s*(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})', re.IGNORECASE)),
    Strategy('bare',     re.compile(r'(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})')),
)

_TIME_STRATEGIES: Tuple[Strategy, ...] = (
    Strategy('labelled', re.compile(r'(?:Hora|Time):?\s*(\d{1,2})[:.](\d{2})(?!\d)', re.IGNORECASE)),
    Strategy('bare',     re.compile(r'(?<![\d.,/])(\d{1,2})[:.](\d{2})(?![\d.,/])')),
)


# ─── Extractors ───────────────────────────────────────────────────────────────

def extract_establishment(text: str) -> ExtractionResult:
    """First non-blank, non-decorative line without its asterisk frame."""
    for line in split_lines(text):
        if not line or is_decorative(line):
            continue
        name = _EDGE_ASTERISKS.sub('', line)
        return ExtractionResult(value=name or None)
    return ExtractionResult()


def format_tax_id(digits: str) -> str:
    """'23456789000110' → '23.456.789/0001-10'"""
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def extract_tax_id(text: str) -> ExtractionResult:
    """
    Locate the CNPJ label and keep the digits of the run that follows it.

    value is the raw digit string; formatted is set only for 14 digits.
    """
    m = _TAX_ID.search(text)
    if not m:
        return ExtractionResult()

    digits = re.sub(r'\D', '', m.group(1))
    if not digits:
        return ExtractionResult()
    if len(digits) != TAX_ID_LENGTH:
        logger.debug(f"Tax id with {len(digits)} digits: {digits!r}")
        return ExtractionResult(value=digits)

    return ExtractionResult(value=digits, formatted=format_tax_id(digits))


def extract_date(text: str) -> ExtractionResult:
    """
    value     → 'DD/MM/YYYY' (display form)
    formatted → 'YYYY-MM-DD' (sortable form)

    No calendar plausibility check is made on the numbers.
    """
    fixed, corrected = fix_date_label(text)

    found = first_match(_DATE_STRATEGIES, fixed)
    if not found:
        return ExtractionResult(correction_applied=corrected)

    _, m = found
    day = m.group(1).zfill(2)
    month = m.group(2).zfill(2)
    year = m.group(3)
    if len(year) == 2:
        year = '20' + year

    return ExtractionResult(
        value=f"{day}/{month}/{year}",
        formatted=f"{year}-{month}-{day}",
        correction_applied=corrected,
    )


def _plausible_time(_strategy: Strategy, m: re.Match) -> Optional[str]:
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{m.group(1).zfill(2)}:{m.group(2)}"


def extract_time(text: str) -> ExtractionResult:
    """Labelled time first, then the first plausible bare HH:MM / HH.MM."""
    labelled, bare = _TIME_STRATEGIES

    found = first_match((labelled,), text, _plausible_time)
    if found:
        return ExtractionResult(value=found[1])

    # A bare candidate can be a price; keep looking past implausible ones
    for m in bare.pattern.finditer(text):
        value = _plausible_time(bare, m)
        if value:
            return ExtractionResult(value=value)

    return ExtractionResult()
