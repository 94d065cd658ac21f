"""
Pattern-Based OCR Corrector
Fixed repairs for OCR misreads that show up on Brazilian receipts

Only systematic errors are handled here:
1. Fragmented field labels ("Da a:" for "Data:", "to al" for "total")
2. Letter O read in place of a trailing digit 0 in prices ("6.5O")
3. Grocery words broken into syllables ("ar oz" for "arroz")

Each repair returns the corrected text plus whether anything changed, so
the caller decides whether the repair counts as a scored correction.
"""

import re
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple

from loguru import logger


# ─── Repair tables ────────────────────────────────────────────────────────────

DATE_LABEL_REPAIR = (re.compile(r'Da\s*a:', re.IGNORECASE), 'Data:')

TOTAL_LABEL_REPAIR = (re.compile(r'to\s*al', re.IGNORECASE), 'total')

TRAILING_LETTER_O = re.compile(r'O$', re.IGNORECASE)

WORD_FRAGMENT_REPAIRS: Mapping[Pattern, str] = MappingProxyType({
    re.compile(r'ar\s*oz', re.IGNORECASE):        'arroz',
    re.compile(r'fe\s*jao', re.IGNORECASE):       'feijão',
    re.compile(r'ole\s*so\s*a', re.IGNORECASE):   'óleo soja',
})


# ─── Repairs ──────────────────────────────────────────────────────────────────

def _apply(text: str, repair: Tuple[Pattern, str]) -> Tuple[str, bool]:
    pattern, replacement = repair
    fixed = pattern.sub(replacement, text)
    if fixed != text:
        logger.debug(f"Corrected label: {pattern.pattern!r} → {replacement!r}")
        return fixed, True
    return text, False


def fix_date_label(text: str) -> Tuple[str, bool]:
    """Normalize the fragmented date label before date matching."""
    return _apply(text, DATE_LABEL_REPAIR)


def fix_total_label(text: str) -> Tuple[str, bool]:
    """Normalize the fragmented 'total' label before total matching."""
    return _apply(text, TOTAL_LABEL_REPAIR)


def fix_trailing_letter_o(value: str) -> Tuple[str, bool]:
    """'6.5O' → '6.50' (letter O at the end of a price)."""
    if TRAILING_LETTER_O.search(value):
        fixed = TRAILING_LETTER_O.sub('0', value)
        logger.debug(f"Corrected price: '{value}' → '{fixed}'")
        return fixed, True
    return value, False


def fix_word_fragments(
    description: str,
    repairs: Mapping[Pattern, str] = WORD_FRAGMENT_REPAIRS,
) -> Tuple[str, bool]:
    """
    Reassemble words split by OCR using a fixed fragment dictionary.

    Args:
        description: Raw item description
        repairs: Fragment pattern → replacement word

    Returns:
        (repaired description, whether any repair fired)
    """
    original = description
    for pattern, word in repairs.items():
        description = pattern.sub(word, description)

    if description != original:
        logger.debug(f"Corrected: '{original}' → '{description}'")
        return description, True
    return description, False
