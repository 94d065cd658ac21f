"""
Total Value Extractor
=====================
Ordered patterns, first match wins:

  1. "TOTAL R$ 17,48"      label + optional currency + 2 decimals
  2. "TOTAL=25.00"
  3. "Sub t  46,95"        subtotal/total label + looser decimals
  4. "Valor a pagar R$ 9"  amount-due label (same or next line)
  5. "R$ 107,50 aprox"     bare currency amount flagged approximate

The fragmented label repair ("to al" → "total") runs first. It does not
count as a scored correction.
"""

import re
from typing import NamedTuple, Optional, Tuple

from loguru import logger

from receipt_text.extractor.base_extractor import Strategy, first_match, parse_amount
from receipt_text.pattern_based_corrector import fix_total_label


_APPROXIMATE = re.compile(r'aprox', re.IGNORECASE)

TOTAL_STRATEGIES: Tuple[Strategy, ...] = (
    Strategy('total_currency', re.compile(r'TOTAL\s*R?\$?\s*(\d+[,.]\d{2})', re.IGNORECASE)),
    Strategy('total_equals',   re.compile(r'TOTAL\s*=\s*(\d+[,.]\d{2})', re.IGNORECASE)),
    Strategy('subtotal_loose', re.compile(r'(?:Sub\s*t|total)\s+(\d+[,.]\d+)', re.IGNORECASE)),
    Strategy('amount_due',     re.compile(r'(?:valor\s+)?a\s+pagar\s*:?\s*R?\$?\s*(\d+[,.]\d+)', re.IGNORECASE)),
    Strategy('approx_currency', re.compile(r'R\$\s*(\d+[,.]\d+)\s*aprox', re.IGNORECASE)),
)


class TotalResult(NamedTuple):
    value: Optional[float] = None
    is_approximate: bool = False


def extract_total(text: str) -> TotalResult:
    """
    Returns:
        TotalResult(value, is_approximate). is_approximate is only True
        when a value was found.
    """
    fixed, _ = fix_total_label(text)
    is_approximate = bool(_APPROXIMATE.search(text))

    found = first_match(
        TOTAL_STRATEGIES,
        fixed,
        lambda _strategy, m: parse_amount(m.group(1)),
    )
    if not found:
        return TotalResult()

    strategy, value = found
    logger.debug(f"[TotalsExtractor] {value} via '{strategy.name}' approximate={is_approximate}")
    return TotalResult(value=value, is_approximate=is_approximate)
