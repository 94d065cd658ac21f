"""
Base Extractor
==============
Shared pieces used by every field extractor:
  - amount parsing (comma or dot decimals, fail-closed)
  - ordered "first matching strategy wins" search
  - header tokens that never start an item line

Field extractors are plain functions of the raw text plus the constant
tables defined next to them. None of them keeps state between calls.
"""

import re
from typing import Callable, Iterable, NamedTuple, Optional, Pattern, Tuple, TypeVar

from loguru import logger


T = TypeVar('T')


# ─── Shared compiled patterns ─────────────────────────────────────────────────

_DECORATIVE = re.compile(r'^[*\-\s]+$')

HEADER_TOKENS: Tuple[str, ...] = (
    'DESC', 'CUPOM', 'TOTAL', 'Pagamento', 'CNPJ', 'Data', 'Hora', 'Mesa',
)

_HEADER_LINE = re.compile(
    r'^(?:' + '|'.join(re.escape(t) for t in HEADER_TOKENS) + r')',
    re.IGNORECASE,
)


class Strategy(NamedTuple):
    """One entry of an ordered matcher list."""
    name: str
    pattern: Pattern
    canonical: Optional[str] = None


# ─── Helpers ──────────────────────────────────────────────────────────────────

def parse_amount(raw: Optional[str]) -> Optional[float]:
    """
    Parse '17,48' / '25.00' / '1 ,80' into a float.

    Returns None when the fragment does not parse; callers treat that as
    "not found" instead of raising.
    """
    if raw is None:
        return None
    cleaned = re.sub(r'\s', '', raw).replace(',', '.')
    try:
        return float(cleaned)
    except ValueError:
        logger.debug(f"Unparseable amount: {raw!r}")
        return None


def parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def first_match(
    strategies: Iterable[Strategy],
    text: str,
    accept: Optional[Callable[[Strategy, re.Match], Optional[T]]] = None,
) -> Optional[Tuple[Strategy, T]]:
    """
    Run strategies in order and stop at the first one that yields a value.

    Args:
        strategies: Ordered matcher definitions
        text: Text to search
        accept: Turns a regex match into a value; returning None moves on
                to the next strategy. Defaults to the match itself.

    Returns:
        (winning strategy, value) or None
    """
    for strategy in strategies:
        m = strategy.pattern.search(text)
        if not m:
            continue
        value = accept(strategy, m) if accept else m
        if value is not None:
            logger.debug(f"Matched strategy '{strategy.name}'")
            return strategy, value
    return None


def split_lines(text: str) -> list:
    return [line.strip() for line in text.split('\n')]


def is_decorative(line: str) -> bool:
    """Line made only of asterisks, dashes and whitespace."""
    return bool(_DECORATIVE.match(line))


def is_header(line: str) -> bool:
    return bool(_HEADER_LINE.match(line))
