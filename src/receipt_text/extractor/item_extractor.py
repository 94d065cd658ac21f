"""
Line Item Extractor
===================
Item listings come out of OCR in (at least) four shapes. Each line is
tried against the matchers below in order; the first shape that fits the
line claims it, so a line contributes at most one item.

  1. tabular         "Leite Integral     2   4,79      9,58"
  2. split qty×price "Dipirona sod 500mg" / "02 x 6.5O"   (two lines)
  3. quantity-first  "02 X-TUDO     18,9"
  4. degraded        "fe jao pr    1k     8,9"

A claimed line can still yield nothing (e.g. a split line with no
description above it). Lines that fit no shape are ignored.
"""

import re
from typing import Callable, List, NamedTuple, Optional, Pattern, Tuple

from loguru import logger

from receipt_text.extractor.base_extractor import is_header, parse_amount, parse_int, split_lines
from receipt_text.models import LineItem
from receipt_text.pattern_based_corrector import fix_trailing_letter_o, fix_word_fragments


# ─── Line shapes ──────────────────────────────────────────────────────────────

# Shapes assume whitespace runs were collapsed to a single space
_WHITESPACE_RUN = re.compile(r'\s+')

_TABULAR = re.compile(r'^(\S(?:.*?\S)?) (\d+) (\d+[,.]\d{2}) (\d+[,.]\d{2})$')

_SPLIT_QTY_PRICE = re.compile(r'^(\d+)\s*x\s*(\d+(?:[,.]\d*)?O?)$', re.IGNORECASE)

_QTY_FIRST = re.compile(r'^(\d+) (\S(?:.*?\S)?) (\d+[,.]\d+)$')

# Letters-only description, quantity with a unit suffix, amount
_DEGRADED = re.compile(
    r'^([^\W\d_]+(?:\s+[^\W\d_]+)*)\s+(\d+\s*(?:kg|k|un|g|l))\s+(\d+\s*[,.]\s*\d+)$',
    re.IGNORECASE,
)


def _tabular(m: re.Match, lines: List[str], i: int) -> Optional[LineItem]:
    quantity = parse_int(m.group(2))
    unit_price = parse_amount(m.group(3))
    total = parse_amount(m.group(4))
    if quantity is None or unit_price is None or total is None:
        return None
    return LineItem(
        description=m.group(1).strip(),
        quantity=quantity,
        unit_price=unit_price,
        total_price=total,
    )


def _split_qty_price(m: re.Match, lines: List[str], i: int) -> Optional[LineItem]:
    # The description lives on the line right above
    previous = lines[i - 1] if i > 0 else ''
    if not previous or is_header(previous):
        return None

    raw_price, corrected = fix_trailing_letter_o(m.group(2))
    price = parse_amount(raw_price)
    quantity = parse_int(m.group(1))
    if price is None or quantity is None:
        return None
    return LineItem(
        description=previous,
        quantity=quantity,
        unit_price=price,
        total_price=round(price * quantity, 2),
        correction_applied=corrected,
    )


def _quantity_first(m: re.Match, lines: List[str], i: int) -> Optional[LineItem]:
    quantity = parse_int(m.group(1))
    total = parse_amount(m.group(3))
    if quantity is None or total is None:
        return None
    return LineItem(
        description=m.group(2).strip(),
        quantity=quantity,
        unit_price=total / quantity if quantity else None,
        total_price=total,
    )


def _degraded(m: re.Match, lines: List[str], i: int) -> Optional[LineItem]:
    total = parse_amount(m.group(3))
    if total is None:
        return None

    description, corrected = fix_word_fragments(m.group(1).strip())
    return LineItem(
        description=description[:1].upper() + description[1:],
        quantity=re.sub(r'\s', '', m.group(2)),
        total_price=total,
        correction_applied=corrected,
    )


class ItemMatcher(NamedTuple):
    name: str
    pattern: Pattern
    build: Callable[[re.Match, List[str], int], Optional[LineItem]]


ITEM_MATCHERS: Tuple[ItemMatcher, ...] = (
    ItemMatcher('tabular', _TABULAR, _tabular),
    ItemMatcher('split_qty_price', _SPLIT_QTY_PRICE, _split_qty_price),
    ItemMatcher('quantity_first', _QTY_FIRST, _quantity_first),
    ItemMatcher('degraded', _DEGRADED, _degraded),
)


# ─── Extractor ────────────────────────────────────────────────────────────────

def match_line(
    lines: List[str],
    i: int,
    matchers: Tuple[ItemMatcher, ...] = ITEM_MATCHERS,
) -> Optional[Tuple[str, Optional[LineItem]]]:
    """
    Find the first matcher whose shape fits line i.

    Returns:
        (matcher name, item or None) or None when no shape fits
    """
    for matcher in matchers:
        m = matcher.pattern.match(lines[i])
        if m:
            return matcher.name, matcher.build(m, lines, i)
    return None


def extract_items(
    text: str,
    matchers: Tuple[ItemMatcher, ...] = ITEM_MATCHERS,
) -> List[LineItem]:
    lines = [_WHITESPACE_RUN.sub(' ', line) for line in split_lines(text)]
    items: List[LineItem] = []

    for i, line in enumerate(lines):
        if not line or is_header(line):
            continue
        found = match_line(lines, i, matchers)
        if not found:
            continue
        name, item = found
        if item is None:
            logger.debug(f"[ItemExtractor] line {i} fits '{name}' but yields no item")
            continue
        logger.debug(f"[ItemExtractor] line {i} ({name}): {item.description!r}")
        items.append(item)

    logger.debug(f"[ItemExtractor] {len(items)} items found")
    return items
