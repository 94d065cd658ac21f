"""
Payment and Ancillary Field Extractors
======================================
Payment method: labelled free text first ("Pagamento: Débito",
"Pgto Cart"), then bare keywords mapped to a canonical name.

Ancillary fields are independent of each other; any subset may be present:
  service tax, change, table number, fuel volume, price per litre.
"""

import re
from typing import Tuple

from loguru import logger

from receipt_text.extractor.base_extractor import Strategy, first_match, parse_amount, parse_int
from receipt_text.models import AdditionalInfo, ExtractionResult, ServiceTax


PAYMENT_STRATEGIES: Tuple[Strategy, ...] = (
    Strategy('label',       re.compile(r'Pagamento:\s*(.+)', re.IGNORECASE)),
    Strategy('short_label', re.compile(r'Pgto\s+(.+)', re.IGNORECASE)),
    Strategy('debit',  re.compile(r'Débito|Debito', re.IGNORECASE), 'Débito'),
    Strategy('credit', re.compile(r'Crédito|Credito|Cart', re.IGNORECASE), 'Cartão'),
    Strategy('cash',   re.compile(r'Dinheiro|d\s*nh', re.IGNORECASE), 'Dinheiro'),
)

_SERVICE_TAX    = re.compile(r'Tx\s*serv\s*(\d+)%\s*(\d+[,.]\d+)', re.IGNORECASE)
_CHANGE         = re.compile(r'(?:Rest|Troco)\s*:?\s*(\d+[,.]\d+)', re.IGNORECASE)
_TABLE          = re.compile(r'Mesa\s*(\d+)', re.IGNORECASE)
_FUEL_VOLUME    = re.compile(r'Vol:\s*(\d+[,.]\d+)\s*L', re.IGNORECASE)
_PRICE_PER_UNIT = re.compile(r'Pre[cç]o/L:\s*(\d+[,.]\d+)', re.IGNORECASE)


def _payment_value(strategy: Strategy, m: re.Match):
    if strategy.canonical:
        return strategy.canonical
    return m.group(1).strip() or None


def extract_payment_method(text: str) -> ExtractionResult:
    found = first_match(PAYMENT_STRATEGIES, text, _payment_value)
    if not found:
        return ExtractionResult()
    return ExtractionResult(value=found[1])


def extract_additional_info(text: str) -> AdditionalInfo:
    """Collect every ancillary field that is present. May be empty."""
    fields = {}

    m = _SERVICE_TAX.search(text)
    if m:
        percentage = parse_int(m.group(1))
        amount = parse_amount(m.group(2))
        if percentage is not None and amount is not None:
            fields['service_tax'] = ServiceTax(percentage=percentage, amount=amount)

    m = _CHANGE.search(text)
    if m:
        fields['change'] = parse_amount(m.group(1))

    m = _TABLE.search(text)
    if m:
        fields['table_number'] = m.group(1)

    m = _FUEL_VOLUME.search(text)
    if m:
        fields['fuel_volume'] = parse_amount(m.group(1))

    m = _PRICE_PER_UNIT.search(text)
    if m:
        fields['price_per_unit'] = parse_amount(m.group(1))

    if fields:
        logger.debug(f"[AdditionalInfo] found: {', '.join(sorted(fields))}")
    return AdditionalInfo(**fields)
