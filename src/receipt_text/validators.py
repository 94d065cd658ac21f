"""
Field validators

Each validator turns extractor output into one or more Judgments: a
ValidationOutcome for the caller plus the name of the penalty (if any)
the scorer should apply. Field names match the structured-data keys.
"""

from typing import List, NamedTuple, Optional

from receipt_text.extractor.totals_extractor import TotalResult
from receipt_text.models import AdditionalInfo, ExtractionResult, LineItem, ValidationOutcome


DEFAULT_TOLERANCE = 0.10


class Judgment(NamedTuple):
    outcome: ValidationOutcome
    penalty: Optional[str] = None
    times: int = 1


def _judge(field: str, success: bool, message: str,
           penalty: Optional[str] = None, times: int = 1) -> Judgment:
    return Judgment(ValidationOutcome(field=field, success=success, message=message), penalty, times)


def validate_establishment(result: ExtractionResult) -> List[Judgment]:
    if result.value:
        return [_judge('establishment', True, f'Establishment identified: "{result.value}"')]
    return [_judge('establishment', False, 'Establishment not found', 'establishment_missing')]


def is_valid_tax_id(digits: Optional[str]) -> bool:
    """14 digits, not all the same digit."""
    if not digits or len(digits) != 14 or not digits.isdigit():
        return False
    return len(set(digits)) > 1


def validate_tax_id(result: ExtractionResult) -> List[Judgment]:
    if not result.value:
        return [_judge('taxId', False, 'Tax ID (CNPJ) not found', 'tax_id_missing')]
    if result.formatted and is_valid_tax_id(result.value):
        return [_judge('taxId', True, f'Valid tax ID: {result.formatted}')]
    return [_judge('taxId', False,
                   f'Tax ID found but has an invalid format: {result.value}',
                   'tax_id_invalid')]


def validate_date(result: ExtractionResult) -> List[Judgment]:
    if not result.formatted:
        return [_judge('date', False, 'Date not found', 'date_missing')]
    if result.correction_applied:
        return [_judge('date', True, f'Date extracted: {result.formatted} (with corrections)',
                       'date_corrected')]
    return [_judge('date', True, f'Date extracted: {result.formatted}')]


def validate_time(result: ExtractionResult) -> List[Judgment]:
    if not result.value:
        return []
    return [_judge('time', True, f'Time extracted: {result.value}')]


def validate_items(items: List[LineItem]) -> List[Judgment]:
    if not items:
        return []
    judgments = [_judge('items', True, f'{len(items)} item(s) extracted')]

    corrected = sum(1 for item in items if item.correction_applied)
    if corrected:
        judgments.append(_judge('items', True,
                                f'{corrected} item(s) needed OCR correction',
                                'item_corrected', times=corrected))
    return judgments


def validate_total(total: TotalResult) -> List[Judgment]:
    if total.value is None:
        return [_judge('totalValue', False, 'Total value not found', 'total_missing')]

    suffix = ' (approximate)' if total.is_approximate else ''
    judgments = [_judge('totalValue', True, f'Total value: R$ {total.value:.2f}{suffix}')]
    if total.is_approximate:
        judgments.append(_judge('totalIsApproximate', False,
                                'Total value is marked as approximate',
                                'total_approximate'))
    return judgments


def items_sum(items: List[LineItem]) -> float:
    return sum(item.total_price or 0 for item in items)


def validate_consistency(
    items: List[LineItem],
    total: TotalResult,
    tolerance: float = DEFAULT_TOLERANCE,
) -> List[Judgment]:
    """Cross-check summed line totals against the stated total."""
    if not items or total.value is None:
        return []

    summed = items_sum(items)
    difference = abs(summed - total.value)
    if difference < tolerance:
        return [_judge('consistency', True, 'Sum of items matches the total')]
    return [_judge('consistency', False,
                   f'Sum mismatch: items R$ {summed:.2f} vs total R$ {total.value:.2f}',
                   'consistency_mismatch')]


def validate_payment_method(result: ExtractionResult) -> List[Judgment]:
    if not result.value:
        return []
    return [_judge('paymentMethod', True, f'Payment method: {result.value}')]


def validate_additional_info(info: AdditionalInfo) -> List[Judgment]:
    if info.is_empty():
        return []
    found = ', '.join(info.model_dump(by_alias=True, exclude_none=True))
    return [_judge('additionalInfo', True, f'Additional info found: {found}')]
