"""
Confidence Scorer
Turns validation judgments into a 0–1 confidence score

The score starts at 1.0 and only goes down: each judgment may name a
penalty from the penalty table, applied once per occurrence. The result
is clamped to [0, 1].
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from loguru import logger

from receipt_text.utils import default_config


DEFAULT_PENALTIES: Mapping[str, float] = MappingProxyType(
    dict(default_config()['scoring']['penalties'])
)

DEFAULT_LEVELS: Mapping[str, float] = MappingProxyType(
    dict(default_config()['scoring']['levels'])
)


class ConfidenceScorer:
    """
    Applies a named penalty table.

    Penalty keys:
        establishment_missing, tax_id_missing, tax_id_invalid,
        date_missing, date_corrected, item_corrected,
        total_missing, total_approximate, consistency_mismatch
    """

    def __init__(self, penalties: Optional[Mapping[str, float]] = None):
        table = dict(DEFAULT_PENALTIES)
        if penalties:
            unknown = set(penalties) - set(table)
            if unknown:
                raise ValueError(f"Unknown penalty keys: {sorted(unknown)}")
            table.update({k: float(v) for k, v in penalties.items()})

        for key, value in table.items():
            if value < 0:
                raise ValueError(f"Penalty '{key}' must not be negative: {value}")

        self.penalties: Mapping[str, float] = MappingProxyType(table)

    def penalty(self, key: str) -> float:
        return self.penalties[key]

    def score(self, judgments: Iterable) -> float:
        """
        Args:
            judgments: Objects with `penalty` (key or None) and `times`

        Returns:
            Confidence in [0, 1], rounded to 2 decimals
        """
        score = 1.0
        for judgment in judgments:
            if judgment.penalty is None:
                continue
            amount = self.penalties[judgment.penalty] * judgment.times
            score -= amount
            logger.debug(f"[Scorer] -{amount:.2f} ({judgment.penalty})")

        return round(max(0.0, min(1.0, score)), 2)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.penalties)


def confidence_level(confidence: float, levels: Mapping[str, float] = DEFAULT_LEVELS) -> str:
    """'high' | 'medium' | 'low'"""
    if confidence >= levels['high']:
        return 'high'
    if confidence >= levels['medium']:
        return 'medium'
    return 'low'
