"""
Tests for field validators and the confidence scorer
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from receipt_text.extractor import TotalResult
from receipt_text.models import ExtractionResult, LineItem
from receipt_text.scoring import ConfidenceScorer, DEFAULT_PENALTIES, confidence_level
from receipt_text.validators import (
    Judgment,
    is_valid_tax_id,
    validate_consistency,
    validate_date,
    validate_items,
    validate_tax_id,
    validate_total,
)


def _items(*totals):
    return [LineItem(description=f"item {n}", quantity=1, total_price=t)
            for n, t in enumerate(totals)]


# ─── Tax id ───────────────────────────────────────────────────────────────────

def test_tax_id_valid():
    [j] = validate_tax_id(ExtractionResult("23456789000110", "23.456.789/0001-10"))
    assert j.outcome.field == "taxId"
    assert j.outcome.success is True
    assert j.penalty is None


def test_tax_id_repeated_digits_is_invalid():
    assert is_valid_tax_id("11111111111111") is False
    [j] = validate_tax_id(ExtractionResult("11111111111111", "11.111.111/1111-11"))
    assert j.outcome.success is False
    assert j.penalty == "tax_id_invalid"


def test_tax_id_wrong_length_is_invalid():
    [j] = validate_tax_id(ExtractionResult("332211000018"))
    assert j.outcome.success is False
    assert "332211000018" in j.outcome.message
    assert j.penalty == "tax_id_invalid"


def test_tax_id_missing():
    [j] = validate_tax_id(ExtractionResult())
    assert j.outcome.success is False
    assert j.penalty == "tax_id_missing"


# ─── Date ─────────────────────────────────────────────────────────────────────

def test_date_found_with_correction_is_still_success():
    [j] = validate_date(ExtractionResult("19/01/2026", "2026-01-19", True))
    assert j.outcome.success is True
    assert j.penalty == "date_corrected"


def test_date_missing():
    [j] = validate_date(ExtractionResult())
    assert j.outcome.success is False
    assert j.penalty == "date_missing"


# ─── Items / total ────────────────────────────────────────────────────────────

def test_items_correction_outcome_counts_corrected_items():
    items = [
        LineItem(description="a", quantity=2, unit_price=6.5, total_price=13.0, correction_applied=True),
        LineItem(description="b", quantity="1k", total_price=8.9, correction_applied=True),
        LineItem(description="c", quantity=1, total_price=1.0),
    ]
    found, corrected = validate_items(items)
    assert found.outcome.message == "3 item(s) extracted"
    assert corrected.outcome.field == "items"
    assert corrected.outcome.message == "2 item(s) needed OCR correction"
    assert corrected.penalty == "item_corrected"
    assert corrected.times == 2


def test_no_items_no_outcome():
    assert validate_items([]) == []


def test_total_approximate_adds_penalised_outcome():
    total_j, approx_j = validate_total(TotalResult(107.5, True))
    assert total_j.outcome.success is True
    assert "(approximate)" in total_j.outcome.message
    assert approx_j.outcome.field == "totalIsApproximate"
    assert approx_j.penalty == "total_approximate"


def test_total_missing():
    [j] = validate_total(TotalResult())
    assert j.outcome.field == "totalValue"
    assert j.outcome.success is False
    assert j.penalty == "total_missing"


# ─── Consistency ──────────────────────────────────────────────────────────────

def test_consistency_matching_sum():
    [j] = validate_consistency(_items(9.58, 7.90), TotalResult(17.48))
    assert j.outcome.field == "consistency"
    assert j.outcome.success is True
    assert j.penalty is None


def test_consistency_mismatch_reports_both_sums():
    [j] = validate_consistency(_items(13.0, 12.0), TotalResult(30.00))
    assert j.outcome.success is False
    assert "25.00" in j.outcome.message
    assert "30.00" in j.outcome.message
    assert j.penalty == "consistency_mismatch"


def test_consistency_tolerance_boundary():
    # A difference of 0.10 is already outside the tolerance
    [inside] = validate_consistency(_items(10.00), TotalResult(10.05))
    [edge] = validate_consistency(_items(17.38), TotalResult(17.48))
    [outside] = validate_consistency(_items(10.00), TotalResult(10.11))
    assert inside.outcome.success is True
    assert edge.outcome.success is False
    assert edge.penalty == "consistency_mismatch"
    assert outside.outcome.success is False


def test_consistency_skipped_without_items_or_total():
    assert validate_consistency([], TotalResult(10.0)) == []
    assert validate_consistency(_items(10.0), TotalResult()) == []


# ─── Scorer ───────────────────────────────────────────────────────────────────

def _j(penalty, times=1):
    return Judgment(outcome=None, penalty=penalty, times=times)


def test_penalty_table_values():
    assert dict(DEFAULT_PENALTIES) == {
        "establishment_missing": 0.20,
        "tax_id_missing": 0.15,
        "tax_id_invalid": 0.10,
        "date_missing": 0.20,
        "date_corrected": 0.05,
        "item_corrected": 0.05,
        "total_missing": 0.30,
        "total_approximate": 0.10,
        "consistency_mismatch": 0.05,
    }


def test_score_starts_at_one():
    assert ConfidenceScorer().score([]) == 1.0
    assert ConfidenceScorer().score([_j(None)]) == 1.0


def test_score_applies_penalties_per_occurrence():
    scorer = ConfidenceScorer()
    assert scorer.score([_j("total_missing")]) == pytest.approx(0.70)
    assert scorer.score([_j("item_corrected", times=3)]) == pytest.approx(0.85)


def test_score_is_clamped_to_zero():
    scorer = ConfidenceScorer({"total_missing": 0.9})
    assert scorer.score([_j("total_missing"), _j("date_missing")]) == 0.0


def test_scorer_rejects_unknown_and_negative_penalties():
    with pytest.raises(ValueError):
        ConfidenceScorer({"made_up": 0.1})
    with pytest.raises(ValueError):
        ConfidenceScorer({"total_missing": -0.1})


@pytest.mark.parametrize("confidence, level", [
    (1.0, "high"), (0.8, "high"), (0.79, "medium"), (0.5, "medium"), (0.15, "low"),
])
def test_confidence_level(confidence, level):
    assert confidence_level(confidence) == level


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
