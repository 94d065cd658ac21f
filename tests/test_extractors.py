"""
Tests for the header, total, payment and ancillary field extractors
"""

import pytest
import re
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from receipt_text.extractor import (
    extract_additional_info,
    extract_date,
    extract_establishment,
    extract_payment_method,
    extract_tax_id,
    extract_time,
    extract_total,
    format_tax_id,
)
from receipt_text.extractor.base_extractor import parse_amount
from sample_receipts import BAR, DEGRADED, GAS_STATION, PHARMACY, SUPERMARKET


# ─── Establishment ────────────────────────────────────────────────────────────

def test_establishment_first_line():
    assert extract_establishment(SUPERMARKET).value == "SUPERMERCADO IDEAL LTDA"


def test_establishment_strips_asterisk_frame():
    assert extract_establishment(DEGRADED).value == "MERC DO BAIRRO"


def test_establishment_skips_blank_and_decorative_lines():
    text = "\n   \n*****\n- - - -\n  Padaria Pão Quente  \nCNPJ 1"
    result = extract_establishment(text)
    assert result.value == "Padaria Pão Quente"
    assert result.correction_applied is False


def test_establishment_absent():
    assert extract_establishment("").value is None
    assert extract_establishment("***\n---").value is None


# ─── Tax id ───────────────────────────────────────────────────────────────────

def test_tax_id_formatted():
    result = extract_tax_id(SUPERMARKET)
    assert result.value == "23456789000110"
    assert result.formatted == "23.456.789/0001-10"


def test_tax_id_format_round_trip():
    """Stripping punctuation from the formatted id gives back the digits"""
    digits = "12345678000195"
    formatted = format_tax_id(digits)
    assert re.fullmatch(r"\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}", formatted)
    assert re.sub(r"\D", "", formatted) == digits


def test_tax_id_wrong_digit_count_is_unformatted():
    result = extract_tax_id(DEGRADED)
    assert result.value == "332211000018"
    assert result.formatted is None


def test_tax_id_label_is_case_insensitive():
    assert extract_tax_id("cnpj: 44 111 222 0001 33").value == "44111222000133"


def test_tax_id_does_not_swallow_next_line():
    result = extract_tax_id(GAS_STATION)
    assert result.value == "77888999000166"


def test_tax_id_absent():
    assert extract_tax_id("no id here").value is None
    assert extract_tax_id("CNPJ: not printed").value is None


# ─── Date ─────────────────────────────────────────────────────────────────────

def test_date_four_digit_year():
    result = extract_date(SUPERMARKET)
    assert result.value == "15/01/2026"
    assert result.formatted == "2026-01-15"
    assert result.correction_applied is False


def test_date_labelled_two_digit_year_with_dashes():
    result = extract_date(PHARMACY)
    assert result.formatted == "2026-01-16"
    assert result.correction_applied is False


def test_date_label_repair_sets_correction():
    result = extract_date(DEGRADED)
    assert result.formatted == "2026-01-19"
    assert result.correction_applied is True


def test_date_zero_pads_day_and_month():
    assert extract_date("Data: 5/3/26").formatted == "2026-03-05"


def test_date_no_calendar_check():
    assert extract_date("99/99/99").formatted == "2099-99-99"


def test_date_absent():
    result = extract_date("nothing")
    assert result.value is None
    assert result.formatted is None


# ─── Time ─────────────────────────────────────────────────────────────────────

def test_time_bare():
    assert extract_time(SUPERMARKET).value == "16:41"


def test_time_labelled_with_dot():
    assert extract_time(PHARMACY).value == "21:07"


def test_time_hour_is_zero_padded():
    assert extract_time("17/01/26  9:18").value == "09:18"


def test_time_ignores_implausible_and_embedded_numbers():
    # CNPJ groups and '4.65' must not be read as times
    assert extract_time(BAR).value is None


# ─── Total ────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text, expected", [
    (SUPERMARKET, 17.48),
    (PHARMACY, 25.00),
    (BAR, 46.95),
    (DEGRADED, 27.9),
    ("TOTAL 12,5", 12.5),
])
def test_total_patterns(text, expected):
    result = extract_total(text)
    assert result.value == pytest.approx(expected)
    assert result.is_approximate is False


def test_total_approximate_amount_due():
    result = extract_total(GAS_STATION)
    assert result.value == pytest.approx(107.50)
    assert result.is_approximate is True


def test_total_approximate_bare_currency():
    result = extract_total("Combustivel\nR$ 107,50 aprox")
    assert result.value == pytest.approx(107.50)
    assert result.is_approximate is True


def test_total_absent():
    result = extract_total("APROX\nno amounts")
    assert result.value is None
    assert result.is_approximate is False


# ─── Payment ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text, expected", [
    (SUPERMARKET, "Débito"),
    (PHARMACY, "Cart"),
    (BAR, "Dinheiro"),
    (DEGRADED, "Dinheiro"),
    ("pago no debito", "Débito"),
    ("Credito a vista", "Cartão"),
])
def test_payment_method(text, expected):
    assert extract_payment_method(text).value == expected


def test_payment_label_wins_over_keyword():
    assert extract_payment_method("Dinheiro\nPagamento: PIX").value == "PIX"


def test_payment_absent():
    assert extract_payment_method(GAS_STATION).value is None


# ─── Additional info ──────────────────────────────────────────────────────────

def test_additional_info_bar():
    info = extract_additional_info(BAR)
    assert info.service_tax.percentage == 10
    assert info.service_tax.amount == pytest.approx(4.65)
    assert info.change == pytest.approx(16.95)
    assert info.table_number == "07"
    assert info.fuel_volume is None


def test_additional_info_gas_station():
    info = extract_additional_info(GAS_STATION)
    assert info.fuel_volume == pytest.approx(28.364)
    assert info.price_per_unit == pytest.approx(3.79)
    assert info.model_dump(by_alias=True, exclude_none=True) == {
        "fuelVolume": pytest.approx(28.364),
        "pricePerUnit": pytest.approx(3.79),
    }


def test_additional_info_empty():
    assert extract_additional_info(SUPERMARKET).is_empty()


# ─── Amount parsing ───────────────────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("17,48", 17.48),
    ("25.00", 25.0),
    ("1 ,80", 1.8),
    ("1.2.3", None),
    ("", None),
    (None, None),
])
def test_parse_amount_fails_closed(raw, expected):
    assert parse_amount(raw) == (pytest.approx(expected) if expected is not None else None)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
