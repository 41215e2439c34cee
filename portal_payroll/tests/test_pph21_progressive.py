from decimal import Decimal

import pytest

from portal_payroll.calculator.pph21_progressive import (
    calculate_biaya_jabatan,
    calculate_pkp_annual,
    calculate_pph21,
    calculate_progressive_tax,
)
from portal_payroll.config.tax_year import get_tax_year_config
from portal_payroll.constants import PTKP_STATUSES


def test_biaya_jabatan_rate_and_cap(config_2024):
    assert calculate_biaya_jabatan(6_000_000, config_2024) == Decimal("300000")
    assert calculate_biaya_jabatan(10_000_000, config_2024) == Decimal("500000")
    assert calculate_biaya_jabatan(50_000_000, config_2024) == Decimal("500000")
    assert calculate_biaya_jabatan(0, config_2024) == 0


def test_pkp_rounded_down_to_thousands():
    assert calculate_pkp_annual(Decimal("109252848"), 54_000_000) == 55_252_000
    assert calculate_pkp_annual(Decimal("43680000"), 54_000_000) == 0


@pytest.mark.parametrize(
    "year,pkp,expected",
    [
        (2024, 60_000_000, Decimal("3000000")),
        (2021, 60_000_000, Decimal("4000000")),
        (2024, 250_000_000, Decimal("31500000")),
        (2024, 5_500_000_000, Decimal("1619000000")),
    ],
)
def test_progressive_tax(year, pkp, expected):
    tax, layers = calculate_progressive_tax(pkp, get_tax_year_config(year))
    assert tax == expected
    assert sum(layer["taxable"] for layer in layers) == pkp


def test_scenario_10_million_tk0_2024(config_2024):
    result = calculate_pph21(10_000_000, 400_000, "TK/0", config_2024)

    assert result.biaya_jabatan == Decimal("500000")
    assert result.netto_monthly == Decimal("9100000")
    assert result.netto_annual == Decimal("109200000")
    assert result.pkp_annual == 55_200_000
    assert result.pph21_annual == Decimal("2760000")
    assert result.pph21_monthly == 230_000


def test_scenario_10_million_tk0_2023(config_2023):
    result = calculate_pph21(10_000_000, 395_596, "TK/0", config_2023)

    assert result.netto_annual == Decimal("109252848")
    assert result.pkp_annual == 55_252_000
    assert result.pph21_annual == Decimal("2762600")
    assert result.pph21_monthly == 230_217


def test_second_bracket(config_2024):
    result = calculate_pph21(20_000_000, 620_423, "TK/0", config_2024)
    assert result.pkp_annual == 172_554_000
    assert result.pph21_monthly == 1_656_925


def test_income_below_ptkp_is_not_taxed(config_2024):
    result = calculate_pph21(4_000_000, 160_000, "TK/0", config_2024)
    assert result.pkp_annual == 0
    assert result.pph21_monthly == 0


def test_monotonic_across_first_bracket_boundary(config_2024):
    # annual netto crosses PTKP + 60.000.000 around 10.1 million gross
    previous = -1
    for gross in range(9_000_000, 12_000_001, 50_000):
        bpjs = gross * 4 // 100
        tax = calculate_pph21(gross, bpjs, "TK/0", config_2024).pph21_monthly
        assert tax >= previous
        previous = tax


def test_higher_ptkp_never_raises_tax(config_2024):
    taxes = [
        calculate_pph21(15_000_000, 600_000, status, config_2024).pph21_monthly
        for status in sorted(PTKP_STATUSES, key=config_2024.get_ptkp_amount)
    ]
    assert taxes == sorted(taxes, reverse=True)


def test_as_dict_stringifies_decimals(config_2024):
    data = calculate_pph21(10_000_000, 400_000, "TK/0", config_2024).as_dict()
    assert Decimal(data["netto_annual"]) == 109_200_000
    assert data["pph21_monthly"] == 230_000
    assert data["tax_year"] == 2024
