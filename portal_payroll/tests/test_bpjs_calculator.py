from decimal import Decimal

import pytest

from portal_payroll.calculator.bpjs_calculator import calculate_bpjs, calculate_bpjs_contributions
from portal_payroll.exceptions import PayrollValidationError


def test_calculate_bpjs_rounds_half_up():
    assert calculate_bpjs(9_559_600, Decimal("1")) == 95_596
    assert calculate_bpjs(1_234_550, Decimal("0.24")) == 2_963
    assert calculate_bpjs(150, Decimal("1")) == 2


def test_calculate_bpjs_applies_cap():
    assert calculate_bpjs(20_000_000, Decimal("1"), max_salary=12_000_000) == 120_000
    assert calculate_bpjs(20_000_000, Decimal("1")) == 200_000


def test_calculate_bpjs_zero_base():
    assert calculate_bpjs(0, Decimal("4")) == 0


def test_contributions_10_million_2024(config_2024):
    bpjs = calculate_bpjs_contributions(10_000_000, "0.24", config_2024)

    assert bpjs.kesehatan_employee == 100_000
    assert bpjs.kesehatan_employer == 400_000
    assert bpjs.jht_employee == 200_000
    assert bpjs.jht_employer == 370_000
    assert bpjs.jp_employee == 100_000
    assert bpjs.jp_employer == 200_000
    assert bpjs.jkk_employer == 24_000
    assert bpjs.jkm_employer == 30_000
    assert bpjs.employee_total == 400_000
    assert bpjs.employer_total == 1_024_000


def test_jp_cap_follows_tax_year(config_2023):
    bpjs = calculate_bpjs_contributions(10_000_000, "0.24", config_2023)
    assert bpjs.jp_employee == 95_596
    assert bpjs.jp_employer == 191_192


def test_kesehatan_and_jp_capped_jht_not(config_2024):
    bpjs = calculate_bpjs_contributions(20_000_000, "0.54", config_2024)

    assert bpjs.kesehatan_employee == 120_000
    assert bpjs.kesehatan_employer == 480_000
    assert bpjs.jp_employee == 100_423
    assert bpjs.jp_employer == 200_846
    assert bpjs.jht_employee == 400_000
    assert bpjs.jkk_employer == 108_000


def test_zero_gross_gives_zero_contributions(config_2024):
    bpjs = calculate_bpjs_contributions(0, "0.24", config_2024)
    assert bpjs.employee_total == 0
    assert bpjs.employer_total == 0


def test_invalid_jkk_risk_level_rejected_even_for_zero_gross(config_2024):
    with pytest.raises(PayrollValidationError):
        calculate_bpjs_contributions(0, "3.0", config_2024)
