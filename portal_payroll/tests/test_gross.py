from datetime import date

import pytest

from portal_payroll.calculator.gross import calculate_gross_salary
from portal_payroll.exceptions import PayrollValidationError
from portal_payroll.models import PeriodAdditions, SalaryComponents


def _components(**kwargs):
    return SalaryComponents(employee_id="EMP-1", gaji_pokok=5_000_000, effective_date=date(2024, 1, 1), **kwargs)


def test_gross_is_sum_of_components_and_additions():
    components = _components(tunjangan_transport=500_000, tunjangan_makan=300_000, tunjangan_jabatan=1_000_000)
    additions = PeriodAdditions(bonus=1_000_000, overtime=200_000, reimbursements=100_000, other_deductions=750_000)

    assert calculate_gross_salary(components, additions) == 8_100_000


def test_other_deductions_do_not_reduce_gross():
    components = _components()
    assert calculate_gross_salary(components, PeriodAdditions(other_deductions=1_000_000)) == 5_000_000


def test_components_without_additions():
    assert calculate_gross_salary(_components(tunjangan_lainnya=250_000)) == 5_250_000


def test_payroll_input_carries_its_own_additions(make_input):
    payroll_input = make_input(gaji_pokok=4_000_000, tunjangan_komunikasi=150_000, bonus=500_000, overtime=75_000)
    assert calculate_gross_salary(payroll_input) == 4_725_000


@pytest.mark.parametrize("field,value", [("tunjangan_makan", -1), ("tunjangan_transport", 100.5)])
def test_invalid_component_rejected(field, value):
    with pytest.raises(PayrollValidationError) as exc:
        calculate_gross_salary(_components(**{field: value}))
    assert exc.value.field == field


@pytest.mark.parametrize("gaji_pokok", [0, -1_000_000])
def test_salary_record_requires_positive_base_salary(gaji_pokok):
    with pytest.raises(PayrollValidationError) as exc:
        SalaryComponents(employee_id="EMP-1", gaji_pokok=gaji_pokok, effective_date=date(2024, 1, 1))
    assert exc.value.field == "gaji_pokok"
