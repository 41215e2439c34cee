import json
import types

import pytest

from portal_payroll.calculator.payslip import build_payslip
from portal_payroll.override.slip_mapping import (
    salary_slip_print_context,
    salary_slip_to_payroll_input,
    salary_slip_to_payslip,
)

EARNINGS = [
    {"salary_component": "Basic Salary", "amount": 10_000_000},
    {"salary_component": "Tunjangan Makan", "amount": 500_000},
    {"salary_component": "Uang Kerajinan", "amount": 250_000},
    {"salary_component": "Lembur", "amount": 125_000},
    {"salary_component": "Statistik", "amount": 999, "statistical_component": 1},
]

DEDUCTIONS = [
    {"salary_component": "PPh 21", "amount": 1},
    {"salary_component": "BPJS JHT Employee", "amount": 1},
    {"salary_component": "Kasbon", "amount": 300_000},
]


def test_salary_slip_rows_to_payroll_input():
    payroll_input = salary_slip_to_payroll_input(EARNINGS, DEDUCTIONS, "K/0", 0.54)

    assert payroll_input.gaji_pokok == 10_000_000
    assert payroll_input.tunjangan_makan == 500_000
    assert payroll_input.tunjangan_lainnya == 250_000
    assert payroll_input.overtime == 125_000
    assert payroll_input.other_deductions == 300_000
    assert payroll_input.ptkp_status == "K/0"


def test_document_rows_are_supported():
    earnings = [types.SimpleNamespace(salary_component="Gaji Pokok", amount=6_000_000.0)]
    payroll_input = salary_slip_to_payroll_input(earnings, [], "TK/0", "0.24")
    assert payroll_input.gaji_pokok == 6_000_000


def _stored_row(config_2024, make_input):
    payslip = build_payslip("EMP-1", "PE-0001", make_input(), config_2024)
    row = {
        "name": "Sal Slip/EMP-1/00001",
        "employee": "EMP-1",
        "employee_name": "Budi Santoso",
        "payroll_entry": "PE-0001",
        "start_date": "2024-03-01",
        "payroll_portal_info": json.dumps(payslip.as_dict()),
    }
    return payslip, row


def test_stored_payslip_is_rebuilt_exactly(config_2024, make_input):
    payslip, row = _stored_row(config_2024, make_input)
    assert salary_slip_to_payslip(row) == payslip


def test_slip_without_calculation_rejected():
    with pytest.raises(ValueError):
        salary_slip_to_payslip({"name": "Sal Slip/EMP-9/00001", "employee": "EMP-9", "payroll_portal_info": None})


def test_print_context_from_slip(config_2024, make_input):
    _, row = _stored_row(config_2024, make_input)
    context = salary_slip_print_context(row)

    assert context["period"] == "Maret 2024"
    assert context["employee_name"] == "Budi Santoso"
    assert context["net_salary"] == "Rp 9.370.000"
