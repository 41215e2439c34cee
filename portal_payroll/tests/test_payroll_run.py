from datetime import date

import pytest

from portal_payroll.exceptions import PayrollStateError, PayrollValidationError
from portal_payroll.models import CompanyTaxProfile, Employee, Expense, PayrollRun, PeriodAdditions, SalaryComponents
from portal_payroll.payroll.run import (
    approve_run,
    calculate_run,
    collect_reimbursements,
    mark_run_paid,
    select_effective_salary,
)

COMPANY = CompanyTaxProfile(jkk_risk_level="0.24", name="PT Contoh")


def _salary(amount, effective):
    return SalaryComponents(employee_id="EMP-1", gaji_pokok=amount, effective_date=effective)


def test_select_effective_salary_uses_latest_record_in_period():
    history = (
        _salary(5_000_000, date(2024, 1, 1)),
        _salary(7_000_000, date(2024, 4, 1)),
        _salary(6_000_000, date(2024, 3, 15)),
    )
    assert select_effective_salary(history, 2024, 3).gaji_pokok == 6_000_000
    assert select_effective_salary(history, 2024, 4).gaji_pokok == 7_000_000
    assert select_effective_salary(history, 2023, 12) is None


def test_collect_reimbursements_counts_approved_only():
    expenses = [
        Expense("EMP-1", 150_000, "approved"),
        Expense("EMP-1", 50_000, "approved"),
        Expense("EMP-1", 99_999, "pending"),
        Expense("EMP-2", 75_000, "rejected"),
    ]
    assert collect_reimbursements(expenses) == {"EMP-1": 200_000}


def test_calculate_run(draft_run, make_employee):
    employees = [
        make_employee("EMP-1"),
        make_employee("EMP-2", gaji_pokok=4_000_000),
        make_employee("EMP-3", status="inactive"),
        make_employee("EMP-4", effective=date(2024, 6, 1)),
    ]
    result = calculate_run(draft_run, employees, COMPANY)

    assert [p.employee_id for p in result.payslips] == ["EMP-1", "EMP-2"]
    assert result.skipped == ("EMP-4",)
    assert result.employees_processed == 2

    run = result.run
    assert run.status == "calculated"
    assert run.tax_year == 2024
    assert run.total_gross == 14_000_000
    assert run.total_pph21 == 230_000
    assert run.total_bpjs_employee == 400_000 + 160_000
    assert run.total_net == sum(p.net_salary for p in result.payslips)
    assert all(p.payroll_run_id == "RUN-2024-03" for p in result.payslips)


def test_calculate_run_adds_additions_and_reimbursements(draft_run, make_employee):
    additions = {"EMP-1": PeriodAdditions(bonus=1_000_000, reimbursements=50_000, other_deductions=100_000)}
    expenses = [Expense("EMP-1", 200_000, "approved")]

    result = calculate_run(draft_run, [make_employee("EMP-1")], COMPANY, additions=additions, expenses=expenses)
    payslip = result.payslips[0]

    assert payslip.bonus == 1_000_000
    assert payslip.reimbursements == 250_000
    assert payslip.other_deductions == 100_000
    assert payslip.gross_salary == 11_250_000


def test_duplicate_employee_rejected(draft_run, make_employee):
    with pytest.raises(PayrollValidationError) as exc:
        calculate_run(draft_run, [make_employee("EMP-1"), make_employee("EMP-1")], COMPANY)
    assert exc.value.field == "employee_id"


def test_recalculation_keeps_frozen_tax_year(make_employee):
    run = PayrollRun(run_id="RUN-2024-01", period_month=1, period_year=2024, status="calculated", tax_year=2023)
    result = calculate_run(run, [make_employee("EMP-1")], COMPANY)

    assert result.run.tax_year == 2023
    assert result.payslips[0].tax_year == 2023
    assert result.payslips[0].bpjs_jp_employee == 95_596


def test_lifecycle(draft_run, make_employee):
    calculated = calculate_run(draft_run, [make_employee("EMP-1")], COMPANY).run
    approved = approve_run(calculated)
    paid = mark_run_paid(approved)

    assert approved.status == "approved"
    assert paid.status == "paid"
    assert paid.total_gross == calculated.total_gross


def test_illegal_transitions(draft_run, make_employee):
    with pytest.raises(PayrollStateError):
        approve_run(draft_run)
    with pytest.raises(PayrollStateError):
        mark_run_paid(draft_run)

    approved = approve_run(calculate_run(draft_run, [make_employee("EMP-1")], COMPANY).run)
    with pytest.raises(PayrollStateError):
        calculate_run(approved, [make_employee("EMP-1")], COMPANY)
    with pytest.raises(PayrollStateError):
        approve_run(approved)


@pytest.mark.parametrize("month", [0, 13, "3"])
def test_invalid_period_month(month):
    with pytest.raises(PayrollValidationError) as exc:
        PayrollRun(run_id="RUN-X", period_month=month, period_year=2024)
    assert exc.value.field == "period_month"


def test_empty_run(draft_run):
    result = calculate_run(draft_run, [], COMPANY)
    assert result.payslips == ()
    assert result.run.total_gross == 0
    assert result.run.status == "calculated"


def test_reimbursed_expenses_not_paid_again(make_employee):
    employee = make_employee("EMP-1")
    expenses = [
        Expense("EMP-1", 200_000, "approved", expense_id="EXP-1"),
        Expense("EMP-1", 80_000, "pending", expense_id="EXP-2"),
    ]

    january = calculate_run(PayrollRun(run_id="RUN-2024-01", period_month=1, period_year=2024), [employee], COMPANY,
                            expenses=expenses)
    assert january.payslips[0].reimbursements == 200_000
    assert [(e.expense_id, e.status, e.payroll_run_id) for e in january.reimbursed_expenses] == [
        ("EXP-1", "reimbursed", "RUN-2024-01")
    ]

    stored = list(january.reimbursed_expenses) + [expenses[1]]
    february = calculate_run(PayrollRun(run_id="RUN-2024-02", period_month=2, period_year=2024), [employee], COMPANY,
                             expenses=stored)
    assert february.payslips[0].reimbursements == 0
    assert february.reimbursed_expenses == ()


def test_recalculation_pays_its_own_reimbursements_again(make_employee):
    employee = make_employee("EMP-1")
    run = PayrollRun(run_id="RUN-2024-01", period_month=1, period_year=2024)
    first = calculate_run(run, [employee], COMPANY, expenses=[Expense("EMP-1", 200_000, "approved", "EXP-1")])

    again = calculate_run(first.run, [employee], COMPANY, expenses=first.reimbursed_expenses)

    assert again.payslips[0].reimbursements == 200_000
    assert again.reimbursed_expenses == first.reimbursed_expenses


def test_skipped_employee_expenses_stay_approved(draft_run, make_employee):
    late_joiner = make_employee("EMP-4", effective=date(2024, 6, 1))
    result = calculate_run(draft_run, [late_joiner], COMPANY, expenses=[Expense("EMP-4", 50_000, "approved")])

    assert result.skipped == ("EMP-4",)
    assert result.reimbursed_expenses == ()
