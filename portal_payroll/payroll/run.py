# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payroll run calculation and lifecycle.

draft -> calculated -> approved -> paid

A run can be (re)calculated while it is draft or calculated; recalculation
replaces every payslip of the run. Persistence stays with the caller: this
module returns the new run record and payslips, it never stores them.
"""

import calendar
import dataclasses
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from portal_payroll.calculator.payslip import build_payslip
from portal_payroll.config.tax_year import TaxYearConfig, get_tax_year_config
from portal_payroll.constants import (
    EMPLOYEE_STATUS_ACTIVE,
    EXPENSE_STATUS_APPROVED,
    EXPENSE_STATUS_REIMBURSED,
    RUN_STATUS_APPROVED,
    RUN_STATUS_CALCULATED,
    RUN_STATUS_DRAFT,
    RUN_STATUS_PAID,
)
from portal_payroll.exceptions import PayrollStateError, PayrollValidationError
from portal_payroll.frappe_helpers import get_logger
from portal_payroll.models import (
    CompanyTaxProfile,
    Employee,
    Expense,
    PayrollInput,
    PayrollRun,
    PeriodAdditions,
    Payslip,
    SalaryComponents,
)
from portal_payroll.utils import to_rupiah

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    run: PayrollRun
    payslips: Tuple[Payslip, ...]
    # employee ids without a salary record effective in the period
    skipped: Tuple[str, ...]
    # expenses paid out by this run, status reimbursed and linked to the run
    reimbursed_expenses: Tuple[Expense, ...] = ()

    @property
    def employees_processed(self) -> int:
        return len(self.payslips)


def period_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def select_effective_salary(
    history: Iterable[SalaryComponents], year: int, month: int
) -> Optional[SalaryComponents]:
    """Latest salary record whose effective_date is on or before the end of the period."""
    cutoff = period_end(year, month)
    effective = [s for s in history if s.effective_date <= cutoff]
    if not effective:
        return None
    return max(effective, key=lambda s: s.effective_date)


def is_reimbursable(expense: Expense, run_id: Optional[str] = None) -> bool:
    """
    Approved claims not yet paid out. Claims already reimbursed by ``run_id``
    stay reimbursable so recalculating that run pays them again.
    """
    if expense.status == EXPENSE_STATUS_APPROVED:
        return True
    return (
        run_id is not None
        and expense.status == EXPENSE_STATUS_REIMBURSED
        and expense.payroll_run_id == run_id
    )


def collect_reimbursements(expenses: Iterable[Expense], run_id: Optional[str] = None) -> Dict[str, int]:
    """Total reimbursable expense claims per employee."""
    totals = defaultdict(int)
    for expense in expenses:
        if not is_reimbursable(expense, run_id):
            continue
        totals[expense.employee_id] += to_rupiah(expense.amount, "expense.amount")
    return dict(totals)


def _require_status(run: PayrollRun, allowed: Tuple[str, ...], action: str) -> None:
    if run.status not in allowed:
        raise PayrollStateError(
            f"Cannot {action} payroll run {run.run_id} in status {run.status!r}; "
            f"expected {' or '.join(allowed)}"
        )


def calculate_run(
    run: PayrollRun,
    employees: Iterable[Employee],
    company: CompanyTaxProfile,
    additions: Optional[Mapping[str, PeriodAdditions]] = None,
    expenses: Iterable[Expense] = (),
    config: Optional[TaxYearConfig] = None,
) -> RunResult:
    """
    Calculate every active employee's payslip for a run.

    Args:
        run: Payroll run in draft or calculated status
        employees: Employees with their salary history
        company: Company profile supplying the JKK risk level
        additions: Per-employee bonus/overtime/other deductions for the period
        expenses: Expense claims; approved ones become reimbursements and are
            returned in ``reimbursed_expenses`` marked reimbursed by this run
        config: Tax tables to use; defaults to the tables of the run's year
            (or the year frozen on a previously calculated run)

    Raises:
        PayrollStateError: run is approved or paid
        PayrollValidationError: duplicate employee or invalid employee input
    """
    _require_status(run, (RUN_STATUS_DRAFT, RUN_STATUS_CALCULATED), "calculate")

    if config is None:
        config = get_tax_year_config(run.tax_year or run.period_year)

    additions = additions or {}
    expenses = list(expenses)
    reimbursements = collect_reimbursements(expenses, run.run_id)

    seen = set()
    payslips: List[Payslip] = []
    skipped: List[str] = []
    paid_out: List[str] = []

    for employee in employees:
        if employee.employee_id in seen:
            raise PayrollValidationError(
                "employee_id",
                f"employee {employee.employee_id} appears twice in payroll run {run.run_id}",
            )
        seen.add(employee.employee_id)

        if employee.status != EMPLOYEE_STATUS_ACTIVE:
            continue

        salary = select_effective_salary(employee.salary_history, run.period_year, run.period_month)
        if salary is None:
            logger.info(f"Skipping {employee.employee_id}: no salary effective for {run.period_month}/{run.period_year}")
            skipped.append(employee.employee_id)
            continue

        period = additions.get(employee.employee_id, PeriodAdditions())
        reimbursed = reimbursements.get(employee.employee_id, 0)
        if reimbursed:
            period = dataclasses.replace(period, reimbursements=period.reimbursements + reimbursed)

        payroll_input = PayrollInput.from_components(
            salary, employee.ptkp_status, company.jkk_risk_level, period
        )
        payslips.append(build_payslip(employee.employee_id, run.run_id, payroll_input, config))
        paid_out.append(employee.employee_id)

    updated = dataclasses.replace(
        run,
        status=RUN_STATUS_CALCULATED,
        tax_year=config.year,
        total_gross=sum(p.gross_salary for p in payslips),
        total_deductions=sum(p.total_deductions for p in payslips),
        total_net=sum(p.net_salary for p in payslips),
        total_pph21=sum(p.pph21 for p in payslips),
        total_bpjs_employee=sum(p.bpjs_employee_total for p in payslips),
        total_bpjs_employer=sum(p.bpjs_employer_total for p in payslips),
    )

    logger.info(
        f"Calculated payroll run {run.run_id} ({run.period_month}/{run.period_year}): "
        f"{len(payslips)} payslips, {len(skipped)} skipped, gross={updated.total_gross}"
    )
    reimbursed_expenses = tuple(
        dataclasses.replace(expense, status=EXPENSE_STATUS_REIMBURSED, payroll_run_id=run.run_id)
        for expense in expenses
        if expense.employee_id in paid_out and is_reimbursable(expense, run.run_id)
    )
    return RunResult(
        run=updated,
        payslips=tuple(payslips),
        skipped=tuple(skipped),
        reimbursed_expenses=reimbursed_expenses,
    )


def approve_run(run: PayrollRun) -> PayrollRun:
    _require_status(run, (RUN_STATUS_CALCULATED,), "approve")
    return dataclasses.replace(run, status=RUN_STATUS_APPROVED)


def mark_run_paid(run: PayrollRun) -> PayrollRun:
    _require_status(run, (RUN_STATUS_APPROVED,), "mark as paid")
    return dataclasses.replace(run, status=RUN_STATUS_PAID)
