# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Value records consumed and produced by the payroll engine.

All monetary fields are whole rupiah integers. Records are frozen; a change
(new salary, regenerated payslip) produces a new record.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple

from portal_payroll.constants import (
    ADDITION_FIELDS,
    ALLOWANCE_FIELDS,
    EMPLOYEE_STATUS_ACTIVE,
    PTKP_STATUSES,
    RUN_STATUS_DRAFT,
    RUN_STATUSES,
)
from portal_payroll.exceptions import PayrollValidationError
from portal_payroll.utils import to_rupiah


@dataclass(frozen=True)
class SalaryComponents:
    """One version of an employee's salary. gaji_pokok is the base salary."""

    employee_id: str
    gaji_pokok: int
    effective_date: date
    tunjangan_transport: int = 0
    tunjangan_makan: int = 0
    tunjangan_komunikasi: int = 0
    tunjangan_jabatan: int = 0
    tunjangan_lainnya: int = 0

    def __post_init__(self):
        if to_rupiah(self.gaji_pokok, "gaji_pokok") <= 0:
            raise PayrollValidationError("gaji_pokok", f"must be positive, got {self.gaji_pokok!r}")

    @property
    def allowances(self) -> Tuple[int, ...]:
        return tuple(getattr(self, name) for name in ALLOWANCE_FIELDS)


@dataclass(frozen=True)
class PeriodAdditions:
    """Ad-hoc amounts for a single payroll period."""

    bonus: int = 0
    overtime: int = 0
    reimbursements: int = 0
    other_deductions: int = 0


@dataclass(frozen=True)
class CompanyTaxProfile:
    """jkk_risk_level is the workplace-accident rate in percent (0.24 .. 1.74)."""

    jkk_risk_level: Any = "0.24"
    name: Optional[str] = None


@dataclass(frozen=True)
class PayrollInput:
    """Engine input for one employee and one period."""

    gaji_pokok: int
    ptkp_status: str
    jkk_risk_level: Any
    tunjangan_transport: int = 0
    tunjangan_makan: int = 0
    tunjangan_komunikasi: int = 0
    tunjangan_jabatan: int = 0
    tunjangan_lainnya: int = 0
    bonus: int = 0
    overtime: int = 0
    reimbursements: int = 0
    other_deductions: int = 0

    @classmethod
    def from_components(
        cls,
        components: SalaryComponents,
        ptkp_status: str,
        jkk_risk_level,
        additions: Optional[PeriodAdditions] = None,
    ) -> "PayrollInput":
        additions = additions or PeriodAdditions()
        values = {name: getattr(components, name) for name in ALLOWANCE_FIELDS}
        values.update({name: getattr(additions, name) for name in ADDITION_FIELDS})
        return cls(
            gaji_pokok=components.gaji_pokok,
            ptkp_status=ptkp_status,
            jkk_risk_level=jkk_risk_level,
            other_deductions=additions.other_deductions,
            **values,
        )

    def validated(self) -> "PayrollInput":
        """
        Return a copy with every monetary field normalized to whole rupiah.

        Raises PayrollValidationError naming the first invalid field.
        """
        if self.ptkp_status not in PTKP_STATUSES:
            raise PayrollValidationError("ptkp_status", f"unknown PTKP status {self.ptkp_status!r}")
        money = {
            name: to_rupiah(getattr(self, name), name)
            for name in ("gaji_pokok",) + ALLOWANCE_FIELDS + ADDITION_FIELDS + ("other_deductions",)
        }
        return PayrollInput(ptkp_status=self.ptkp_status, jkk_risk_level=self.jkk_risk_level, **money)

    @property
    def allowances(self) -> Tuple[int, ...]:
        return tuple(getattr(self, name) for name in ALLOWANCE_FIELDS)


@dataclass(frozen=True)
class Employee:
    employee_id: str
    ptkp_status: str
    salary_history: Tuple[SalaryComponents, ...] = ()
    status: str = EMPLOYEE_STATUS_ACTIVE
    full_name: Optional[str] = None
    employee_number: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    employee_id: str
    amount: int
    status: str
    expense_id: Optional[str] = None
    # run that paid the claim out; set together with the reimbursed status
    payroll_run_id: Optional[str] = None


@dataclass(frozen=True)
class PayrollRun:
    run_id: str
    period_month: int
    period_year: int
    status: str = RUN_STATUS_DRAFT
    tax_year: Optional[int] = None
    total_gross: int = 0
    total_deductions: int = 0
    total_net: int = 0
    total_pph21: int = 0
    total_bpjs_employee: int = 0
    total_bpjs_employer: int = 0

    def __post_init__(self):
        if isinstance(self.period_month, bool) or not isinstance(self.period_month, int) \
                or not 1 <= self.period_month <= 12:
            raise PayrollValidationError("period_month", f"must be 1-12, got {self.period_month!r}")
        if isinstance(self.period_year, bool) or not isinstance(self.period_year, int):
            raise PayrollValidationError("period_year", f"expected an integer year, got {self.period_year!r}")
        if self.status not in RUN_STATUSES:
            raise PayrollValidationError("status", f"unknown payroll run status {self.status!r}")


@dataclass(frozen=True)
class Payslip:
    """
    Engine output for one (employee, payroll run) pair.

    ptkp_status and tax_year are copied at calculation time so that later
    changes to the employee or to the tax tables never alter a past payslip.
    """

    employee_id: str
    payroll_run_id: Optional[str]
    ptkp_status: str
    tax_year: int
    gaji_pokok: int
    tunjangan_transport: int
    tunjangan_makan: int
    tunjangan_komunikasi: int
    tunjangan_jabatan: int
    tunjangan_lainnya: int
    bonus: int
    overtime: int
    reimbursements: int
    gross_salary: int
    bpjs_kesehatan_employee: int
    bpjs_kesehatan_employer: int
    bpjs_jht_employee: int
    bpjs_jht_employer: int
    bpjs_jp_employee: int
    bpjs_jp_employer: int
    bpjs_jkk_employer: int
    bpjs_jkm_employer: int
    pph21: int
    other_deductions: int
    total_deductions: int
    net_salary: int
    deductions_exceed_gross: bool = False
    pph21_detail: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def bpjs_employee_total(self) -> int:
        return self.bpjs_kesehatan_employee + self.bpjs_jht_employee + self.bpjs_jp_employee

    @property
    def bpjs_employer_total(self) -> int:
        return (
            self.bpjs_kesehatan_employer
            + self.bpjs_jht_employer
            + self.bpjs_jp_employer
            + self.bpjs_jkk_employer
            + self.bpjs_jkm_employer
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
