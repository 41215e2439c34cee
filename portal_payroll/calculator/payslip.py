# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payslip assembly: gross -> BPJS -> PPh 21 -> net.

Totals are integer sums of already rounded fields, so

    total_deductions == bpjs_kesehatan_employee + bpjs_jht_employee
                        + bpjs_jp_employee + pph21 + other_deductions
    net_salary == gross_salary - total_deductions

hold exactly. When deductions exceed gross the net salary is reported as 0 and
``deductions_exceed_gross`` is set.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from portal_payroll.calculator.bpjs_calculator import BPJSContributions, calculate_bpjs_contributions
from portal_payroll.calculator.gross import calculate_gross_salary
from portal_payroll.calculator.pph21_progressive import PPh21Result, calculate_pph21
from portal_payroll.config.tax_year import TaxYearConfig, get_tax_year_config
from portal_payroll.constants import ALLOWANCE_FIELDS
from portal_payroll.frappe_helpers import get_logger
from portal_payroll.models import PayrollInput, Payslip

logger = get_logger(__name__)


@dataclass(frozen=True)
class PayrollResult:
    payroll_input: PayrollInput
    gross_salary: int
    bpjs: BPJSContributions
    pph21: PPh21Result
    other_deductions: int
    total_deductions: int
    net_salary: int
    deductions_exceed_gross: bool
    tax_year: int

    def as_dict(self) -> Dict[str, Any]:
        """Engine output record, keyed the way the portal API exposes it."""
        return {
            "grossSalary": self.gross_salary,
            "bpjsKesehatanEmployee": self.bpjs.kesehatan_employee,
            "bpjsKesehatanEmployer": self.bpjs.kesehatan_employer,
            "bpjsJhtEmployee": self.bpjs.jht_employee,
            "bpjsJhtEmployer": self.bpjs.jht_employer,
            "bpjsJpEmployee": self.bpjs.jp_employee,
            "bpjsJpEmployer": self.bpjs.jp_employer,
            "bpjsJkkEmployer": self.bpjs.jkk_employer,
            "bpjsJkmEmployer": self.bpjs.jkm_employer,
            "pph21": self.pph21.pph21_monthly,
            "otherDeductions": self.other_deductions,
            "totalDeductions": self.total_deductions,
            "netSalary": self.net_salary,
            "deductionsExceedGross": self.deductions_exceed_gross,
        }


def calculate_payslip(payroll_input: PayrollInput, config: TaxYearConfig) -> PayrollResult:
    """
    Run the full calculation for one employee and one period.

    Raises:
        PayrollValidationError: negative/fractional money, unknown PTKP status
            or unknown JKK risk level
    """
    data = payroll_input.validated()

    gross_salary = calculate_gross_salary(data)
    bpjs = calculate_bpjs_contributions(gross_salary, data.jkk_risk_level, config)
    pph21 = calculate_pph21(gross_salary, bpjs.employee_total, data.ptkp_status, config)

    total_deductions = bpjs.employee_total + pph21.pph21_monthly + data.other_deductions
    net_salary = gross_salary - total_deductions

    deductions_exceed_gross = net_salary < 0
    if deductions_exceed_gross:
        logger.warning(
            f"Deductions {total_deductions} exceed gross {gross_salary}; net salary reported as 0"
        )
        net_salary = 0

    return PayrollResult(
        payroll_input=data,
        gross_salary=gross_salary,
        bpjs=bpjs,
        pph21=pph21,
        other_deductions=data.other_deductions,
        total_deductions=total_deductions,
        net_salary=net_salary,
        deductions_exceed_gross=deductions_exceed_gross,
        tax_year=config.year,
    )


def build_payslip(
    employee_id: str,
    payroll_run_id: Optional[str],
    payroll_input: PayrollInput,
    config: TaxYearConfig,
) -> Payslip:
    """Calculate and package a Payslip record ready for persistence."""
    result = calculate_payslip(payroll_input, config)
    data = result.payroll_input
    bpjs = result.bpjs

    return Payslip(
        employee_id=employee_id,
        payroll_run_id=payroll_run_id,
        ptkp_status=data.ptkp_status,
        tax_year=result.tax_year,
        gaji_pokok=data.gaji_pokok,
        bonus=data.bonus,
        overtime=data.overtime,
        reimbursements=data.reimbursements,
        gross_salary=result.gross_salary,
        bpjs_kesehatan_employee=bpjs.kesehatan_employee,
        bpjs_kesehatan_employer=bpjs.kesehatan_employer,
        bpjs_jht_employee=bpjs.jht_employee,
        bpjs_jht_employer=bpjs.jht_employer,
        bpjs_jp_employee=bpjs.jp_employee,
        bpjs_jp_employer=bpjs.jp_employer,
        bpjs_jkk_employer=bpjs.jkk_employer,
        bpjs_jkm_employer=bpjs.jkm_employer,
        pph21=result.pph21.pph21_monthly,
        other_deductions=result.other_deductions,
        total_deductions=result.total_deductions,
        net_salary=result.net_salary,
        deductions_exceed_gross=result.deductions_exceed_gross,
        pph21_detail=result.pph21.as_dict(),
        **{name: getattr(data, name) for name in ALLOWANCE_FIELDS},
    )


def regenerate_payslip(
    payslip: Payslip,
    payroll_input: PayrollInput,
    config: Optional[TaxYearConfig] = None,
) -> Payslip:
    """
    Recalculate a payslip from new input, replacing every computed field.

    Keeps the payslip's identity and, unless a config is given, the tax year
    it was originally calculated under.
    """
    if config is None:
        config = get_tax_year_config(payslip.tax_year)
    logger.info(f"Regenerating payslip for {payslip.employee_id} in run {payslip.payroll_run_id}")
    return build_payslip(payslip.employee_id, payslip.payroll_run_id, payroll_input, config)
