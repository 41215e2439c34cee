# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Custom Salary Slip override for Portal Payroll.

- BPJS (Kesehatan/JHT/JP employee shares) and PPh 21 are computed by the
  payroll engine and written as deduction rows.
- Employer contributions are stored on the slip for reference only.
- The full engine payslip is kept in ``payroll_portal_info`` so reports can
  aggregate exactly what was withheld.
"""

import json
import traceback

import frappe
from frappe.utils import getdate

from portal_payroll.frappe_helpers import get_logger

logger = get_logger("override.salary_slip")

try:
    from hrms.payroll.doctype.salary_slip.salary_slip import SalarySlip
except ImportError:
    from frappe.model.document import Document
    SalarySlip = Document
    logger.warning("Failed to import SalarySlip from hrms.payroll. Using Document fallback.")

from portal_payroll.calculator.payslip import build_payslip
from portal_payroll.config.settings import get_company_jkk_risk_level, get_live_tax_year_config
from portal_payroll.constants import BPJS_EMPLOYEE_COMPONENTS, DEFAULT_PTKP_STATUS, PPH21_COMPONENT
from portal_payroll.exceptions import PayrollValidationError
from portal_payroll.override.slip_mapping import get_row_value, salary_slip_to_payroll_input

EMPLOYER_FIELDS = (
    "bpjs_kesehatan_employer",
    "bpjs_jht_employer",
    "bpjs_jp_employer",
    "bpjs_jkk_employer",
    "bpjs_jkm_employer",
)

# Net amounts hrms derives from the totals
NET_PAY_FIELDS = ("net_pay", "base_net_pay", "rounded_total", "base_rounded_total")


class CustomSalarySlip(SalarySlip):
    """Salary Slip override dengan logika BPJS dan PPh21 Indonesia."""

    def get_ptkp_status(self) -> str:
        status = frappe.db.get_value("Employee", self.employee, "ptkp_status")
        if not status:
            logger.warning(
                f"Employee {self.employee} has no PTKP status, using {DEFAULT_PTKP_STATUS}"
            )
            status = DEFAULT_PTKP_STATUS
        return status

    def calculate_portal_payroll(self):
        if not getattr(self, "employee", None):
            frappe.throw("Employee data is required for PPh21 calculation", title="Missing Employee")
        if not getattr(self, "start_date", None):
            frappe.throw("Start Date is required for PPh21 calculation", title="Missing Period")

        year = getdate(self.start_date).year
        config = get_live_tax_year_config(year)

        payroll_input = salary_slip_to_payroll_input(
            self.earnings,
            self.deductions,
            self.get_ptkp_status(),
            get_company_jkk_risk_level(getattr(self, "company", None)),
        )

        try:
            payslip = build_payslip(self.employee, getattr(self, "payroll_entry", None), payroll_input, config)
        except PayrollValidationError as e:
            frappe.throw(f"Invalid payroll input for {self.employee}: {e}", title="Portal Payroll")

        for fieldname, component in BPJS_EMPLOYEE_COMPONENTS.items():
            self.set_deduction_row(component, getattr(payslip, fieldname))
        self.set_deduction_row(PPH21_COMPONENT, payslip.pph21)

        for fieldname in EMPLOYER_FIELDS:
            setattr(self, fieldname, getattr(payslip, fieldname))
        self.ptkp_status = payslip.ptkp_status
        self.tax_year = payslip.tax_year
        self.deductions_exceed_gross = 1 if payslip.deductions_exceed_gross else 0
        self.payroll_portal_info = json.dumps(payslip.as_dict())

        self._recalculate_totals()
        self._clamp_net_pay()
        return payslip

    def set_deduction_row(self, component: str, amount: int):
        for d in self.deductions:
            if get_row_value(d, "salary_component") == component:
                if isinstance(d, dict):
                    d["amount"] = amount
                else:
                    d.amount = amount
                return
        self.append("deductions", {"salary_component": component, "amount": amount})

    def _recalculate_totals(self):
        if hasattr(self, "set_totals") and callable(getattr(self, "set_totals")):
            self.set_totals()
        elif hasattr(self, "calculate_net_pay") and callable(getattr(self, "calculate_net_pay")):
            self.calculate_net_pay()
        else:
            self._manual_totals_calculation()

    def _clamp_net_pay(self):
        for fieldname in NET_PAY_FIELDS:
            if (getattr(self, fieldname, None) or 0) < 0:
                setattr(self, fieldname, 0)

    def _manual_totals_calculation(self):
        def include(row):
            return not (
                get_row_value(row, "do_not_include_in_total", 0)
                or get_row_value(row, "statistical_component", 0)
            )

        self.gross_pay = sum(get_row_value(r, "amount", 0) for r in (self.earnings or []) if include(r))
        self.total_deduction = sum(get_row_value(r, "amount", 0) for r in (self.deductions or []) if include(r))
        self.net_pay = max((self.gross_pay or 0) - (self.total_deduction or 0), 0)

    def validate(self):
        super().validate()
        try:
            payslip = self.calculate_portal_payroll()
            logger.info(f"Validate: {self.name} pph21={payslip.pph21} net={payslip.net_salary}")
        except frappe.ValidationError:
            raise
        except Exception as e:
            frappe.log_error(
                message=f"Failed to calculate payroll for Salary Slip {self.name}: {e}\n{traceback.format_exc()}",
                title="Portal Payroll Calculation Error",
            )
            raise frappe.ValidationError(f"Error calculating payroll: {e}")
