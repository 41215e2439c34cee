# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Portal Payroll API endpoints.

- Payslip preview for an arbitrary salary structure
- Tax year configuration in force for a year
- Monthly PPh 21 / BPJS reports over submitted Salary Slips
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

import frappe
from frappe.utils import cint

from portal_payroll.calculator.payslip import calculate_payslip
from portal_payroll.config.settings import get_company_jkk_risk_level, get_live_tax_year_config
from portal_payroll.constants import ADDITION_FIELDS, ALLOWANCE_FIELDS
from portal_payroll.exceptions import PayrollValidationError
from portal_payroll.models import PayrollInput
from portal_payroll.report.aggregator import monthly_bpjs_report, monthly_pph21_report

logger = logging.getLogger("portal_payroll_api")

INPUT_FIELDS = ("gaji_pokok",) + ALLOWANCE_FIELDS + ADDITION_FIELDS + ("other_deductions",)


def send_response(
    status: str = "success",
    data: Optional[Union[Dict, List, str]] = None,
    error: Optional[Union[Dict, str]] = None,
    http_status_code: int = 200,
) -> Dict[str, Any]:
    """
    Standardized API response function.

    Args:
        status: Response status ('success' or 'error')
        data: Response data payload
        error: Error details if status is 'error'
        http_status_code: HTTP status code

    Returns:
        dict: Standardized response object
    """
    response = {"status": status}

    if data is not None:
        response["data"] = data

    if error is not None:
        response["error"] = error

    if http_status_code != 200:
        frappe.local.response.http_status_code = http_status_code

    return response


def _validate_period(month, year):
    month = cint(month)
    year = cint(year)
    if month < 1 or month > 12:
        return None, None, send_response("error", error="Month must be between 1 and 12", http_status_code=400)
    if year < 2000 or year > 2100:
        return None, None, send_response(
            "error", error="Year must be valid (between 2000 and 2100)", http_status_code=400
        )
    return month, year, None


@frappe.whitelist(allow_guest=False)
def calculate_payslip_preview(
    salary: Union[str, Dict[str, Any]],
    ptkp_status: str,
    year: int,
    company: Optional[str] = None,
    jkk_risk_level: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Calculate a payslip without saving anything.

    Args:
        salary: Dict (or JSON string) with gaji_pokok, tunjangan_*, bonus,
            overtime, reimbursements and other_deductions in whole rupiah
        ptkp_status: PTKP status code, e.g. "K/1"
        year: Tax year of the period
        company: Company supplying the JKK risk level when none is given
        jkk_risk_level: JKK risk level in percent

    Returns:
        dict: API response with the payslip fields and the PPh 21 breakdown
    """
    try:
        if isinstance(salary, str):
            try:
                salary = json.loads(salary)
            except json.JSONDecodeError:
                return send_response("error", error="Invalid JSON format for salary", http_status_code=400)

        if not isinstance(salary, dict):
            return send_response("error", error="salary must be an object", http_status_code=400)

        unknown = sorted(set(salary) - set(INPUT_FIELDS))
        if unknown:
            return send_response(
                "error", error=f"Unknown salary fields: {', '.join(unknown)}", http_status_code=400
            )

        if jkk_risk_level in (None, ""):
            jkk_risk_level = get_company_jkk_risk_level(company)

        config = get_live_tax_year_config(cint(year))
        payroll_input = PayrollInput(
            gaji_pokok=salary.get("gaji_pokok", 0),
            ptkp_status=ptkp_status,
            jkk_risk_level=str(jkk_risk_level),
            **{k: v for k, v in salary.items() if k != "gaji_pokok"},
        )
        result = calculate_payslip(payroll_input, config)

        data = result.as_dict()
        data["taxYear"] = result.tax_year
        data["pph21Detail"] = result.pph21.as_dict()
        return send_response("success", data=data)

    except PayrollValidationError as e:
        return send_response("error", error={"field": e.field, "message": str(e)}, http_status_code=400)
    except frappe.ValidationError as e:
        return send_response("error", error=str(e), http_status_code=400)
    except Exception as e:
        frappe.log_error(f"Error calculating payslip preview: {str(e)}", "Portal Payroll API Error")
        logger.exception("Error calculating payslip preview")
        return send_response("error", error=str(e), http_status_code=500)


@frappe.whitelist(allow_guest=False)
def get_tax_year_config(year: int) -> Dict[str, Any]:
    """
    Return the rates, caps and tables in force for a tax year,
    with Payroll Portal Settings overrides applied.
    """
    try:
        year = cint(year)
        if not year:
            return send_response("error", error="Year is required", http_status_code=400)
        return send_response("success", data=get_live_tax_year_config(year).as_dict())
    except PayrollValidationError as e:
        return send_response("error", error={"field": e.field, "message": str(e)}, http_status_code=400)
    except Exception as e:
        frappe.log_error(f"Error getting tax year config: {str(e)}", "Portal Payroll API Error")
        return send_response("error", error=str(e), http_status_code=500)


@frappe.whitelist(allow_guest=False)
def get_monthly_report(company: str, month: int, year: int, report_type: str = "pph21") -> Dict[str, Any]:
    """
    Monthly PPh 21 or BPJS report over submitted Salary Slips.

    Args:
        company: Company name
        month: Month (1-12)
        year: Year
        report_type: "pph21" or "bpjs"
    """
    from portal_payroll.portal_payroll.report.report_utils import get_period_payslips

    try:
        if not company:
            return send_response("error", error="Company is required", http_status_code=400)

        month, year, error = _validate_period(month, year)
        if error:
            return error

        builders = {"pph21": monthly_pph21_report, "bpjs": monthly_bpjs_report}
        if report_type not in builders:
            return send_response(
                "error", error="report_type must be 'pph21' or 'bpjs'", http_status_code=400
            )

        payslips, _names = get_period_payslips({"company": company}, month, year)
        return send_response("success", data=builders[report_type](payslips, month, year))

    except Exception as e:
        frappe.log_error(f"Error building {report_type} report: {str(e)}", "Portal Payroll API Error")
        return send_response("error", error=str(e), http_status_code=500)
