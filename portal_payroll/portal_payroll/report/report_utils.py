# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Shared filter handling and data loading for Portal Payroll script reports."""

import frappe
from frappe import _
from frappe.utils import cint

from portal_payroll.override.slip_mapping import salary_slip_to_payslip
from portal_payroll.payroll.run import period_end


def validate_filters(filters):
    """
    Validate filters and return (month, year)
    """
    if not filters.get("company"):
        frappe.throw(_("Company is required"))

    month = cint(filters.get("month"))
    year = cint(filters.get("year"))
    if not 1 <= month <= 12:
        frappe.throw(_("Month must be between 1 and 12"))
    if not year:
        frappe.throw(_("Year is required"))
    return month, year


def get_period_payslips(filters, month, year):
    """
    Submitted Salary Slips of the company for one month, as engine Payslips.

    Returns:
        (payslips, {employee: employee_name})
    """
    slip_filters = {
        "docstatus": 1,
        "company": filters.get("company"),
        "start_date": ["between", [f"{year}-{month:02d}-01", period_end(year, month).isoformat()]],
    }
    if filters.get("employee"):
        slip_filters["employee"] = filters.get("employee")

    rows = frappe.get_all(
        "Salary Slip",
        filters=slip_filters,
        fields=["name", "employee", "employee_name", "payroll_entry", "payroll_portal_info"],
        order_by="employee asc",
    )

    payslips = []
    names = {}
    for row in rows:
        try:
            payslips.append(salary_slip_to_payslip(row))
        except ValueError as e:
            frappe.logger("portal_payroll").warning(str(e))
            continue
        names[row.employee] = row.employee_name
    return payslips, names
