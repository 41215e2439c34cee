# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

from frappe import _

from portal_payroll.portal_payroll.report.report_utils import get_period_payslips, validate_filters
from portal_payroll.report.aggregator import monthly_pph21_report


def execute(filters=None):
    """
    Main entry point for the PPh21 Report generation
    """
    if not filters:
        filters = {}

    month, year = validate_filters(filters)
    payslips, names = get_period_payslips(filters, month, year)
    report = monthly_pph21_report(payslips, month, year)

    data = []
    for row in report["employees"]:
        data.append(
            {
                "employee": row["employee_id"],
                "employee_name": names.get(row["employee_id"]),
                "ptkp_status": row["ptkp_status"],
                "gross_salary": row["gross_salary"],
                "pph21": row["pph21"],
            }
        )

    summary = report["summary"]
    report_summary = [
        {"label": _("Employees"), "value": summary["total_employees"], "datatype": "Int"},
        {"label": _("Total Gross"), "value": summary["total_gross"], "datatype": "Currency"},
        {"label": _("Total PPh 21"), "value": summary["total_pph21"], "datatype": "Currency"},
    ]
    return get_columns(), data, None, None, report_summary


def get_columns():
    """
    Define the columns for the PPh21 report
    """
    return [
        {"label": _("Employee"), "fieldname": "employee", "fieldtype": "Link", "options": "Employee", "width": 120},
        {"label": _("Employee Name"), "fieldname": "employee_name", "fieldtype": "Data", "width": 160},
        {"label": _("PTKP Status"), "fieldname": "ptkp_status", "fieldtype": "Data", "width": 90},
        {"label": _("Gross Income"), "fieldname": "gross_salary", "fieldtype": "Currency", "width": 130},
        {"label": _("PPh21"), "fieldname": "pph21", "fieldtype": "Currency", "width": 120},
    ]
