# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

from frappe import _

from portal_payroll.portal_payroll.report.report_utils import get_period_payslips, validate_filters
from portal_payroll.report.aggregator import monthly_bpjs_report


def execute(filters=None):
    """
    Monthly BPJS contributions per employee and scheme
    """
    if not filters:
        filters = {}

    month, year = validate_filters(filters)
    payslips, names = get_period_payslips(filters, month, year)
    report = monthly_bpjs_report(payslips, month, year)

    data = []
    for row in report["employees"]:
        data.append(
            {
                "employee": row["employee_id"],
                "employee_name": names.get(row["employee_id"]),
                "gross_salary": row["gross_salary"],
                "kesehatan_employee": row["kesehatan"]["employee"],
                "kesehatan_employer": row["kesehatan"]["employer"],
                "jht_employee": row["jht"]["employee"],
                "jht_employer": row["jht"]["employer"],
                "jp_employee": row["jp"]["employee"],
                "jp_employer": row["jp"]["employer"],
                "jkk_employer": row["jkk"],
                "jkm_employer": row["jkm"],
            }
        )

    grand_total = report["summary"]["grand_total"]
    report_summary = [
        {"label": _("Employees"), "value": report["summary"]["total_employees"], "datatype": "Int"},
        {"label": _("Employee Contributions"), "value": grand_total["employee"], "datatype": "Currency"},
        {"label": _("Employer Contributions"), "value": grand_total["employer"], "datatype": "Currency"},
    ]
    return get_columns(), data, None, None, report_summary


def get_columns():
    columns = [
        {"label": _("Employee"), "fieldname": "employee", "fieldtype": "Link", "options": "Employee", "width": 120},
        {"label": _("Employee Name"), "fieldname": "employee_name", "fieldtype": "Data", "width": 160},
        {"label": _("Gross Income"), "fieldname": "gross_salary", "fieldtype": "Currency", "width": 130},
    ]
    for fieldname, label in (
        ("kesehatan_employee", "Kesehatan (Employee)"),
        ("kesehatan_employer", "Kesehatan (Employer)"),
        ("jht_employee", "JHT (Employee)"),
        ("jht_employer", "JHT (Employer)"),
        ("jp_employee", "JP (Employee)"),
        ("jp_employer", "JP (Employer)"),
        ("jkk_employer", "JKK"),
        ("jkm_employer", "JKM"),
    ):
        columns.append({"label": _(label), "fieldname": fieldname, "fieldtype": "Currency", "width": 120})
    return columns
