# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Install the custom fields Portal Payroll stores on standard DocTypes.
Defined in code so the override and the reports always agree on fieldnames.
"""

import frappe
from frappe.custom.doctype.custom_field.custom_field import create_custom_fields

from portal_payroll.constants import PTKP_STATUSES
from portal_payroll.frappe_helpers import logger

JKK_RISK_LEVEL_OPTIONS = ("0.24", "0.54", "0.89", "1.27", "1.74")


def _employer_field(fieldname, label, insert_after):
    return {
        "fieldname": fieldname,
        "label": label,
        "fieldtype": "Currency",
        "insert_after": insert_after,
        "read_only": 1,
        "options": "currency",
    }


CUSTOM_FIELDS = {
    "Salary Slip": [
        {
            "fieldname": "portal_payroll_section",
            "label": "Portal Payroll",
            "fieldtype": "Section Break",
            "insert_after": "net_pay",
            "collapsible": 1,
        },
        {
            "fieldname": "ptkp_status",
            "label": "PTKP Status",
            "fieldtype": "Data",
            "insert_after": "portal_payroll_section",
            "read_only": 1,
        },
        {
            "fieldname": "tax_year",
            "label": "Tax Year",
            "fieldtype": "Int",
            "insert_after": "ptkp_status",
            "read_only": 1,
        },
        {
            "fieldname": "deductions_exceed_gross",
            "label": "Deductions Exceed Gross",
            "fieldtype": "Check",
            "insert_after": "tax_year",
            "read_only": 1,
        },
        {
            "fieldname": "employer_contributions_column",
            "label": "Employer Contributions (for reference)",
            "fieldtype": "Column Break",
            "insert_after": "deductions_exceed_gross",
        },
        _employer_field("bpjs_kesehatan_employer", "BPJS Kesehatan (Employer)", "employer_contributions_column"),
        _employer_field("bpjs_jht_employer", "BPJS JHT (Employer)", "bpjs_kesehatan_employer"),
        _employer_field("bpjs_jp_employer", "BPJS JP (Employer)", "bpjs_jht_employer"),
        _employer_field("bpjs_jkk_employer", "BPJS JKK (Employer)", "bpjs_jp_employer"),
        _employer_field("bpjs_jkm_employer", "BPJS JKM (Employer)", "bpjs_jkk_employer"),
        {
            "fieldname": "payroll_portal_info",
            "label": "Payroll Portal Info",
            "fieldtype": "Long Text",
            "insert_after": "bpjs_jkm_employer",
            "read_only": 1,
            "hidden": 1,
        },
    ],
    "Employee": [
        {
            "fieldname": "ptkp_status",
            "label": "PTKP Status",
            "fieldtype": "Select",
            "options": "\n".join(PTKP_STATUSES),
            "default": "TK/0",
            "insert_after": "marital_status",
        },
    ],
    "Company": [
        {
            "fieldname": "jkk_risk_level",
            "label": "JKK Risk Level (%)",
            "fieldtype": "Select",
            "options": "\n".join(JKK_RISK_LEVEL_OPTIONS),
            "default": "0.24",
            "insert_after": "default_currency",
        },
    ],
}


def install_custom_fields():
    """Install custom fields for Portal Payroll"""
    try:
        for dt, fields in CUSTOM_FIELDS.items():
            logger.info(f"Installing {len(fields)} custom fields for {dt}")
        create_custom_fields(CUSTOM_FIELDS, update=True)
        frappe.db.commit()
        logger.info("Custom field installation complete")
    except Exception as e:
        logger.exception(f"Error installing custom fields: {e}")
        frappe.log_error(f"Error installing custom fields: {e}", "Portal Payroll Setup")
