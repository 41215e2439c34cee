# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Fixed enumerations and names shared by the engine and the Frappe layer.

Statutory rates, caps and tables are versioned per tax year in
config/defaults.json, not here.
"""

MONTHS_PER_YEAR = 12

# Status PTKP (PMK 101/PMK.010/2016)
PTKP_STATUSES = (
    "TK/0", "TK/1", "TK/2", "TK/3",
    "K/0", "K/1", "K/2", "K/3",
    "K/I/0", "K/I/1", "K/I/2", "K/I/3",
)

# CRUD layer default for employees without a recorded status
DEFAULT_PTKP_STATUS = "TK/0"

# Payroll run lifecycle
RUN_STATUS_DRAFT = "draft"
RUN_STATUS_CALCULATED = "calculated"
RUN_STATUS_APPROVED = "approved"
RUN_STATUS_PAID = "paid"
RUN_STATUSES = (
    RUN_STATUS_DRAFT,
    RUN_STATUS_CALCULATED,
    RUN_STATUS_APPROVED,
    RUN_STATUS_PAID,
)

EXPENSE_STATUS_APPROVED = "approved"
EXPENSE_STATUS_REIMBURSED = "reimbursed"
EMPLOYEE_STATUS_ACTIVE = "active"

ALLOWANCE_FIELDS = (
    "tunjangan_transport",
    "tunjangan_makan",
    "tunjangan_komunikasi",
    "tunjangan_jabatan",
    "tunjangan_lainnya",
)

ADDITION_FIELDS = ("bonus", "overtime", "reimbursements")

# Frappe
SETTINGS_DOCTYPE = "Payroll Portal Settings"
SETTINGS_NAME = "Payroll Portal Settings"
PPH21_COMPONENT = "PPh 21"
BPJS_EMPLOYEE_COMPONENTS = {
    "bpjs_kesehatan_employee": "BPJS Kesehatan Employee",
    "bpjs_jht_employee": "BPJS JHT Employee",
    "bpjs_jp_employee": "BPJS JP Employee",
}
