# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Mapping between Salary Slip documents and engine records.

Works on Frappe documents and on plain dicts alike, so it carries no Frappe
import of its own.
"""

import json
from dataclasses import fields
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from portal_payroll.constants import BPJS_EMPLOYEE_COMPONENTS, PPH21_COMPONENT
from portal_payroll.models import PayrollInput, Payslip
from portal_payroll.report.print_context import get_payslip_print_context
from portal_payroll.utils import round_half_up

__all__ = [
    "EARNING_COMPONENT_FIELDS",
    "get_row_value",
    "salary_slip_to_payroll_input",
    "salary_slip_to_payslip",
    "salary_slip_print_context",
]

# Salary Component name (lowercase) -> engine field
EARNING_COMPONENT_FIELDS = {
    "gaji pokok": "gaji_pokok",
    "basic salary": "gaji_pokok",
    "tunjangan transport": "tunjangan_transport",
    "tunjangan makan": "tunjangan_makan",
    "tunjangan komunikasi": "tunjangan_komunikasi",
    "tunjangan jabatan": "tunjangan_jabatan",
    "tunjangan lainnya": "tunjangan_lainnya",
    "bonus": "bonus",
    "lembur": "overtime",
    "overtime": "overtime",
    "reimbursement": "reimbursements",
}

# Deductions the engine computes itself; never counted as other deductions
ENGINE_DEDUCTIONS = {PPH21_COMPONENT.lower()} | {c.lower() for c in BPJS_EMPLOYEE_COMPONENTS.values()}


def get_row_value(row: Any, name: str, default=None):
    if isinstance(row, dict):
        return row.get(name, default)
    return getattr(row, name, default)


def _included(row: Any) -> bool:
    return not (get_row_value(row, "do_not_include_in_total", 0) or get_row_value(row, "statistical_component", 0))


def _amount(row: Any) -> int:
    return round_half_up(Decimal(str(get_row_value(row, "amount", 0) or 0)))


def salary_slip_to_payroll_input(
    earnings: Iterable[Any],
    deductions: Iterable[Any],
    ptkp_status: str,
    jkk_risk_level,
) -> PayrollInput:
    """
    Build the engine input from Salary Slip earnings and deductions rows.

    Earnings with an unrecognized component name count as tunjangan_lainnya.
    Deductions other than BPJS employee shares and PPh 21 count as
    other_deductions.
    """
    values: Dict[str, int] = {}
    for row in earnings or []:
        if not _included(row):
            continue
        component = (get_row_value(row, "salary_component") or "").strip().lower()
        fieldname = EARNING_COMPONENT_FIELDS.get(component, "tunjangan_lainnya")
        values[fieldname] = values.get(fieldname, 0) + _amount(row)

    other_deductions = 0
    for row in deductions or []:
        if not _included(row):
            continue
        component = (get_row_value(row, "salary_component") or "").strip().lower()
        if component in ENGINE_DEDUCTIONS:
            continue
        other_deductions += _amount(row)

    return PayrollInput(
        gaji_pokok=values.pop("gaji_pokok", 0),
        ptkp_status=ptkp_status,
        jkk_risk_level=jkk_risk_level,
        other_deductions=other_deductions,
        **values,
    )


def salary_slip_to_payslip(row: Any, payroll_run_id: Optional[str] = None) -> Payslip:
    """
    Rebuild a Payslip record from a Salary Slip row.

    CustomSalarySlip stores the full engine payslip in ``payroll_portal_info``;
    identity fields come from the slip itself.

    Raises:
        ValueError: the slip was never calculated by the payroll engine
    """
    info = get_row_value(row, "payroll_portal_info") or "{}"
    try:
        data = json.loads(info) if isinstance(info, str) else dict(info)
    except ValueError:
        data = {}

    if not data:
        raise ValueError(
            f"Salary Slip {get_row_value(row, 'name')} has no payroll portal calculation"
        )

    known = {f.name for f in fields(Payslip)}
    data = {k: v for k, v in data.items() if k in known}
    data["employee_id"] = get_row_value(row, "employee") or data.get("employee_id")
    data["payroll_run_id"] = payroll_run_id or get_row_value(row, "payroll_entry") or data.get("payroll_run_id")
    return Payslip(**data)


def salary_slip_print_context(doc: Any) -> Dict[str, Any]:
    """Print format context for a calculated Salary Slip."""
    start = get_row_value(doc, "start_date")
    if not isinstance(start, date):
        start = date.fromisoformat(str(start)[:10])
    return get_payslip_print_context(
        salary_slip_to_payslip(doc),
        start.month,
        start.year,
        employee_name=get_row_value(doc, "employee_name"),
    )
