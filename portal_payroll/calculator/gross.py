# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Gross salary (penghasilan bruto) for one period."""

from portal_payroll.constants import ADDITION_FIELDS, ALLOWANCE_FIELDS
from portal_payroll.utils import to_rupiah


def calculate_gross_salary(components, additions=None) -> int:
    """
    gaji pokok + all tunjangan + bonus + overtime + reimbursements.

    Args:
        components: SalaryComponents or PayrollInput (anything exposing
            gaji_pokok and the tunjangan fields)
        additions: PeriodAdditions; when omitted the addition fields are read
            from ``components`` if present, else treated as 0

    Raises:
        PayrollValidationError: negative or fractional amount
    """
    source = additions if additions is not None else components

    gross = to_rupiah(components.gaji_pokok, "gaji_pokok")
    for name in ALLOWANCE_FIELDS:
        gross += to_rupiah(getattr(components, name, 0), name)
    for name in ADDITION_FIELDS:
        gross += to_rupiah(getattr(source, name, 0), name)
    return gross
