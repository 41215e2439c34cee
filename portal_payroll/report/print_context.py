# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Display values for the payslip print format. Formatting only."""

from typing import Any, Dict, Optional

from portal_payroll.models import Payslip
from portal_payroll.utils import format_rupiah, get_month_name

EARNING_LABELS = (
    ("gaji_pokok", "Gaji Pokok"),
    ("tunjangan_transport", "Tunjangan Transport"),
    ("tunjangan_makan", "Tunjangan Makan"),
    ("tunjangan_komunikasi", "Tunjangan Komunikasi"),
    ("tunjangan_jabatan", "Tunjangan Jabatan"),
    ("tunjangan_lainnya", "Tunjangan Lainnya"),
    ("bonus", "Bonus"),
    ("overtime", "Lembur"),
    ("reimbursements", "Reimbursement"),
)

DEDUCTION_LABELS = (
    ("bpjs_kesehatan_employee", "BPJS Kesehatan"),
    ("bpjs_jht_employee", "BPJS JHT"),
    ("bpjs_jp_employee", "BPJS JP"),
    ("pph21", "PPh 21"),
    ("other_deductions", "Potongan Lainnya"),
)

EMPLOYER_LABELS = (
    ("bpjs_kesehatan_employer", "BPJS Kesehatan"),
    ("bpjs_jht_employer", "JHT"),
    ("bpjs_jp_employer", "JP"),
    ("bpjs_jkk_employer", "JKK"),
    ("bpjs_jkm_employer", "JKM"),
)


def _lines(payslip: Payslip, labels, always=()):
    lines = []
    for fieldname, label in labels:
        amount = getattr(payslip, fieldname)
        # zero optional lines are left off the slip
        if amount or fieldname in always:
            lines.append({"label": label, "amount": amount, "formatted": format_rupiah(amount)})
    return lines


def get_payslip_print_context(
    payslip: Payslip,
    period_month: int,
    period_year: int,
    employee_name: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "employee_id": payslip.employee_id,
        "employee_name": employee_name,
        "ptkp_status": payslip.ptkp_status,
        "period": f"{get_month_name(period_month)} {period_year}",
        "earnings": _lines(payslip, EARNING_LABELS, always=("gaji_pokok",)),
        "deductions": _lines(
            payslip, DEDUCTION_LABELS,
            always=("bpjs_kesehatan_employee", "bpjs_jht_employee", "bpjs_jp_employee", "pph21"),
        ),
        "gross_salary": format_rupiah(payslip.gross_salary),
        "total_deductions": format_rupiah(payslip.total_deductions),
        "net_salary": format_rupiah(payslip.net_salary),
        "deductions_exceed_gross": payslip.deductions_exceed_gross,
        "employer_contributions": _lines(payslip, EMPLOYER_LABELS, always=tuple(f for f, _ in EMPLOYER_LABELS)),
        "employer_contributions_total": format_rupiah(payslip.bpjs_employer_total),
    }
