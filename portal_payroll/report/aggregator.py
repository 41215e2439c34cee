# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Report aggregation over calculated payslips.

Only sums whole-rupiah payslip fields; nothing is recomputed or re-rounded, so
a report total always equals the sum of the payslips it covers.
"""

from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from portal_payroll.constants import RUN_STATUS_PAID
from portal_payroll.models import Employee, PayrollRun, Payslip
from portal_payroll.utils import format_rupiah, get_month_name

BPJS_SCHEMES = ("kesehatan", "jht", "jp")
EMPLOYER_ONLY_SCHEMES = ("jkk", "jkm")


def _sum(payslips: Sequence[Payslip], fieldname: str) -> int:
    return sum(getattr(p, fieldname) for p in payslips)


def _count_employees(payslips: Sequence[Payslip]) -> int:
    return len({p.employee_id for p in payslips})


def _formatted(data: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    for key in keys:
        data[f"{key}_formatted"] = format_rupiah(data[key])
    return data


def _employee_info(employee_id: str, employees: Optional[Mapping[str, Employee]]) -> Dict[str, Any]:
    employee = (employees or {}).get(employee_id)
    return {
        "employee_id": employee_id,
        "employee_number": getattr(employee, "employee_number", None),
        "full_name": getattr(employee, "full_name", None),
    }


def summarize_bpjs(payslips: Sequence[Payslip]) -> Dict[str, Any]:
    """Employee/employer totals per BPJS scheme plus grand totals."""
    summary: Dict[str, Any] = {}
    for scheme in BPJS_SCHEMES:
        employee = _sum(payslips, f"bpjs_{scheme}_employee")
        employer = _sum(payslips, f"bpjs_{scheme}_employer")
        summary[scheme] = _formatted(
            {"employee": employee, "employer": employer, "total": employee + employer},
            "employee", "employer", "total",
        )
    for scheme in EMPLOYER_ONLY_SCHEMES:
        summary[scheme] = _formatted({"employer": _sum(payslips, f"bpjs_{scheme}_employer")}, "employer")

    summary["grand_total"] = _formatted(
        {
            "employee": sum(summary[s]["employee"] for s in BPJS_SCHEMES),
            "employer": sum(summary[s]["employer"] for s in BPJS_SCHEMES + EMPLOYER_ONLY_SCHEMES),
        },
        "employee", "employer",
    )
    return summary


def summarize_payslips(payslips: Iterable[Payslip]) -> Dict[str, Any]:
    """Totals over a set of payslips (one month or a whole year)."""
    payslips = list(payslips)
    bpjs = summarize_bpjs(payslips)
    summary = {
        "total_employees": _count_employees(payslips),
        "total_payslips": len(payslips),
        "total_gross": _sum(payslips, "gross_salary"),
        "total_pph21": _sum(payslips, "pph21"),
        "total_other_deductions": _sum(payslips, "other_deductions"),
        "total_deductions": _sum(payslips, "total_deductions"),
        "total_net": _sum(payslips, "net_salary"),
        "total_bpjs_employee": bpjs["grand_total"]["employee"],
        "total_bpjs_employer": bpjs["grand_total"]["employer"],
        "bpjs": bpjs,
    }
    return _formatted(
        summary,
        "total_gross", "total_pph21", "total_deductions", "total_net",
        "total_bpjs_employee", "total_bpjs_employer",
    )


def _period(month: int, year: int) -> Dict[str, Any]:
    return {"month": month, "year": year, "month_name": get_month_name(month)}


def monthly_pph21_report(
    payslips: Iterable[Payslip],
    month: int,
    year: int,
    employees: Optional[Mapping[str, Employee]] = None,
) -> Dict[str, Any]:
    """PPh 21 withheld per employee for one month (SPT Masa PPh 21 data)."""
    payslips = list(payslips)
    summary = summarize_payslips(payslips)
    rows = []
    for p in payslips:
        row = _employee_info(p.employee_id, employees)
        row.update({"ptkp_status": p.ptkp_status, "gross_salary": p.gross_salary, "pph21": p.pph21})
        rows.append(_formatted(row, "gross_salary", "pph21"))

    return {
        "period": _period(month, year),
        "summary": {
            key: summary[key]
            for key in (
                "total_employees", "total_gross", "total_gross_formatted",
                "total_pph21", "total_pph21_formatted",
            )
        },
        "employees": rows,
    }


def monthly_bpjs_report(
    payslips: Iterable[Payslip],
    month: int,
    year: int,
    employees: Optional[Mapping[str, Employee]] = None,
) -> Dict[str, Any]:
    """BPJS contributions per employee and per scheme for one month."""
    payslips = list(payslips)
    rows = []
    for p in payslips:
        row = _employee_info(p.employee_id, employees)
        row["gross_salary"] = p.gross_salary
        for scheme in BPJS_SCHEMES:
            row[scheme] = {
                "employee": getattr(p, f"bpjs_{scheme}_employee"),
                "employer": getattr(p, f"bpjs_{scheme}_employer"),
            }
        for scheme in EMPLOYER_ONLY_SCHEMES:
            row[scheme] = getattr(p, f"bpjs_{scheme}_employer")
        rows.append(row)

    return {
        "period": _period(month, year),
        "summary": {"total_employees": _count_employees(payslips), **summarize_bpjs(payslips)},
        "employees": rows,
    }


def annual_pph21_summary(
    entries: Iterable[Tuple[PayrollRun, Payslip]],
    year: int,
    employees: Optional[Mapping[str, Employee]] = None,
) -> Dict[str, Any]:
    """
    Per-employee totals for a tax year (Bukti Potong 1721-A1 data).

    Args:
        entries: (payroll run, payslip) pairs; runs of other years are ignored
    """
    per_employee: "OrderedDict[str, List[Tuple[PayrollRun, Payslip]]]" = OrderedDict()
    for run, payslip in entries:
        if run.period_year != year:
            continue
        per_employee.setdefault(payslip.employee_id, []).append((run, payslip))

    rows = []
    for employee_id, items in per_employee.items():
        items.sort(key=lambda item: item[0].period_month)
        slips = [p for _, p in items]
        row = _employee_info(employee_id, employees)
        row.update(
            {
                "ptkp_status": slips[-1].ptkp_status,
                "months_worked": len(slips),
                "total_gross": _sum(slips, "gross_salary"),
                "total_pph21": _sum(slips, "pph21"),
                "total_bpjs_employee": sum(p.bpjs_employee_total for p in slips),
                "monthly_breakdown": [
                    {"month": run.period_month, "gross_salary": p.gross_salary, "pph21": p.pph21}
                    for run, p in items
                ],
            }
        )
        rows.append(_formatted(row, "total_gross", "total_pph21", "total_bpjs_employee"))

    summary = {
        "total_employees": len(rows),
        "total_gross": sum(r["total_gross"] for r in rows),
        "total_pph21": sum(r["total_pph21"] for r in rows),
    }
    return {
        "year": year,
        "summary": _formatted(summary, "total_gross", "total_pph21"),
        "employees": rows,
    }


RUN_TOTAL_FIELDS = (
    "total_gross",
    "total_deductions",
    "total_net",
    "total_pph21",
    "total_bpjs_employee",
    "total_bpjs_employer",
)


def payroll_summary(runs: Iterable[PayrollRun], year: int) -> Dict[str, Any]:
    """Month-by-month run totals for a year plus annual totals."""
    runs = sorted((r for r in runs if r.period_year == year), key=lambda r: r.period_month)

    monthly = []
    for run in runs:
        row = {
            "month": run.period_month,
            "month_name": get_month_name(run.period_month),
            "status": run.status,
        }
        row.update({key: getattr(run, key) for key in RUN_TOTAL_FIELDS})
        monthly.append(_formatted(row, *RUN_TOTAL_FIELDS))

    annual = {key: sum(getattr(r, key) for r in runs) for key in RUN_TOTAL_FIELDS}
    annual["payroll_runs_completed"] = sum(1 for r in runs if r.status == RUN_STATUS_PAID)

    return {
        "year": year,
        "monthly_data": monthly,
        "annual_totals": _formatted(annual, *RUN_TOTAL_FIELDS),
    }
