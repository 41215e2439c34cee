from .aggregator import (
    annual_pph21_summary,
    monthly_bpjs_report,
    monthly_pph21_report,
    payroll_summary,
    summarize_bpjs,
    summarize_payslips,
)
from .print_context import get_payslip_print_context

__all__ = [
    "annual_pph21_summary",
    "monthly_bpjs_report",
    "monthly_pph21_report",
    "payroll_summary",
    "summarize_bpjs",
    "summarize_payslips",
    "get_payslip_print_context",
]
