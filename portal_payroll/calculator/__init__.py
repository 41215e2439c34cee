from .gross import calculate_gross_salary
from .bpjs_calculator import BPJSContributions, calculate_bpjs, calculate_bpjs_contributions
from .pph21_progressive import (
    PPh21Result,
    calculate_biaya_jabatan,
    calculate_pph21,
    calculate_progressive_tax,
)
from .payslip import PayrollResult, build_payslip, calculate_payslip, regenerate_payslip

__all__ = [
    "calculate_gross_salary",
    "BPJSContributions",
    "calculate_bpjs",
    "calculate_bpjs_contributions",
    "PPh21Result",
    "calculate_biaya_jabatan",
    "calculate_pph21",
    "calculate_progressive_tax",
    "PayrollResult",
    "build_payslip",
    "calculate_payslip",
    "regenerate_payslip",
]
