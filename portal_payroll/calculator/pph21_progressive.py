# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
PPh 21 monthly withholding, progressive (Pasal 17) method.

    bruto bulanan
    - biaya jabatan (5%, max 500.000/bulan)
    - iuran BPJS karyawan (Kesehatan + JHT + JP)
    = netto bulanan  x 12  = netto setahun
    - PTKP setahun
    = PKP (dibulatkan ke bawah ribuan penuh)
    -> tarif progresif -> PPh setahun / 12 = PPh 21 bulanan
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from portal_payroll.config.tax_year import TaxYearConfig
from portal_payroll.constants import MONTHS_PER_YEAR
from portal_payroll.frappe_helpers import get_logger
from portal_payroll.utils import round_down_to, round_half_up, to_decimal

logger = get_logger(__name__)

HUNDRED = Decimal(100)


@dataclass(frozen=True)
class PPh21Result:
    bruto_monthly: int
    biaya_jabatan: Decimal
    bpjs_deductible: int
    netto_monthly: Decimal
    netto_annual: Decimal
    ptkp_annual: int
    pkp_annual: int
    pph21_annual: Decimal
    pph21_monthly: int
    ptkp_status: str
    tax_year: int

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("biaya_jabatan", "netto_monthly", "netto_annual", "pph21_annual"):
            data[key] = str(data[key])
        return data


def calculate_biaya_jabatan(gross_monthly, config: TaxYearConfig) -> Decimal:
    """Occupational cost deduction: biaya_jabatan_percent of gross, capped per month."""
    gross = to_decimal(gross_monthly, "gross_salary")
    if gross <= 0:
        return Decimal(0)
    return min(gross * config.biaya_jabatan_percent / HUNDRED, config.biaya_jabatan_cap_monthly)


def calculate_pkp_annual(netto_annual, ptkp_annual: int, rounding: int = 1000) -> int:
    """
    PKP tahunan = (netto setahun - PTKP setahun), dibulatkan ke bawah ribuan penuh.
    Never negative.
    """
    pkp = Decimal(netto_annual) - ptkp_annual
    if pkp <= 0:
        return 0
    return round_down_to(pkp, rounding)


def calculate_progressive_tax(pkp_annual, config: TaxYearConfig) -> Tuple[Decimal, List[Dict[str, Any]]]:
    """
    Hitung PPh 21 setahun dengan metode progresif (slab).

    Returns:
        (annual tax, per-layer breakdown)
    """
    pajak = Decimal(0)
    layers = []
    pkp_left = Decimal(pkp_annual)
    lower_limit = 0

    for batas, rate in config.tax_brackets:
        if pkp_left <= 0:
            break
        if batas is None:
            lapisan = pkp_left
        else:
            lapisan = min(pkp_left, Decimal(batas - lower_limit))
        tax = lapisan * rate / HUNDRED
        pajak += tax
        layers.append({"from": lower_limit, "to": batas, "rate": str(rate), "taxable": int(lapisan), "tax": str(tax)})
        pkp_left -= lapisan
        if batas is not None:
            lower_limit = batas

    return pajak, layers


def calculate_pph21(
    gross_salary: int,
    bpjs_employee_deductions: int,
    ptkp_status: str,
    config: TaxYearConfig,
) -> PPh21Result:
    """
    Calculate the monthly PPh 21 withholding for one employee.

    Args:
        gross_salary: Monthly gross salary in rupiah
        bpjs_employee_deductions: Kesehatan + JHT + JP employee shares for the month
        ptkp_status: One of the 12 PTKP status codes
        config: Tax year configuration (PTKP table, brackets, biaya jabatan)

    Raises:
        PayrollValidationError: unknown PTKP status
    """
    ptkp_annual = config.get_ptkp_amount(ptkp_status)

    gross = Decimal(gross_salary)
    biaya_jabatan = calculate_biaya_jabatan(gross, config)
    netto_monthly = gross - biaya_jabatan - bpjs_employee_deductions
    netto_annual = netto_monthly * MONTHS_PER_YEAR

    pkp_annual = calculate_pkp_annual(netto_annual, ptkp_annual, config.pkp_rounding)
    if pkp_annual > 0:
        pph21_annual, _ = calculate_progressive_tax(pkp_annual, config)
    else:
        pph21_annual = Decimal(0)

    pph21_monthly = round_half_up(pph21_annual / MONTHS_PER_YEAR)

    logger.debug(
        f"PPh21 {ptkp_status} ({config.year}): bruto={gross_salary} netto_annual={netto_annual} "
        f"ptkp={ptkp_annual} pkp={pkp_annual} annual={pph21_annual} monthly={pph21_monthly}"
    )

    return PPh21Result(
        bruto_monthly=int(gross_salary),
        biaya_jabatan=biaya_jabatan,
        bpjs_deductible=int(bpjs_employee_deductions),
        netto_monthly=netto_monthly,
        netto_annual=netto_annual,
        ptkp_annual=ptkp_annual,
        pkp_annual=pkp_annual,
        pph21_annual=pph21_annual,
        pph21_monthly=pph21_monthly,
        ptkp_status=ptkp_status,
        tax_year=config.year,
    )
