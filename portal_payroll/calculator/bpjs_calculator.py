# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
BPJS calculator module - satu-satunya kalkulator BPJS.

Kesehatan and JP are computed on a salary base capped at their own statutory
maximum; JHT, JKK and JKM use the uncapped gross. JKK and JKM are paid by the
employer only. Every amount is rounded half-up to whole rupiah on its own.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Dict, Optional, Union

from portal_payroll.config.tax_year import TaxYearConfig
from portal_payroll.frappe_helpers import get_logger
from portal_payroll.utils import round_half_up, to_decimal

logger = get_logger(__name__)

# Define public API
__all__ = ["BPJSContributions", "calculate_bpjs", "calculate_bpjs_contributions"]

HUNDRED = Decimal(100)


@dataclass(frozen=True)
class BPJSContributions:
    kesehatan_employee: int = 0
    kesehatan_employer: int = 0
    jht_employee: int = 0
    jht_employer: int = 0
    jp_employee: int = 0
    jp_employer: int = 0
    jkk_employer: int = 0
    jkm_employer: int = 0

    @property
    def employee_total(self) -> int:
        return self.kesehatan_employee + self.jht_employee + self.jp_employee

    @property
    def employer_total(self) -> int:
        return (
            self.kesehatan_employer
            + self.jht_employer
            + self.jp_employer
            + self.jkk_employer
            + self.jkm_employer
        )

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def calculate_bpjs(
    base_salary: Union[int, Decimal],
    rate_percent: Union[int, Decimal],
    *,
    max_salary: Optional[int] = None,
) -> int:
    """
    Calculate one BPJS amount from a salary base and a rate.

    Args:
        base_salary: The base salary amount for calculation
        rate_percent: The BPJS rate percentage (e.g., 1.0 for 1%)
        max_salary: Optional maximum salary cap for the calculation

    Returns:
        int: The calculated BPJS amount as a rounded integer (IDR has no cents)
    """
    base = to_decimal(base_salary, "base_salary")
    if base <= 0:
        return 0

    if max_salary is not None and max_salary > 0 and base > max_salary:
        base = Decimal(max_salary)

    return round_half_up(base * to_decimal(rate_percent, "rate_percent") / HUNDRED)


def calculate_bpjs_contributions(
    gross_salary: int,
    jkk_risk_level,
    config: TaxYearConfig,
) -> BPJSContributions:
    """
    Compute all employee and employer BPJS amounts for one month.

    Args:
        gross_salary: Monthly gross salary in rupiah
        jkk_risk_level: Company JKK rate in percent, one of the configured levels
        config: Tax year configuration supplying rates and caps

    Raises:
        PayrollValidationError: jkk_risk_level is not an enumerated risk level
    """
    jkk_rate = config.validate_jkk_risk_level(jkk_risk_level)

    if gross_salary <= 0:
        logger.debug("Gross salary is zero, all BPJS contributions are zero")
        return BPJSContributions()

    kes_cap = config.kesehatan_max_salary
    jp_cap = config.jp_max_salary

    result = BPJSContributions(
        kesehatan_employee=calculate_bpjs(gross_salary, config.kesehatan_employee_percent, max_salary=kes_cap),
        kesehatan_employer=calculate_bpjs(gross_salary, config.kesehatan_employer_percent, max_salary=kes_cap),
        jht_employee=calculate_bpjs(gross_salary, config.jht_employee_percent),
        jht_employer=calculate_bpjs(gross_salary, config.jht_employer_percent),
        jp_employee=calculate_bpjs(gross_salary, config.jp_employee_percent, max_salary=jp_cap),
        jp_employer=calculate_bpjs(gross_salary, config.jp_employer_percent, max_salary=jp_cap),
        jkk_employer=calculate_bpjs(gross_salary, jkk_rate),
        jkm_employer=calculate_bpjs(gross_salary, config.jkm_percent),
    )

    logger.debug(
        f"BPJS for gross {gross_salary} ({config.year}): "
        f"employee={result.employee_total} employer={result.employer_total}"
    )
    return result
