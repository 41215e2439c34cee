"""Utility helpers for portal payroll."""

from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any

from portal_payroll.exceptions import PayrollValidationError

__all__ = [
    "round_half_up",
    "round_down_to",
    "to_decimal",
    "to_rupiah",
    "format_rupiah",
    "get_month_name",
    "MONTH_NAMES",
]

MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


def round_half_up(value) -> int:
    """Round value to nearest integer using the HALF_UP rule."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_down_to(value, unit: int) -> int:
    """Round a non-negative amount down to a multiple of ``unit``."""
    if unit <= 1:
        return int(Decimal(value).to_integral_value(rounding=ROUND_DOWN))
    return int(Decimal(value) / unit) * unit


def to_decimal(value: Any, field: str) -> Decimal:
    """Convert a numeric input to Decimal, rejecting anything non-numeric."""
    if isinstance(value, bool) or value is None:
        raise PayrollValidationError(field, f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise PayrollValidationError(field, f"expected a number, got {value!r}")
    if not result.is_finite():
        raise PayrollValidationError(field, f"expected a finite number, got {value!r}")
    return result


def to_rupiah(value: Any, field: str) -> int:
    """
    Validate a monetary input and return it as whole rupiah.

    Rupiah has no minor unit: fractional and negative amounts are rejected.
    """
    amount = to_decimal(value, field)
    if amount < 0:
        raise PayrollValidationError(field, f"must not be negative, got {value!r}")
    if amount != amount.to_integral_value():
        raise PayrollValidationError(field, f"must be a whole rupiah amount, got {value!r}")
    return int(amount)


def format_rupiah(amount) -> str:
    """Format an amount as Indonesian Rupiah, e.g. ``Rp 10.000.000``."""
    value = round_half_up(amount)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def get_month_name(month: int) -> str:
    """Indonesian month name for 1-12, empty string otherwise."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""
