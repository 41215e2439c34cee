from decimal import Decimal

import pytest

from portal_payroll.exceptions import PayrollValidationError
from portal_payroll.utils import format_rupiah, get_month_name, round_down_to, round_half_up, to_rupiah


def test_round_half_up_basic():
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(Decimal("230216.6667")) == 230217
    assert round_half_up(Decimal("95595.49")) == 95595


def test_round_down_to_thousands():
    assert round_down_to(Decimal("55252848"), 1000) == 55252000
    assert round_down_to(Decimal("55252000"), 1000) == 55252000
    assert round_down_to(Decimal("1999.9"), 1) == 1999


@pytest.mark.parametrize("value,expected", [(0, 0), ("1000", 1000), (Decimal("2500000"), 2500000), (7.0, 7)])
def test_to_rupiah_accepts_whole_amounts(value, expected):
    assert to_rupiah(value, "gaji_pokok") == expected


@pytest.mark.parametrize("value", [-1, 10.5, "abc", None, True, float("nan")])
def test_to_rupiah_rejects_invalid(value):
    with pytest.raises(PayrollValidationError) as exc:
        to_rupiah(value, "bonus")
    assert exc.value.field == "bonus"


def test_format_rupiah():
    assert format_rupiah(10_000_000) == "Rp 10.000.000"
    assert format_rupiah(0) == "Rp 0"
    assert format_rupiah(-1500) == "-Rp 1.500"


def test_get_month_name():
    assert get_month_name(1) == "Januari"
    assert get_month_name(12) == "Desember"
    assert get_month_name(13) == ""
