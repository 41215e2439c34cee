import types

import pytest

frappe = pytest.importorskip("frappe")

from portal_payroll.override.salary_slip import CustomSalarySlip  # noqa: E402


def test_negative_net_pay_clamped_after_totals():
    slip = types.SimpleNamespace(net_pay=-250_000, base_net_pay=-250_000, rounded_total=-250_000)

    CustomSalarySlip._clamp_net_pay(slip)

    assert slip.net_pay == 0
    assert slip.base_net_pay == 0
    assert slip.rounded_total == 0


def test_positive_net_pay_untouched():
    slip = types.SimpleNamespace(net_pay=9_370_000, base_net_pay=9_370_000)

    CustomSalarySlip._clamp_net_pay(slip)

    assert slip.net_pay == 9_370_000
    assert not hasattr(slip, "rounded_total")
