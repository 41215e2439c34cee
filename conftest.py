import os
import sys
from datetime import date

import pytest

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from portal_payroll.config.tax_year import get_tax_year_config  # noqa: E402
from portal_payroll.models import Employee, PayrollInput, PayrollRun, SalaryComponents  # noqa: E402


@pytest.fixture
def config_2024():
    return get_tax_year_config(2024)


@pytest.fixture
def config_2023():
    return get_tax_year_config(2023)


@pytest.fixture
def make_input():
    def _make(gaji_pokok=10_000_000, ptkp_status="TK/0", jkk_risk_level="0.24", **kwargs):
        return PayrollInput(
            gaji_pokok=gaji_pokok,
            ptkp_status=ptkp_status,
            jkk_risk_level=jkk_risk_level,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_employee():
    def _make(employee_id, gaji_pokok=10_000_000, ptkp_status="TK/0", effective=date(2024, 1, 1), **kwargs):
        salary = SalaryComponents(employee_id=employee_id, gaji_pokok=gaji_pokok, effective_date=effective)
        return Employee(employee_id=employee_id, ptkp_status=ptkp_status, salary_history=(salary,), **kwargs)

    return _make


@pytest.fixture
def draft_run():
    return PayrollRun(run_id="RUN-2024-03", period_month=3, period_year=2024)
