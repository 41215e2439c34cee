import copy
from decimal import Decimal

import pytest

from portal_payroll.config.tax_year import (
    available_tax_years,
    build_config,
    get_tax_year_config,
    load_defaults,
)
from portal_payroll.exceptions import ConfigError, PayrollValidationError


def test_bundled_years():
    assert available_tax_years() == (2021, 2022, 2023, 2024, 2025)


def test_jp_cap_per_year():
    assert get_tax_year_config(2023).jp_max_salary == 9_559_600
    assert get_tax_year_config(2024).jp_max_salary == 10_042_300


def test_newest_year_not_after_period_is_used():
    assert get_tax_year_config(2026).year == 2025
    assert get_tax_year_config(2024).year == 2024


@pytest.mark.parametrize("year", [2020, "2024", 2024.0, None])
def test_unusable_year_rejected(year):
    with pytest.raises(PayrollValidationError) as exc:
        get_tax_year_config(year)
    assert exc.value.field == "period_year"


def test_brackets_changed_in_2022():
    assert get_tax_year_config(2021).tax_brackets[0] == (50_000_000, Decimal("5"))
    assert get_tax_year_config(2022).tax_brackets[0] == (60_000_000, Decimal("5"))
    assert get_tax_year_config(2024).tax_brackets[-1] == (None, Decimal("35"))


@pytest.mark.parametrize(
    "status,amount",
    [("TK/0", 54_000_000), ("TK/3", 67_500_000), ("K/0", 58_500_000), ("K/3", 72_000_000), ("K/I/0", 112_500_000)],
)
def test_ptkp_amounts(config_2024, status, amount):
    assert config_2024.get_ptkp_amount(status) == amount


def test_unknown_ptkp_status(config_2024):
    with pytest.raises(PayrollValidationError) as exc:
        config_2024.get_ptkp_amount("K/4")
    assert exc.value.field == "ptkp_status"


@pytest.mark.parametrize("level", ["0.24", 0.54, Decimal("1.74"), "0.890"])
def test_jkk_risk_level_accepted(config_2024, level):
    assert config_2024.validate_jkk_risk_level(level) in config_2024.jkk_risk_levels


@pytest.mark.parametrize("level", ["0.5", 2, None, "high"])
def test_jkk_risk_level_rejected(config_2024, level):
    with pytest.raises(PayrollValidationError) as exc:
        config_2024.validate_jkk_risk_level(level)
    assert exc.value.field == "jkk_risk_level"


def test_with_overrides_returns_copy(config_2024):
    adjusted = config_2024.with_overrides(jp_max_salary=11_000_000, jkm_percent="0.35")
    assert adjusted.jp_max_salary == 11_000_000
    assert adjusted.jkm_percent == Decimal("0.35")
    assert config_2024.jp_max_salary == 10_042_300
    assert adjusted.year == 2024


def test_with_overrides_rejects_unknown_and_invalid(config_2024):
    with pytest.raises(ConfigError):
        config_2024.with_overrides(ptkp_table={})
    with pytest.raises(ConfigError):
        config_2024.with_overrides(kesehatan_employee_percent=150)
    with pytest.raises(ConfigError):
        config_2024.with_overrides(jp_max_salary="10.5")


def test_build_config_missing_section():
    with pytest.raises(ConfigError):
        build_config(2024, {"bpjs": {}})


def test_build_config_rejects_descending_brackets():
    data = copy.deepcopy(load_defaults()["tax_years"]["2024"])
    data["tax_brackets"][1]["income_to"] = 10
    with pytest.raises(ConfigError):
        build_config(2024, data)


def test_build_config_requires_every_ptkp_status():
    data = copy.deepcopy(load_defaults()["tax_years"]["2024"])
    del data["ptkp"]["K/I/3"]
    with pytest.raises(ConfigError):
        build_config(2024, data)


def test_load_defaults_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_defaults(tmp_path / "missing.json")


def test_as_dict_is_json_friendly(config_2024):
    data = config_2024.as_dict()
    assert data["jp_max_salary"] == 10_042_300
    assert data["jkm_percent"] == "0.3"
    assert data["tax_brackets"][-1]["income_to"] is None
